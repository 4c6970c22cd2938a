"""Global configuration and constants for the theme tooling."""

from __future__ import annotations

import os
from typing import Final

# Jekyll site configuration holding the `theme:` section
CONFIG_PATH: Final = os.environ.get("ONBOARD_CONFIG_PATH", "_config.yml")

# Editor drafts (one JSON file per draft key)
DRAFT_DIR: Final = os.environ.get("ONBOARD_DRAFT_DIR", os.path.join(".onboard", "drafts"))
DRAFT_TTL_SECONDS: Final = int(os.environ.get("ONBOARD_DRAFT_TTL", str(24 * 60 * 60)))

LOG_LEVEL: Final = os.environ.get("ONBOARD_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT: Final = "%(asctime)s %(levelname)s %(name)s: %(message)s"
