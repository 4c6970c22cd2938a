"""Service layer exports.

Responsibilities:
 - Theme configuration record, validation and derived CSS/YAML output
 - Content section schema (hero / services / portfolio)
 - Draft persistence for unsaved edits
 - EventBus publish/subscribe core
 - ThemeSession editing context (dirty tracking, preview, save through a writer)
"""

from .event_bus import EventBus, ThemeEvent  # noqa: F401
from .theme_config import (  # noqa: F401
    DEFAULT_THEME,
    ThemeConfig,
    ThemeConfigError,
    load_theme_config,
    validate_theme_payload,
)
from .content_schema import ContentValidation, parse_content  # noqa: F401
from .draft_store import JsonDraftStore, MemoryDraftStore  # noqa: F401
from .theme_session import ThemeSession, ThemeSessionError, SessionClosedError  # noqa: F401

__all__ = [
    "EventBus",
    "ThemeEvent",
    "DEFAULT_THEME",
    "ThemeConfig",
    "ThemeConfigError",
    "load_theme_config",
    "validate_theme_payload",
    "ContentValidation",
    "parse_content",
    "JsonDraftStore",
    "MemoryDraftStore",
    "ThemeSession",
    "ThemeSessionError",
    "SessionClosedError",
]
