"""Draft persistence for in-progress editor state.

Keeps unsaved theme/content edits across editor restarts. Each draft key is
stored as its own JSON document ``{"data": ..., "timestamp": ..., "expires": ...}``
and expires after a TTL (24 hours by default).

Design principles:
- Small surface: save / load / clear / clear_all behind the `DraftStore` protocol.
- Graceful fallback: missing, expired or corrupt drafts load as None instead of raising.
- Writes go through a temp file + replace so a crash never leaves half a draft.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Callable, Dict, Protocol

from onboard.config import settings

__all__ = [
    "DRAFT_KEYS",
    "DraftStore",
    "JsonDraftStore",
    "MemoryDraftStore",
]

_logger = logging.getLogger(__name__)

DRAFT_KEYS: tuple[str, ...] = ("theme", "hero", "services", "portfolio")


def _check_key(key: str) -> None:
    if key not in DRAFT_KEYS:
        raise KeyError(f"Unknown draft key: {key!r}")


class DraftStore(Protocol):
    def save(self, key: str, data: Any) -> None: ...

    def load(self, key: str) -> Any | None: ...

    def clear(self, key: str) -> None: ...


class JsonDraftStore:
    """File-backed drafts under ``base_dir`` (one ``<key>.json`` per draft)."""

    def __init__(
        self,
        base_dir: str | Path | None = None,
        *,
        ttl_seconds: int = settings.DRAFT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.base_dir = Path(base_dir) if base_dir else Path(settings.DRAFT_DIR)
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def _path(self, key: str) -> Path:
        _check_key(key)
        return self.base_dir / f"{key}.json"

    def save(self, key: str, data: Any) -> None:
        path = self._path(key)
        now = self._clock()
        envelope = {"data": data, "timestamp": now, "expires": now + self.ttl_seconds}
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        tmp.write_text(json.dumps(envelope, indent=2, ensure_ascii=False), encoding="utf-8")
        tmp.replace(path)
        _logger.debug("Saved %s draft to %s", key, path)

    def load(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            envelope = json.loads(path.read_text(encoding="utf-8"))
            expires = float(envelope["expires"])
            data = envelope["data"]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            _logger.warning("Ignoring unreadable %s draft (%s): %s", key, path, exc)
            return None
        if self._clock() > expires:
            _logger.info("Discarding expired %s draft", key)
            path.unlink(missing_ok=True)
            return None
        return data

    def clear(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def clear_all(self) -> None:
        for key in DRAFT_KEYS:
            self.clear(key)


class MemoryDraftStore:
    """In-process drafts without expiry."""

    def __init__(self) -> None:
        self._drafts: Dict[str, str] = {}

    def save(self, key: str, data: Any) -> None:
        _check_key(key)
        # Serialize so stored drafts are detached from caller mutations
        self._drafts[key] = json.dumps(data)

    def load(self, key: str) -> Any | None:
        _check_key(key)
        raw = self._drafts.get(key)
        return json.loads(raw) if raw is not None else None

    def clear(self, key: str) -> None:
        _check_key(key)
        self._drafts.pop(key, None)

    def clear_all(self) -> None:
        self._drafts.clear()
