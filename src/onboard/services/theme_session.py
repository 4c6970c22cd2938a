"""Theme editing session.

Explicit context object for one editing pass over the site theme. It holds
the original and current `ThemeConfig`, tracks dirty state, keeps a draft of
unsaved edits and publishes change events for whatever renders the preview.

Lifecycle::

    with ThemeSession.create(load_theme_config(path), writer=my_writer) as session:
        session.set_color_from_hex("brand_primary", "#3b82f6")
        preview = session.preview()
        session.save()

Persisting to _config.yml is delegated to the injected `ThemeWriter`; the
session never writes site files itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol

from onboard.design import (
    ColorPalette,
    ColorValidation,
    HsvColor,
    OklchColor,
    ShadeContrast,
    from_hex,
    generate_palette,
    hsv_to_oklch,
    normalize_hex,
    round_oklch,
    validate,
    validate_palette_contrast,
)
from onboard.design.constants import NEUTRAL_PALETTES, THEME_MODES

from .draft_store import DraftStore
from .event_bus import EventBus, ThemeEvent
from .theme_config import (
    COLOR_KEYS,
    ThemeConfig,
    generate_css_variables,
    validate_theme_section,
)

__all__ = [
    "ThemeWriter",
    "ThemePreview",
    "ThemeSession",
    "ThemeSessionError",
    "SessionClosedError",
]

_logger = logging.getLogger(__name__)

_DRAFT_KEY = "theme"


def _advisories_for(theme: ThemeConfig) -> Dict[str, List[str]]:
    found: Dict[str, List[str]] = {}
    for key in COLOR_KEYS:
        color = getattr(theme, key)
        if color is None:
            continue
        messages = [issue.message for issue in validate(color).advisories]
        if messages:
            found[key] = messages
    return found


class ThemeSessionError(RuntimeError):
    """Raised when an update is rejected or the session cannot save."""

    def __init__(self, message: str, validation: ColorValidation | None = None) -> None:
        super().__init__(message)
        self.validation = validation


class SessionClosedError(ThemeSessionError):
    """Raised when a disposed session is used."""


class ThemeWriter(Protocol):
    def __call__(self, theme: ThemeConfig) -> None: ...  # pragma: no cover - structural


@dataclass(frozen=True)
class ThemePreview:
    primary: ColorPalette
    secondary: Optional[ColorPalette]
    css_variables: Dict[str, str]
    primary_contrast: List[ShadeContrast]


class ThemeSession:
    def __init__(
        self,
        initial: ThemeConfig,
        *,
        drafts: DraftStore | None = None,
        bus: EventBus | None = None,
        writer: ThemeWriter | None = None,
    ) -> None:
        self._original = initial
        self._current = initial
        self._drafts = drafts
        self._writer = writer
        self.bus = bus or EventBus()
        self._dirty = False
        self._closed = False
        self.advisories: Dict[str, List[str]] = _advisories_for(initial)

    @classmethod
    def create(
        cls,
        initial: ThemeConfig,
        *,
        drafts: DraftStore | None = None,
        bus: EventBus | None = None,
        writer: ThemeWriter | None = None,
        restore_draft: bool = False,
    ) -> "ThemeSession":
        session = cls(initial, drafts=drafts, bus=bus, writer=writer)
        if restore_draft:
            session._restore_draft()
        return session

    # Lifecycle --------------------------------------------------------
    def dispose(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.bus.publish(ThemeEvent.SESSION_DISPOSED, {"dirty": self._dirty})

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "ThemeSession":
        self._ensure_open()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.dispose()

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError("Theme session has been disposed")

    # State ------------------------------------------------------------
    @property
    def theme(self) -> ThemeConfig:
        return self._current

    @property
    def original(self) -> ThemeConfig:
        return self._original

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def _restore_draft(self) -> None:
        if self._drafts is None:
            return
        data = self._drafts.load(_DRAFT_KEY)
        if data is None:
            return
        result = validate_theme_section(data)
        if not result.ok or result.config is None:
            _logger.warning("Discarding invalid theme draft: %s", result.errors)
            self._drafts.clear(_DRAFT_KEY)
            return
        self._current = result.config
        self.advisories = _advisories_for(self._current)
        self._dirty = self._current != self._original
        _logger.info("Restored theme draft (dirty=%s)", self._dirty)

    def _set_dirty(self, dirty: bool) -> None:
        if dirty != self._dirty:
            self._dirty = dirty
            self.bus.publish(ThemeEvent.CONFIG_DIRTY, {"is_dirty": dirty})

    # Updates ----------------------------------------------------------
    def _validate_value(self, key: str, value: Any) -> Optional[ColorValidation]:
        """Raise ThemeSessionError for a rejected value; no state is touched."""
        if key in COLOR_KEYS:
            if value is None:
                if key == "brand_primary":
                    raise ThemeSessionError("brand_primary cannot be removed")
                return None
            if not isinstance(value, OklchColor):
                raise ThemeSessionError(f"{key} must be an OklchColor")
            outcome = validate(value)
            if not outcome.valid:
                raise ThemeSessionError(
                    f"{key} rejected: {'; '.join(outcome.errors)}", validation=outcome
                )
            return outcome
        if key == "neutral":
            if value not in NEUTRAL_PALETTES:
                raise ThemeSessionError(f"neutral must be one of: {', '.join(NEUTRAL_PALETTES)}")
        elif key == "mode":
            if value not in THEME_MODES:
                raise ThemeSessionError(f"mode must be one of: {', '.join(THEME_MODES)}")
        else:
            raise ThemeSessionError(f"Unknown theme key: {key!r}")
        return None

    def _note_advisories(self, key: str, outcome: Optional[ColorValidation]) -> None:
        if key not in COLOR_KEYS:
            return
        if outcome is None or not outcome.advisories:
            self.advisories.pop(key, None)
            return
        messages = [i.message for i in outcome.advisories]
        self.advisories[key] = messages
        _logger.warning("%s advisory: %s", key, "; ".join(messages))
        self.bus.publish(ThemeEvent.COLOR_ADVISORY, {"key": key, "messages": messages})

    def update(self, key: str, value: Any) -> ThemeConfig:
        """Change one theme field; returns the new current theme."""
        self._ensure_open()
        outcome = self._validate_value(key, value)
        self._note_advisories(key, outcome)
        previous = getattr(self._current, key)
        if previous == value:
            return self._current
        self._current = self._current.replace(**{key: value})
        if self._drafts is not None:
            self._drafts.save(_DRAFT_KEY, self._current.to_dict())
        self.bus.publish(
            ThemeEvent.CONFIG_CHANGE,
            {"key": key, "value": value, "previous": previous, "theme": self._current},
        )
        self._set_dirty(self._current != self._original)
        return self._current

    def update_many(self, updates: Mapping[str, Any]) -> ThemeConfig:
        # Every value is checked before any is applied
        self._ensure_open()
        for key, value in updates.items():
            self._validate_value(key, value)
        for key, value in updates.items():
            self.update(key, value)
        return self._current

    def set_color_from_hex(self, key: str, value: str) -> ThemeConfig:
        return self.update(key, round_oklch(from_hex(normalize_hex(value))))

    def set_color_from_hsv(self, key: str, hsv: HsvColor) -> ThemeConfig:
        return self.update(key, round_oklch(hsv_to_oklch(hsv)))

    # Derived data -----------------------------------------------------
    def preview(self) -> ThemePreview:
        self._ensure_open()
        theme = self._current
        return ThemePreview(
            primary=generate_palette(theme.brand_primary),
            secondary=generate_palette(theme.brand_secondary) if theme.brand_secondary else None,
            css_variables=generate_css_variables(theme),
            primary_contrast=validate_palette_contrast(theme.brand_primary),
        )

    # Persistence ------------------------------------------------------
    def save(self) -> bool:
        self._ensure_open()
        if not self._dirty:
            _logger.info("No theme changes to save")
            return True
        if self._writer is None:
            raise ThemeSessionError("No theme writer configured for this session")
        self.bus.publish(ThemeEvent.CONFIG_SAVING, None)
        try:
            self._writer(self._current)
        except Exception as exc:  # noqa: BLE001 - writer is an external collaborator
            _logger.exception("Failed to save theme configuration")
            self.bus.publish(ThemeEvent.CONFIG_ERROR, {"error": exc, "operation": "save"})
            return False
        self._original = self._current
        if self._drafts is not None:
            self._drafts.clear(_DRAFT_KEY)
        self.bus.publish(ThemeEvent.CONFIG_SAVED, {"theme": self._current})
        self._set_dirty(False)
        return True

    def reset(self) -> ThemeConfig:
        self._ensure_open()
        self._current = self._original
        self.advisories = _advisories_for(self._current)
        if self._drafts is not None:
            self._drafts.clear(_DRAFT_KEY)
        self.bus.publish(ThemeEvent.CONFIG_RESET, {"theme": self._current})
        self._set_dirty(False)
        return self._current
