import pytest

from onboard.design import HsvColor, OklchColor, RgbColor, to_hex, to_rgb
from onboard.services.draft_store import MemoryDraftStore
from onboard.services.event_bus import EventBus, ThemeEvent
from onboard.services.theme_config import DEFAULT_THEME, ThemeConfig
from onboard.services.theme_session import (
    SessionClosedError,
    ThemePreview,
    ThemeSession,
    ThemeSessionError,
)


class RecordingWriter:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.saved: list[ThemeConfig] = []

    def __call__(self, theme: ThemeConfig) -> None:
        if self.fail:
            raise OSError("disk full")
        self.saved.append(theme)


def _record(bus: EventBus, *events: ThemeEvent) -> list:
    seen: list = []
    for event in events:
        bus.subscribe(event, lambda evt: seen.append((evt.name, evt.payload)))
    return seen


def test_update_marks_dirty_and_publishes():
    bus = EventBus()
    seen = _record(bus, ThemeEvent.CONFIG_CHANGE, ThemeEvent.CONFIG_DIRTY)
    session = ThemeSession.create(DEFAULT_THEME, bus=bus)
    assert not session.is_dirty
    session.update("mode", "dark")
    assert session.is_dirty
    assert session.theme.mode == "dark"
    assert session.original == DEFAULT_THEME
    assert [name for name, _ in seen] == ["config_change", "config_dirty"]
    assert seen[0][1]["previous"] == "auto"
    assert seen[1][1] == {"is_dirty": True}


def test_reverting_by_hand_clears_dirty():
    session = ThemeSession.create(DEFAULT_THEME)
    session.update("neutral", "stone")
    session.update("neutral", "slate")
    assert not session.is_dirty


def test_same_value_is_a_no_op():
    bus = EventBus()
    seen = _record(bus, ThemeEvent.CONFIG_CHANGE)
    session = ThemeSession.create(DEFAULT_THEME, bus=bus)
    session.update("mode", "auto")
    assert seen == []


def test_out_of_range_color_rejected_with_validation():
    session = ThemeSession.create(DEFAULT_THEME)
    with pytest.raises(ThemeSessionError) as excinfo:
        session.update("brand_primary", OklchColor(150, 0.18, 262))
    assert excinfo.value.validation is not None
    assert not excinfo.value.validation.valid
    assert session.theme == DEFAULT_THEME
    assert not session.is_dirty


def test_invalid_enum_and_unknown_keys_rejected():
    session = ThemeSession.create(DEFAULT_THEME)
    with pytest.raises(ThemeSessionError):
        session.update("mode", "sepia")
    with pytest.raises(ThemeSessionError):
        session.update("font", "serif")
    with pytest.raises(ThemeSessionError):
        session.update("brand_primary", None)


def test_advisory_is_kept_and_published():
    bus = EventBus()
    seen = _record(bus, ThemeEvent.COLOR_ADVISORY)
    session = ThemeSession.create(DEFAULT_THEME, bus=bus)
    session.update("brand_secondary", OklchColor(10, 0.35, 0))
    assert session.theme.brand_secondary == OklchColor(10, 0.35, 0)
    assert session.advisories["brand_secondary"]
    assert seen[0][1]["key"] == "brand_secondary"
    session.update("brand_secondary", OklchColor(50, 0.1, 0))
    assert "brand_secondary" not in session.advisories


def test_update_many_is_all_or_nothing():
    session = ThemeSession.create(DEFAULT_THEME)
    with pytest.raises(ThemeSessionError):
        session.update_many({"mode": "dark", "brand_primary": OklchColor(60, 0.9, 262)})
    assert session.theme == DEFAULT_THEME
    drafts = MemoryDraftStore()
    bus = EventBus()
    seen = _record(bus, ThemeEvent.CONFIG_CHANGE)
    session = ThemeSession.create(DEFAULT_THEME, drafts=drafts, bus=bus)
    with pytest.raises(ThemeSessionError):
        session.update_many({"brand_primary": OklchColor(50, 0.1, 10), "mode": "bogus"})
    assert session.theme == DEFAULT_THEME
    assert not session.is_dirty
    assert seen == []
    assert drafts.load("theme") is None
    session.update_many({"mode": "dark", "neutral": "zinc"})
    assert (session.theme.mode, session.theme.neutral) == ("dark", "zinc")


def _close(actual: RgbColor, expected: RgbColor) -> bool:
    return all(abs(a - b) <= 1 for a, b in zip(actual.as_tuple(), expected.as_tuple()))


def test_set_color_from_hex_and_hsv():
    session = ThemeSession.create(DEFAULT_THEME)
    session.set_color_from_hex("brand_primary", "#3B82F6")
    # stored at display precision, so the hex may drift by one step per channel
    assert _close(to_rgb(session.theme.brand_primary), RgbColor(59, 130, 246))
    session.set_color_from_hsv("brand_secondary", HsvColor(210, 50, 80))
    secondary = session.theme.brand_secondary
    assert _close(to_rgb(secondary), RgbColor(102, 153, 204))
    assert secondary.l == round(secondary.l, 1)
    assert secondary.c == round(secondary.c, 3)


def test_preview_contents():
    session = ThemeSession.create(DEFAULT_THEME)
    preview = session.preview()
    assert isinstance(preview, ThemePreview)
    assert preview.secondary is None
    assert preview.primary[500] == to_hex(DEFAULT_THEME.brand_primary)
    assert preview.css_variables["--color-primary-500"] == preview.primary[500]
    assert len(preview.primary_contrast) == 10


def test_drafts_saved_on_change_and_cleared_on_save():
    drafts = MemoryDraftStore()
    writer = RecordingWriter()
    session = ThemeSession.create(DEFAULT_THEME, drafts=drafts, writer=writer)
    session.update("mode", "light")
    assert drafts.load("theme")["mode"] == "light"
    assert session.save()
    assert drafts.load("theme") is None
    assert writer.saved == [DEFAULT_THEME.replace(mode="light")]
    assert session.original.mode == "light"
    assert not session.is_dirty


def test_save_events_in_order():
    bus = EventBus()
    seen = _record(bus, ThemeEvent.CONFIG_SAVING, ThemeEvent.CONFIG_SAVED, ThemeEvent.CONFIG_DIRTY)
    session = ThemeSession.create(DEFAULT_THEME, bus=bus, writer=RecordingWriter())
    session.update("mode", "dark")
    session.save()
    assert [name for name, _ in seen] == [
        "config_dirty",
        "config_saving",
        "config_saved",
        "config_dirty",
    ]


def test_save_when_clean_skips_writer():
    writer = RecordingWriter()
    session = ThemeSession.create(DEFAULT_THEME, writer=writer)
    assert session.save()
    assert writer.saved == []


def test_save_without_writer_raises():
    session = ThemeSession.create(DEFAULT_THEME)
    session.update("mode", "dark")
    with pytest.raises(ThemeSessionError):
        session.save()


def test_writer_failure_publishes_error_and_keeps_changes():
    bus = EventBus()
    seen = _record(bus, ThemeEvent.CONFIG_ERROR)
    drafts = MemoryDraftStore()
    session = ThemeSession.create(
        DEFAULT_THEME, bus=bus, drafts=drafts, writer=RecordingWriter(fail=True)
    )
    session.update("mode", "dark")
    assert session.save() is False
    assert session.is_dirty
    assert isinstance(seen[0][1]["error"], OSError)
    assert drafts.load("theme")["mode"] == "dark"


def test_reset_restores_original():
    bus = EventBus()
    seen = _record(bus, ThemeEvent.CONFIG_RESET)
    drafts = MemoryDraftStore()
    session = ThemeSession.create(DEFAULT_THEME, bus=bus, drafts=drafts)
    session.update("mode", "dark")
    assert session.reset() == DEFAULT_THEME
    assert not session.is_dirty
    assert drafts.load("theme") is None
    assert len(seen) == 1


def test_restore_draft_on_create():
    drafts = MemoryDraftStore()
    drafts.save("theme", DEFAULT_THEME.replace(mode="dark").to_dict())
    session = ThemeSession.create(DEFAULT_THEME, drafts=drafts, restore_draft=True)
    assert session.theme.mode == "dark"
    assert session.is_dirty


def test_invalid_draft_is_discarded():
    drafts = MemoryDraftStore()
    bad = DEFAULT_THEME.to_dict()
    bad["mode"] = "sepia"
    drafts.save("theme", bad)
    session = ThemeSession.create(DEFAULT_THEME, drafts=drafts, restore_draft=True)
    assert session.theme == DEFAULT_THEME
    assert drafts.load("theme") is None


def test_context_manager_disposes():
    bus = EventBus()
    seen = _record(bus, ThemeEvent.SESSION_DISPOSED)
    with ThemeSession.create(DEFAULT_THEME, bus=bus) as session:
        session.update("mode", "dark")
    assert session.closed
    assert len(seen) == 1
    with pytest.raises(SessionClosedError):
        session.update("mode", "light")
    with pytest.raises(SessionClosedError):
        session.preview()
    session.dispose()
    assert len(seen) == 1


def test_reset_keeps_advisories_of_original_theme():
    dim = OklchColor(10, 0.35, 0)
    session = ThemeSession.create(DEFAULT_THEME.replace(brand_secondary=dim))
    assert "brand_secondary" in session.advisories
    session.update("brand_secondary", OklchColor(50, 0.1, 0))
    assert "brand_secondary" not in session.advisories
    session.reset()
    assert session.theme.brand_secondary == dim
    assert "brand_secondary" in session.advisories


def test_restored_draft_recomputes_advisories():
    drafts = MemoryDraftStore()
    drafts.save("theme", DEFAULT_THEME.replace(brand_secondary=OklchColor(10, 0.35, 0)).to_dict())
    session = ThemeSession.create(DEFAULT_THEME, drafts=drafts, restore_draft=True)
    assert "brand_secondary" in session.advisories


def test_restore_draft_without_store_is_a_no_op():
    session = ThemeSession.create(DEFAULT_THEME, restore_draft=True)
    assert session.theme == DEFAULT_THEME
    assert not session.is_dirty
