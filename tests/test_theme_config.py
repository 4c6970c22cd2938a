from pathlib import Path

import pytest
import yaml

from onboard.design import OklchColor, generate_palette, to_hex
from onboard.services.theme_config import (
    DEFAULT_THEME,
    ThemeConfig,
    ThemeConfigError,
    generate_css_variables,
    generate_yaml_snippet,
    load_theme_config,
    parse_theme_config,
    render_css,
    validate_theme_payload,
    validate_theme_section,
)

SITE_CONFIG = """\
title: My Portfolio
theme:
  brand_primary:
    l: 60
    c: 0.18
    h: 262
  brand_secondary:
    l: 70
    c: 0.12
    h: 30
  neutral: zinc
  mode: dark
"""


def _section(**overrides):
    data = {
        "brand_primary": {"l": 60, "c": 0.18, "h": 262},
        "brand_secondary": None,
        "neutral": "slate",
        "mode": "auto",
    }
    data.update(overrides)
    return data


def test_valid_section_builds_config():
    result = validate_theme_section(_section())
    assert result.ok
    assert result.config == DEFAULT_THEME
    assert result.advisories == {}


def test_errors_accumulate_with_dotted_paths():
    result = validate_theme_section(
        _section(brand_primary={"l": 150, "c": 0.5, "h": 262}, neutral="purple", mode="sepia")
    )
    assert not result.ok
    assert result.config is None
    assert set(result.errors) == {
        "theme.brand_primary.l",
        "theme.brand_primary.c",
        "theme.neutral",
        "theme.mode",
    }


def test_missing_and_non_numeric_components():
    result = validate_theme_section(_section(brand_primary={"l": "60", "c": True}))
    assert result.errors["theme.brand_primary.l"] == ["must be a number"]
    assert result.errors["theme.brand_primary.c"] == ["must be a number"]
    assert result.errors["theme.brand_primary.h"] == ["is missing"]


def test_missing_primary_is_an_error():
    data = _section()
    del data["brand_primary"]
    result = validate_theme_section(data)
    assert "theme.brand_primary" in result.errors


def test_advisory_reported_but_not_blocking():
    result = validate_theme_section(_section(brand_secondary={"l": 10, "c": 0.35, "h": 0}))
    assert result.ok
    assert result.config is not None
    assert result.config.brand_secondary == OklchColor(10, 0.35, 0)
    assert "theme.brand_secondary" in result.advisories


def test_payload_requires_theme_key():
    assert not validate_theme_payload({}).ok
    assert validate_theme_payload({"theme": _section()}).ok


def test_parse_theme_config_raises_with_errors():
    with pytest.raises(ThemeConfigError) as excinfo:
        parse_theme_config(_section(mode="sepia"))
    assert "theme.mode" in excinfo.value.errors


def test_dict_round_trip():
    theme = ThemeConfig(OklchColor(60, 0.18, 262), OklchColor(70, 0.12, 30), "zinc", "dark")
    assert ThemeConfig.from_dict(theme.to_dict()) == theme


def test_replace_rejects_unknown_keys():
    assert DEFAULT_THEME.replace(mode="dark").mode == "dark"
    with pytest.raises(KeyError):
        DEFAULT_THEME.replace(font="serif")


def test_load_theme_config_from_site_file(tmp_path: Path):
    path = tmp_path / "_config.yml"
    path.write_text(SITE_CONFIG, encoding="utf-8")
    theme = load_theme_config(path)
    assert theme.brand_primary == OklchColor(60, 0.18, 262)
    assert theme.brand_secondary == OklchColor(70, 0.12, 30)
    assert (theme.neutral, theme.mode) == ("zinc", "dark")


def test_load_theme_config_failures(tmp_path: Path):
    with pytest.raises(ThemeConfigError):
        load_theme_config(tmp_path / "missing.yml")

    no_theme = tmp_path / "no_theme.yml"
    no_theme.write_text("title: x\n", encoding="utf-8")
    with pytest.raises(ThemeConfigError):
        load_theme_config(no_theme)

    broken = tmp_path / "broken.yml"
    broken.write_text("theme: [unclosed\n", encoding="utf-8")
    with pytest.raises(ThemeConfigError):
        load_theme_config(broken)

    invalid = tmp_path / "invalid.yml"
    invalid.write_text(SITE_CONFIG.replace("l: 60", "l: 160"), encoding="utf-8")
    with pytest.raises(ThemeConfigError) as excinfo:
        load_theme_config(invalid)
    assert "theme.brand_primary.l" in excinfo.value.errors


def test_css_variables_cover_palette_and_settings():
    theme = ThemeConfig(OklchColor(60, 0.18, 262), OklchColor(70, 0.12, 30), "zinc", "dark")
    variables = generate_css_variables(theme)
    palette = generate_palette(theme.brand_primary)
    assert variables["--color-primary-500"] == palette[500] == to_hex(theme.brand_primary)
    assert variables["--color-primary"] == "oklch(60% 0.18 262deg)"
    assert "--color-secondary-900" in variables
    assert variables["--neutral-palette"] == "zinc"
    assert variables["--theme-mode"] == "dark"


def test_css_variables_without_secondary():
    variables = generate_css_variables(DEFAULT_THEME)
    assert not any(name.startswith("--color-secondary") for name in variables)


def test_render_css_block():
    css = render_css(DEFAULT_THEME)
    assert css.startswith(":root {\n")
    assert "  --theme-mode: auto;" in css
    assert css.endswith("}\n")


def test_yaml_snippet_parses_back():
    snippet = generate_yaml_snippet(DEFAULT_THEME)
    assert snippet.startswith("# ")
    document = yaml.safe_load(snippet)
    assert ThemeConfig.from_dict(document["theme"]) == DEFAULT_THEME
