"""Theme configuration record (the `theme:` section of the site's _config.yml).

Responsibilities:
- Typed record (`ThemeConfig`) with dict round-tripping.
- Boundary validation of untrusted payloads with accumulated, path-keyed
  errors (`validate_theme_section`). Brand colors reuse the design core
  validator: range violations block, the accessibility advisory is reported
  separately and does not block.
- Reading the section from a Jekyll config file (`load_theme_config`).
- Derived output for the preview frame and for pasting back into the site
  config (`generate_css_variables`, `render_css`, `generate_yaml_snippet`).

Writing `_config.yml` is not done here.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from onboard.design import OklchColor, generate_palette, oklch_to_css, validate
from onboard.design.constants import NEUTRAL_PALETTES, THEME_MODES

__all__ = [
    "ThemeConfig",
    "ThemeConfigError",
    "ThemeValidationResult",
    "DEFAULT_THEME",
    "COLOR_KEYS",
    "validate_theme_section",
    "validate_theme_payload",
    "parse_theme_config",
    "load_theme_config",
    "generate_css_variables",
    "render_css",
    "generate_yaml_snippet",
]

_logger = logging.getLogger(__name__)

COLOR_KEYS: tuple[str, ...] = ("brand_primary", "brand_secondary")
THEME_KEYS: tuple[str, ...] = ("brand_primary", "brand_secondary", "neutral", "mode")


class ThemeConfigError(RuntimeError):
    """Raised when a theme section cannot be read or fails validation."""

    def __init__(self, message: str, errors: Mapping[str, List[str]] | None = None) -> None:
        super().__init__(message)
        self.errors: Dict[str, List[str]] = dict(errors or {})


@dataclass(frozen=True)
class ThemeConfig:
    brand_primary: OklchColor
    brand_secondary: Optional[OklchColor] = None
    neutral: str = "slate"
    mode: str = "auto"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "brand_primary": self.brand_primary.to_dict(),
            "brand_secondary": self.brand_secondary.to_dict() if self.brand_secondary else None,
            "neutral": self.neutral,
            "mode": self.mode,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ThemeConfig":
        secondary = data.get("brand_secondary")
        return cls(
            brand_primary=OklchColor.from_dict(data["brand_primary"]),
            brand_secondary=OklchColor.from_dict(secondary) if secondary else None,
            neutral=str(data.get("neutral", "slate")),
            mode=str(data.get("mode", "auto")),
        )

    def replace(self, **changes: Any) -> "ThemeConfig":
        data = {key: getattr(self, key) for key in THEME_KEYS}
        unknown = set(changes) - set(THEME_KEYS)
        if unknown:
            raise KeyError(f"Unknown theme keys: {', '.join(sorted(unknown))}")
        data.update(changes)
        return ThemeConfig(**data)


DEFAULT_THEME = ThemeConfig(brand_primary=OklchColor(60, 0.18, 262))


@dataclass
class ThemeValidationResult:
    errors: Dict[str, List[str]] = field(default_factory=dict)
    advisories: Dict[str, List[str]] = field(default_factory=dict)
    config: Optional[ThemeConfig] = None

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, path: str, message: str) -> None:
        self.errors.setdefault(path, []).append(message)

    def add_advisory(self, path: str, message: str) -> None:
        self.advisories.setdefault(path, []).append(message)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _check_color(value: Any, path: str, result: ThemeValidationResult) -> Optional[OklchColor]:
    if not isinstance(value, Mapping):
        result.add_error(path, "must be a mapping with l, c and h")
        return None
    components: Dict[str, float] = {}
    for comp in ("l", "c", "h"):
        if comp not in value:
            result.add_error(f"{path}.{comp}", "is missing")
        elif not _is_number(value[comp]):
            result.add_error(f"{path}.{comp}", "must be a number")
        else:
            components[comp] = float(value[comp])
    if len(components) != 3:
        return None
    color = OklchColor(**components)
    outcome = validate(color)
    for issue in outcome.blocking:
        result.add_error(f"{path}.{issue.field}", issue.message)
    for issue in outcome.advisories:
        result.add_advisory(path, issue.message)
    return color if outcome.valid else None


def validate_theme_section(data: Any, *, prefix: str = "theme") -> ThemeValidationResult:
    """Validate the contents of a `theme:` section.

    All problems are collected; ``result.config`` is set only when there are
    no blocking errors.
    """
    result = ThemeValidationResult()
    if not isinstance(data, Mapping):
        result.add_error(prefix, "must be a mapping")
        return result

    primary: Optional[OklchColor] = None
    if "brand_primary" not in data or data["brand_primary"] is None:
        result.add_error(f"{prefix}.brand_primary", "is missing")
    else:
        primary = _check_color(data["brand_primary"], f"{prefix}.brand_primary", result)

    secondary: Optional[OklchColor] = None
    if data.get("brand_secondary") is not None:
        secondary = _check_color(data["brand_secondary"], f"{prefix}.brand_secondary", result)

    neutral = data.get("neutral")
    if neutral not in NEUTRAL_PALETTES:
        result.add_error(f"{prefix}.neutral", f"must be one of: {', '.join(NEUTRAL_PALETTES)}")
    mode = data.get("mode")
    if mode not in THEME_MODES:
        result.add_error(f"{prefix}.mode", f"must be one of: {', '.join(THEME_MODES)}")

    if result.ok and primary is not None:
        result.config = ThemeConfig(
            brand_primary=primary, brand_secondary=secondary, neutral=neutral, mode=mode
        )
    if result.advisories:
        _logger.warning("Theme accessibility advisories: %s", result.advisories)
    return result


def validate_theme_payload(payload: Any) -> ThemeValidationResult:
    """Validate an update request of the form ``{"theme": {...}}``."""
    if not isinstance(payload, Mapping) or "theme" not in payload:
        result = ThemeValidationResult()
        result.add_error("theme", "is missing")
        return result
    return validate_theme_section(payload["theme"])


def parse_theme_config(data: Any) -> ThemeConfig:
    result = validate_theme_section(data)
    if not result.ok or result.config is None:
        raise ThemeConfigError("Invalid theme configuration", result.errors)
    return result.config


def load_theme_config(path: str | Path) -> ThemeConfig:
    """Read and validate the `theme:` section of a Jekyll config file."""
    config_path = Path(path)
    if not config_path.exists():
        raise ThemeConfigError(f"Site config not found: {config_path}")
    try:
        with config_path.open("r", encoding="utf-8") as fh:
            document = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ThemeConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    if not isinstance(document, Mapping) or "theme" not in document:
        raise ThemeConfigError(f"No theme section in {config_path}")
    theme = parse_theme_config(document["theme"])
    _logger.debug("Loaded theme from %s: %s", config_path, theme)
    return theme


def generate_css_variables(theme: ThemeConfig) -> Dict[str, str]:
    """CSS custom properties applied to the preview frame."""
    variables: Dict[str, str] = {}
    variables.update(generate_palette(theme.brand_primary).css_variables("--color-primary"))
    variables["--color-primary"] = oklch_to_css(theme.brand_primary)
    if theme.brand_secondary is not None:
        variables.update(generate_palette(theme.brand_secondary).css_variables("--color-secondary"))
        variables["--color-secondary"] = oklch_to_css(theme.brand_secondary)
    variables["--neutral-palette"] = theme.neutral
    variables["--theme-mode"] = theme.mode
    return variables


def render_css(theme: ThemeConfig, selector: str = ":root") -> str:
    body = "\n".join(f"  {name}: {value};" for name, value in generate_css_variables(theme).items())
    return f"{selector} {{\n{body}\n}}\n"


_SNIPPET_RULE = "# " + "=" * 76


def generate_yaml_snippet(theme: ThemeConfig) -> str:
    """`theme:` block with a header comment, ready to paste into _config.yml."""
    header = [
        _SNIPPET_RULE,
        "# Theme Configuration - Generated by Onboard",
        "# Replace the existing theme: section of _config.yml with this block.",
        _SNIPPET_RULE,
        "",
    ]
    body = yaml.safe_dump({"theme": theme.to_dict()}, sort_keys=False, default_flow_style=False)
    return "\n".join(header) + body
