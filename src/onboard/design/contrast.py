"""Contrast utilities for validating palette accessibility.

Implements WCAG 2.1 contrast ratio calculations.

Public API:
- relative_luminance(rgb: RgbColor) -> float
- contrast_ratio(a: RgbColor, b: RgbColor) -> float
- contrast(a: RgbColor, b: RgbColor) -> ContrastResult
- oklch_contrast(fg: OklchColor, bg: OklchColor) -> ContrastResult
- accessible_text_color(bg: OklchColor) -> OklchColor
- validate_palette_contrast(base: OklchColor) -> list[ShadeContrast]
- check_palette_against(palette, background) -> dict[int, ContrastResult]
- suggest_contrast_fix(fg, bg, target=4.5) -> OklchColor | None

The AA, AAA and AA-large flags are evaluated independently against the raw
(unrounded) ratio.
"""

from __future__ import annotations

from typing import Dict, List

from .color_convert import hex_to_rgb, oklch_to_rgb
from .color_types import ColorPalette, ContrastResult, OklchColor, RgbColor, ShadeContrast
from .constants import (
    LIGHTNESS_MAX,
    LIGHTNESS_MIN,
    TEXT_ON_DARK,
    TEXT_ON_LIGHT,
    WCAG_AA_LARGE,
    WCAG_AA_NORMAL,
    WCAG_AAA_NORMAL,
)
from .palette import generate_palette

__all__ = [
    "relative_luminance",
    "contrast_ratio",
    "contrast",
    "oklch_contrast",
    "accessible_text_color",
    "validate_palette_contrast",
    "check_palette_against",
    "suggest_contrast_fix",
]

_FIX_STEP = 5.0


def _linear_channel(c: float) -> float:
    c = c / 255.0
    if c <= 0.03928:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def relative_luminance(rgb: RgbColor) -> float:
    r_l = _linear_channel(rgb.r)
    g_l = _linear_channel(rgb.g)
    b_l = _linear_channel(rgb.b)
    # Rec. 709 coefficients used by WCAG
    return 0.2126 * r_l + 0.7152 * g_l + 0.0722 * b_l


def contrast_ratio(a: RgbColor, b: RgbColor) -> float:
    l1 = relative_luminance(a)
    l2 = relative_luminance(b)
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def contrast(a: RgbColor, b: RgbColor) -> ContrastResult:
    ratio = contrast_ratio(a, b)
    return ContrastResult(
        ratio=ratio,
        wcag_aa=ratio >= WCAG_AA_NORMAL,
        wcag_aaa=ratio >= WCAG_AAA_NORMAL,
        wcag_aa_large=ratio >= WCAG_AA_LARGE,
    )


def oklch_contrast(fg: OklchColor, bg: OklchColor) -> ContrastResult:
    return contrast(oklch_to_rgb(fg), oklch_to_rgb(bg))


def _oklch_ratio(fg: OklchColor, bg: OklchColor) -> float:
    return contrast_ratio(oklch_to_rgb(fg), oklch_to_rgb(bg))


def accessible_text_color(background: OklchColor) -> OklchColor:
    """Near-white or near-black text, whichever contrasts more with ``background``."""
    light = _oklch_ratio(TEXT_ON_DARK, background)
    dark = _oklch_ratio(TEXT_ON_LIGHT, background)
    return TEXT_ON_DARK if light > dark else TEXT_ON_LIGHT


def validate_palette_contrast(base: OklchColor) -> List[ShadeContrast]:
    """Check every generated shade against its recommended text color.

    Returns one entry per shade in palette order; ``passes`` means WCAG AA
    for normal text.
    """
    palette = generate_palette(base)
    report: List[ShadeContrast] = []
    for shade, hex_value in palette.items():
        surface = hex_to_rgb(hex_value)
        text = accessible_text_color(palette.colors[shade])
        ratio = contrast_ratio(oklch_to_rgb(text), surface)
        report.append(
            ShadeContrast(
                shade=shade,
                ratio=ratio,
                passes=ratio >= WCAG_AA_NORMAL,
                recommended_text="white" if text is TEXT_ON_DARK else "black",
            )
        )
    return report


def check_palette_against(palette: ColorPalette, background: RgbColor) -> Dict[int, ContrastResult]:
    """Contrast of each palette shade against a fixed background."""
    return {shade: contrast(hex_to_rgb(hex_value), background) for shade, hex_value in palette.items()}


def suggest_contrast_fix(
    foreground: OklchColor, background: OklchColor, target: float = WCAG_AA_NORMAL
) -> OklchColor | None:
    """Adjust foreground lightness until ``target`` is met.

    Darkens first in 5-point steps, then lightens. Returns the foreground
    unchanged when it already passes and None when no lightness works.
    """
    if _oklch_ratio(foreground, background) >= target:
        return foreground
    lightness = foreground.l - _FIX_STEP
    while lightness >= LIGHTNESS_MIN:
        candidate = OklchColor(lightness, foreground.c, foreground.h)
        if _oklch_ratio(candidate, background) >= target:
            return candidate
        lightness -= _FIX_STEP
    lightness = foreground.l + _FIX_STEP
    while lightness <= LIGHTNESS_MAX:
        candidate = OklchColor(lightness, foreground.c, foreground.h)
        if _oklch_ratio(candidate, background) >= target:
            return candidate
        lightness += _FIX_STEP
    return None
