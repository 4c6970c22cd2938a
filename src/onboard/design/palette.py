"""OKLCH palette derivation.

Given one base color (treated as shade 500) derive a ten-step shade scale:

    shade   lightness                    chroma
    50      max(95, base.l)              0.4 * c  (at most; see below)
    100     max(90, base.l)              0.5 * c
    200     max(80, base.l)              0.6 * c
    300     max(70, base.l)              0.7 * c
    400     max(65, base.l)              0.8 * c
    500     base.l                       c      (hex == to_hex(base))
    600     base.l - 10                  0.9 * c
    700     base.l - 20                  0.8 * c
    800     base.l - 30                  0.7 * c
    900     base.l - 40                  0.6 * c

All lightness values are clamped to [0, 100]; hue stays constant.

Rendering rules (what the hex of each shade decodes to):

- Derived shades keep the table chroma only while it fits sRGB; otherwise
  chroma is bisected down to the gamut boundary (`fit_to_gamut`) so the hex
  keeps the target lightness instead of drifting through channel clipping.
- Shade 500 is the base as given, so an out-of-gamut base renders clipped.
  A light shade whose target does not exceed both ``base.l`` and the
  lightness decoded from ``to_hex(base)`` renders as the base itself; dark
  shades mirror this.
- A final pass walks outwards from 500: a shade whose hex decodes lighter
  (dark side) or darker (light side) than its inner neighbour takes that
  neighbour's color.

Decoded lightness therefore never increases from 50 to 900. At extreme or
out-of-gamut bases adjacent shades can collapse to the same hex.

Also provides the 11-step shade matrix (50-950), gradient strips and small
adjustment helpers used by the theme editor.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping

from .color_convert import clamp_oklch, fit_to_gamut, from_hex, to_hex
from .color_types import ColorPalette, OklchColor, ShadeStep
from .constants import (
    BASE_SHADE,
    DARK_SHADE_OFFSETS,
    GRADIENT_LIGHTNESS_MAX,
    GRADIENT_LIGHTNESS_MIN,
    GRADIENT_STEPS,
    LIGHT_SHADE_LIGHTNESS,
    LIGHTNESS_MAX,
    LIGHTNESS_MIN,
    PALETTE_SHADES,
    SHADE_CHROMA_SCALE,
    SHADE_LIGHTNESS_MAP,
    SHADE_SCALE,
)

__all__ = [
    "shade_lightness",
    "generate_palette",
    "generate_palette_custom",
    "generate_shade_scale",
    "generate_gradient",
    "adjust_lightness",
    "adjust_chroma",
    "rotate_hue",
    "adjust_palette_brightness",
]

_logger = logging.getLogger(__name__)


def _clamp_l(value: float) -> float:
    return max(LIGHTNESS_MIN, min(LIGHTNESS_MAX, value))


def shade_lightness(base: OklchColor) -> Dict[int, float]:
    """Return the clamped target lightness for every palette shade."""
    targets: Dict[int, float] = {}
    for shade in PALETTE_SHADES:
        if shade == BASE_SHADE:
            targets[shade] = base.l
        elif shade in LIGHT_SHADE_LIGHTNESS:
            targets[shade] = _clamp_l(max(LIGHT_SHADE_LIGHTNESS[shade], base.l))
        else:
            targets[shade] = _clamp_l(base.l + DARK_SHADE_OFFSETS[shade])
    return targets


def _renders_as_base(shade: int, target: float, upper: float, lower: float) -> bool:
    if shade == BASE_SHADE:
        return True
    if shade < BASE_SHADE:
        return target <= upper
    return target >= lower


def _settle_decoded_order(shades: Dict[int, str], colors: Dict[int, OklchColor]) -> None:
    order = list(PALETTE_SHADES)
    pivot = order.index(BASE_SHADE)
    decoded = {shade: from_hex(shades[shade]).l for shade in order}
    for i in range(pivot - 1, -1, -1):
        shade, inner = order[i], order[i + 1]
        if decoded[shade] < decoded[inner]:
            shades[shade], colors[shade], decoded[shade] = shades[inner], colors[inner], decoded[inner]
    for i in range(pivot + 1, len(order)):
        shade, inner = order[i], order[i - 1]
        if decoded[shade] > decoded[inner]:
            shades[shade], colors[shade], decoded[shade] = shades[inner], colors[inner], decoded[inner]


def _build(base: OklchColor, lightness: Mapping[int, float]) -> ColorPalette:
    base_hex = to_hex(base)
    rendered = from_hex(base_hex).l
    upper, lower = max(base.l, rendered), min(base.l, rendered)
    shades: Dict[int, str] = {}
    colors: Dict[int, OklchColor] = {}
    for shade in PALETTE_SHADES:
        if _renders_as_base(shade, lightness[shade], upper, lower):
            colors[shade] = base
            shades[shade] = base_hex
            continue
        color = fit_to_gamut(
            OklchColor(lightness[shade], base.c * SHADE_CHROMA_SCALE[shade], base.h)
        )
        colors[shade] = color
        shades[shade] = to_hex(color)
    _settle_decoded_order(shades, colors)
    return ColorPalette(base=base, shades=shades, colors=colors)


def generate_palette(base: OklchColor) -> ColorPalette:
    """Derive the 50-900 palette for ``base``."""
    palette = _build(base, shade_lightness(base))
    _logger.debug("Generated palette for %s: %s", base, palette.to_dict())
    return palette


def generate_palette_custom(
    base: OklchColor, *, lightest: float, darkest: float
) -> ColorPalette:
    """Palette spread over an explicit lightness range.

    Light shades step down from ``lightest`` in 10% increments of the range,
    dark shades step down from the base, shade 900 is ``darkest``. The same
    monotonic flooring as ``generate_palette`` applies.
    """
    if lightest < darkest:
        raise ValueError(f"lightest ({lightest}) must be >= darkest ({darkest})")
    span = lightest - darkest
    lightness: Dict[int, float] = {BASE_SHADE: base.l}
    for i, shade in enumerate((50, 100, 200, 300, 400)):
        lightness[shade] = _clamp_l(max(lightest - span * 0.1 * i, base.l))
    for i, shade in enumerate((600, 700, 800), start=1):
        lightness[shade] = _clamp_l(base.l - span * 0.1 * i)
    lightness[900] = _clamp_l(min(darkest, lightness[800]))
    return _build(base, lightness)


def generate_shade_scale(base: OklchColor) -> List[ShadeStep]:
    """11-step shade matrix (50-950) at fixed lightness stops."""
    steps: List[ShadeStep] = []
    for weight in SHADE_SCALE:
        color = clamp_oklch(OklchColor(SHADE_LIGHTNESS_MAP[weight] * 100, base.c, base.h))
        steps.append(ShadeStep(weight=weight, color=color, hex=to_hex(color)))
    return steps


def generate_gradient(base: OklchColor, steps: int = GRADIENT_STEPS) -> List[OklchColor]:
    """Light-to-dark strip at the base hue/chroma."""
    if steps < 2:
        raise ValueError("gradient needs at least 2 steps")
    step = (GRADIENT_LIGHTNESS_MAX - GRADIENT_LIGHTNESS_MIN) / (steps - 1)
    return [
        clamp_oklch(OklchColor(GRADIENT_LIGHTNESS_MAX - step * i, base.c, base.h))
        for i in range(steps)
    ]


def adjust_lightness(color: OklchColor, delta: float) -> OklchColor:
    return clamp_oklch(OklchColor(color.l + delta, color.c, color.h))


def adjust_chroma(color: OklchColor, delta: float) -> OklchColor:
    return clamp_oklch(OklchColor(color.l, color.c + delta, color.h))


def rotate_hue(color: OklchColor, degrees: float) -> OklchColor:
    return clamp_oklch(OklchColor(color.l, color.c, color.h + degrees))


def adjust_palette_brightness(palette: ColorPalette, delta: float) -> ColorPalette:
    """Shift every shade's lightness by ``delta`` (clamped).

    Uses the OKLCH values the palette was generated from; palettes built
    without them fall back to decoding each hex.
    """
    shades: Dict[int, str] = {}
    colors: Dict[int, OklchColor] = {}
    for shade, hex_value in palette.items():
        source = palette.colors.get(shade) or from_hex(hex_value)
        adjusted = adjust_lightness(source, delta)
        colors[shade] = adjusted
        shades[shade] = to_hex(adjusted)
    return ColorPalette(base=adjust_lightness(palette.base, delta), shades=shades, colors=colors)
