"""Color harmonies derived by hue rotation.

Lightness and chroma pass through unchanged; only the hue rotates (mod 360).
The base color itself is not part of ``ColorHarmony.colors``.

    complementary : h + 180
    triadic       : h + 120, h + 240
    analogous     : h - 30, h + 30
"""

from __future__ import annotations

from typing import Dict

from .color_types import ColorHarmony, HarmonyType, OklchColor
from .constants import HARMONY_ANGLES

__all__ = ["harmony", "all_harmonies"]


def _coerce_type(kind: HarmonyType | str) -> HarmonyType:
    if isinstance(kind, HarmonyType):
        return kind
    try:
        return HarmonyType(str(kind).strip().lower())
    except ValueError:
        allowed = ", ".join(t.value for t in HarmonyType)
        raise ValueError(f"Unknown harmony type {kind!r} (expected one of: {allowed})") from None


def _rotated(base: OklchColor, degrees: float) -> OklchColor:
    return base.with_hue((base.h + degrees) % 360.0)


def harmony(base: OklchColor, kind: HarmonyType | str) -> ColorHarmony:
    kind = _coerce_type(kind)
    angle = HARMONY_ANGLES[kind]
    if kind is HarmonyType.COMPLEMENTARY:
        colors = (_rotated(base, angle),)
        names = ("Complement",)
    elif kind is HarmonyType.TRIADIC:
        colors = (_rotated(base, angle), _rotated(base, angle * 2))
        names = ("Triadic 1", "Triadic 2")
    else:
        colors = (_rotated(base, -angle), _rotated(base, angle))
        names = (f"Analogous -{angle:g}°", f"Analogous +{angle:g}°")
    return ColorHarmony(type=kind, colors=colors, names=names)


def all_harmonies(base: OklchColor) -> Dict[HarmonyType, ColorHarmony]:
    return {kind: harmony(base, kind) for kind in HarmonyType}
