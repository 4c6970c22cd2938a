"""Color space conversion (OKLCH / OKLab / sRGB / hex / HSV).

OKLCH -> sRGB follows the published OKLab matrices (Ottosson 2020):

    OKLCH --polar--> OKLab --M2^-1--> LMS' --cube--> LMS --M1^-1--> linear sRGB
          --gamma--> sRGB --clamp/round--> 0..255 integers

Out-of-gamut colors are clamped per channel *after* gamma encoding. This can
shift hue and lightness slightly for very saturated requests. `fit_to_gamut`
instead reduces chroma towards the gamut boundary; the palette generator uses
it for derived shades.

Lightness is expressed on a 0-100 scale throughout the package (OKLab uses
0-1 internally).

Public API:
- oklch_to_rgb / rgb_to_oklch
- rgb_to_hex / hex_to_rgb (raises InvalidColorFormat)
- hsv_to_rgb / rgb_to_hsv / hsv_to_oklch
- to_rgb / to_hex / from_rgb / from_hex (library aliases)
- normalize_hex / is_valid_hex
- oklch_to_css / parse_oklch_css
- clamp_oklch / round_oklch
- in_srgb_gamut / fit_to_gamut (chroma reduction used by the palette generator)
"""

from __future__ import annotations

import math
import re
from typing import Tuple

from .color_types import HexColor, HsvColor, OklchColor, RgbColor
from .constants import (
    ACHROMATIC_CHROMA,
    CHROMA_MAX,
    CHROMA_MIN,
    LIGHTNESS_MAX,
    LIGHTNESS_MIN,
)

__all__ = [
    "InvalidColorFormat",
    "oklch_to_oklab",
    "oklab_to_oklch",
    "oklab_to_linear_srgb",
    "linear_srgb_to_oklab",
    "oklch_to_rgb",
    "rgb_to_oklch",
    "rgb_to_hex",
    "hex_to_rgb",
    "hsv_to_rgb",
    "rgb_to_hsv",
    "hsv_to_oklch",
    "to_rgb",
    "to_hex",
    "from_rgb",
    "from_hex",
    "normalize_hex",
    "is_valid_hex",
    "oklch_to_css",
    "parse_oklch_css",
    "clamp_oklch",
    "in_srgb_gamut",
    "fit_to_gamut",
    "round_oklch",
]

_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
_LOOSE_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_OKLCH_CSS_RE = re.compile(
    r"^\s*oklch\(\s*(\d+(?:\.\d+)?)%?\s+(\d+(?:\.\d+)?)\s+(\d+(?:\.\d+)?)(?:deg)?\s*\)\s*$",
    re.IGNORECASE,
)

Vec3 = Tuple[float, float, float]

_GAMUT_EPSILON = 1e-6
_GAMUT_STEPS = 24


class InvalidColorFormat(ValueError):
    """Raised when a color string does not match the expected format."""


# ---------------------------------------------------------------------------
# OKLab core
# ---------------------------------------------------------------------------
def _cbrt(x: float) -> float:
    return math.copysign(abs(x) ** (1.0 / 3.0), x)


def oklch_to_oklab(color: OklchColor) -> Vec3:
    h_rad = math.radians(color.h)
    return color.l / 100.0, color.c * math.cos(h_rad), color.c * math.sin(h_rad)


def oklab_to_oklch(lab: Vec3) -> OklchColor:
    L, a, b = lab
    c = math.hypot(a, b)
    if c < ACHROMATIC_CHROMA:
        h = 0.0
    else:
        h = math.degrees(math.atan2(b, a)) % 360.0
    return OklchColor(l=L * 100.0, c=c, h=h)


def oklab_to_linear_srgb(lab: Vec3) -> Vec3:
    L, a, b = lab
    l_ = L + 0.3963377774 * a + 0.2158037573 * b
    m_ = L - 0.1055613458 * a - 0.0638541728 * b
    s_ = L - 0.0894841775 * a - 1.2914855480 * b
    l3, m3, s3 = l_ ** 3, m_ ** 3, s_ ** 3
    return (
        +4.0767416621 * l3 - 3.3077115913 * m3 + 0.2309699292 * s3,
        -1.2684380046 * l3 + 2.6097574011 * m3 - 0.3413193965 * s3,
        -0.0041960863 * l3 - 0.7034186147 * m3 + 1.7076147010 * s3,
    )


def linear_srgb_to_oklab(rgb: Vec3) -> Vec3:
    r, g, b = rgb
    l_ = _cbrt(0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b)
    m_ = _cbrt(0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b)
    s_ = _cbrt(0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b)
    return (
        0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_,
        1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_,
        0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_,
    )


def _gamma_encode(c: float) -> float:
    if c <= 0.0031308:
        return 12.92 * c
    return 1.055 * (c ** (1 / 2.4)) - 0.055


def _gamma_decode(c: float) -> float:
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def _to_byte(c: float) -> int:
    # Clamp after gamma encoding (per-channel gamut clamp)
    c = 0.0 if c < 0.0 else 1.0 if c > 1.0 else c
    return int(round(c * 255))


# ---------------------------------------------------------------------------
# OKLCH <-> RGB
# ---------------------------------------------------------------------------
def oklch_to_rgb(color: OklchColor) -> RgbColor:
    lin = oklab_to_linear_srgb(oklch_to_oklab(color))
    r, g, b = (_to_byte(_gamma_encode(ch)) for ch in lin)
    return RgbColor(r, g, b)


def rgb_to_oklch(rgb: RgbColor) -> OklchColor:
    lin = (
        _gamma_decode(rgb.r / 255.0),
        _gamma_decode(rgb.g / 255.0),
        _gamma_decode(rgb.b / 255.0),
    )
    return oklab_to_oklch(linear_srgb_to_oklab(lin))


# ---------------------------------------------------------------------------
# Hex
# ---------------------------------------------------------------------------
def rgb_to_hex(rgb: RgbColor) -> HexColor:
    for name, value in (("r", rgb.r), ("g", rgb.g), ("b", rgb.b)):
        if not 0 <= value <= 255:
            raise ValueError(f"RGB channel {name} out of range 0-255: {value}")
    return f"#{rgb.r:02x}{rgb.g:02x}{rgb.b:02x}"


def hex_to_rgb(value: HexColor) -> RgbColor:
    """Parse a strict ``#RRGGBB`` string (case-insensitive)."""
    if not isinstance(value, str) or not _HEX_RE.match(value):
        raise InvalidColorFormat(f"Color must be a #RRGGBB hex string: {value!r}")
    return RgbColor(int(value[1:3], 16), int(value[3:5], 16), int(value[5:7], 16))


def is_valid_hex(value: str) -> bool:
    """True for #rgb / #rrggbb with or without the leading '#'."""
    return isinstance(value, str) and bool(_LOOSE_HEX_RE.match(value.strip()))


def normalize_hex(value: str) -> HexColor:
    """Return canonical '#rrggbb' for loose picker input.

    Accepts 3 or 6 hex digits with an optional '#'. Raises InvalidColorFormat
    otherwise.
    """
    if not is_valid_hex(value):
        raise InvalidColorFormat(f"Invalid hex color: {value!r}")
    digits = value.strip().lstrip("#").lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"


# ---------------------------------------------------------------------------
# HSV (picker input)
# ---------------------------------------------------------------------------
def hsv_to_rgb(hsv: HsvColor) -> RgbColor:
    h = (hsv.h % 360.0) / 60.0
    s = max(0.0, min(100.0, hsv.s)) / 100.0
    v = max(0.0, min(100.0, hsv.v)) / 100.0
    chroma = v * s
    x = chroma * (1 - abs(h % 2 - 1))
    m = v - chroma
    sector = int(h) % 6
    r1, g1, b1 = (
        (chroma, x, 0.0),
        (x, chroma, 0.0),
        (0.0, chroma, x),
        (0.0, x, chroma),
        (x, 0.0, chroma),
        (chroma, 0.0, x),
    )[sector]
    return RgbColor(_to_byte(r1 + m), _to_byte(g1 + m), _to_byte(b1 + m))


def rgb_to_hsv(rgb: RgbColor) -> HsvColor:
    r, g, b = rgb.r / 255.0, rgb.g / 255.0, rgb.b / 255.0
    mx = max(r, g, b)
    mn = min(r, g, b)
    d = mx - mn
    if d == 0:
        h = 0.0
    elif mx == r:
        h = 60.0 * (((g - b) / d) % 6)
    elif mx == g:
        h = 60.0 * ((b - r) / d + 2)
    else:
        h = 60.0 * ((r - g) / d + 4)
    s = 0.0 if mx == 0 else d / mx
    return HsvColor(h=h % 360.0, s=s * 100.0, v=mx * 100.0)


def hsv_to_oklch(hsv: HsvColor) -> OklchColor:
    return rgb_to_oklch(hsv_to_rgb(hsv))


# ---------------------------------------------------------------------------
# Library aliases
# ---------------------------------------------------------------------------
def to_rgb(color: OklchColor) -> RgbColor:
    return oklch_to_rgb(color)


def to_hex(color: OklchColor) -> HexColor:
    return rgb_to_hex(oklch_to_rgb(color))


def from_rgb(rgb: RgbColor) -> OklchColor:
    return rgb_to_oklch(rgb)


def from_hex(value: HexColor) -> OklchColor:
    return rgb_to_oklch(hex_to_rgb(value))


# ---------------------------------------------------------------------------
# CSS + normalization helpers
# ---------------------------------------------------------------------------
def _fmt(value: float) -> str:
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return text or "0"


def oklch_to_css(color: OklchColor) -> str:
    """Format as ``oklch(60% 0.18 262deg)``."""
    return f"oklch({_fmt(color.l)}% {_fmt(color.c)} {_fmt(color.h)}deg)"


def parse_oklch_css(css: str) -> OklchColor | None:
    """Parse an ``oklch(L% C Hdeg)`` string; returns None when it does not match."""
    match = _OKLCH_CSS_RE.match(css or "")
    if not match:
        return None
    return OklchColor(float(match.group(1)), float(match.group(2)), float(match.group(3)))


def clamp_oklch(color: OklchColor) -> OklchColor:
    return OklchColor(
        l=max(LIGHTNESS_MIN, min(LIGHTNESS_MAX, color.l)),
        c=max(CHROMA_MIN, min(CHROMA_MAX, color.c)),
        h=color.h % 360.0,
    )


def in_srgb_gamut(color: OklchColor) -> bool:
    """True when the color maps to linear sRGB within [0, 1] on every channel."""
    return all(
        -_GAMUT_EPSILON <= ch <= 1.0 + _GAMUT_EPSILON
        for ch in oklab_to_linear_srgb(oklch_to_oklab(color))
    )


def fit_to_gamut(color: OklchColor) -> OklchColor:
    """Reduce chroma (lightness and hue fixed) until the color fits sRGB.

    Bisection over a fixed number of steps, so the result is deterministic.
    """
    color = clamp_oklch(color)
    if in_srgb_gamut(color):
        return color
    lo, hi = 0.0, color.c
    for _ in range(_GAMUT_STEPS):
        mid = (lo + hi) / 2.0
        if in_srgb_gamut(OklchColor(color.l, mid, color.h)):
            lo = mid
        else:
            hi = mid
    return OklchColor(color.l, lo, color.h)


def round_oklch(color: OklchColor) -> OklchColor:
    """Round to editor display precision (l 0.1, c 0.001, h 0.1)."""
    return OklchColor(
        l=round(color.l, 1),
        c=round(color.c, 3),
        h=round(color.h, 1) % 360.0,
    )
