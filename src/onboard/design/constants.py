"""Tokenized constants for the color system.

Range limits here are also used by the configuration validator so persisted
theme values and editor input share one definition.
"""

from __future__ import annotations

from typing import Dict, Final, List, Tuple

from .color_types import ColorPreset, HarmonyType, OklchColor

# OKLCH domain ------------------------------------------------------------
LIGHTNESS_MIN: Final = 0.0
LIGHTNESS_MAX: Final = 100.0
CHROMA_MIN: Final = 0.0
CHROMA_MAX: Final = 0.4
HUE_MIN: Final = 0.0
HUE_MAX: Final = 360.0  # exclusive

# Below this chroma a color is treated as achromatic (hue reported as 0)
ACHROMATIC_CHROMA: Final = 1e-4

# Accessibility advisory: extreme lightness combined with high chroma
ADVISORY_LIGHTNESS_LOW: Final = 20.0
ADVISORY_LIGHTNESS_HIGH: Final = 80.0
ADVISORY_CHROMA: Final = 0.3
ADVISORY_MESSAGE: Final = "high chroma with extreme lightness may reduce accessibility"

# WCAG 2.1 thresholds -----------------------------------------------------
WCAG_AA_NORMAL: Final = 4.5
WCAG_AAA_NORMAL: Final = 7.0
WCAG_AA_LARGE: Final = 3.0

# Text colors used when recommending a foreground for a surface
TEXT_ON_DARK: Final = OklchColor(95.0, 0.01, 0.0)
TEXT_ON_LIGHT: Final = OklchColor(20.0, 0.01, 0.0)

# Palette (50-900) ----------------------------------------------------------
PALETTE_SHADES: Final[Tuple[int, ...]] = (50, 100, 200, 300, 400, 500, 600, 700, 800, 900)
BASE_SHADE: Final = 500

# Fixed lightness for light shades; dark shades are offsets from the base.
LIGHT_SHADE_LIGHTNESS: Final[Dict[int, float]] = {
    50: 95.0,
    100: 90.0,
    200: 80.0,
    300: 70.0,
    400: 65.0,
}
DARK_SHADE_OFFSETS: Final[Dict[int, float]] = {
    600: -10.0,
    700: -20.0,
    800: -30.0,
    900: -40.0,
}

# Chroma multiplier per shade; lighter and darker ends are desaturated to
# stay closer to the sRGB gamut.
SHADE_CHROMA_SCALE: Final[Dict[int, float]] = {
    50: 0.4,
    100: 0.5,
    200: 0.6,
    300: 0.7,
    400: 0.8,
    500: 1.0,
    600: 0.9,
    700: 0.8,
    800: 0.7,
    900: 0.6,
}

# Shade matrix (Tailwind compatible, 50-950) --------------------------------
SHADE_SCALE: Final[Tuple[int, ...]] = (50, 100, 200, 300, 400, 500, 600, 700, 800, 900, 950)
SHADE_LIGHTNESS_MAP: Final[Dict[int, float]] = {
    50: 0.97,
    100: 0.93,
    200: 0.85,
    300: 0.73,
    400: 0.60,
    500: 0.50,
    600: 0.42,
    700: 0.35,
    800: 0.28,
    900: 0.22,
    950: 0.15,
}

# Gradient strip
GRADIENT_STEPS: Final = 9
GRADIENT_LIGHTNESS_MIN: Final = 20.0
GRADIENT_LIGHTNESS_MAX: Final = 95.0

# Harmonies -----------------------------------------------------------------
HARMONY_ANGLES: Final[Dict[HarmonyType, float]] = {
    HarmonyType.COMPLEMENTARY: 180.0,
    HarmonyType.TRIADIC: 120.0,
    HarmonyType.ANALOGOUS: 30.0,
}

# Theme configuration enums -------------------------------------------------
NEUTRAL_PALETTES: Final[Tuple[str, ...]] = ("slate", "gray", "zinc", "neutral", "stone")
THEME_MODES: Final[Tuple[str, ...]] = ("auto", "light", "dark")

# Quick-pick presets (lightness on the 0-100 scale) --------------------------
COLOR_PRESETS: Final[Tuple[ColorPreset, ...]] = (
    ColorPreset("Electric Blue", OklchColor(55, 0.25, 250), "#0066ff", "vibrant"),
    ColorPreset("Vivid Red", OklchColor(55, 0.25, 25), "#ff3333", "vibrant"),
    ColorPreset("Bright Green", OklchColor(60, 0.22, 145), "#00cc66", "vibrant"),
    ColorPreset("Purple", OklchColor(50, 0.24, 300), "#9933ff", "vibrant"),
    ColorPreset("Orange", OklchColor(65, 0.20, 50), "#ff8800", "vibrant"),
    ColorPreset("Cyan", OklchColor(65, 0.18, 200), "#00ccff", "vibrant"),
    ColorPreset("Soft Pink", OklchColor(80, 0.12, 15), "#ffccdd", "pastel"),
    ColorPreset("Mint", OklchColor(85, 0.10, 150), "#ccffee", "pastel"),
    ColorPreset("Lavender", OklchColor(75, 0.12, 290), "#ddccff", "pastel"),
    ColorPreset("Peach", OklchColor(80, 0.11, 40), "#ffeedd", "pastel"),
    ColorPreset("Slate", OklchColor(50, 0.02, 250), "#708090", "neutral"),
    ColorPreset("Stone", OklchColor(55, 0.03, 60), "#8b8680", "neutral"),
    ColorPreset("Zinc", OklchColor(50, 0.01, 0), "#7f7f7f", "neutral"),
    ColorPreset("Navy", OklchColor(25, 0.15, 260), "#001f3f", "dark"),
    ColorPreset("Forest", OklchColor(30, 0.12, 140), "#0d4d2d", "dark"),
    ColorPreset("Burgundy", OklchColor(30, 0.18, 20), "#660033", "dark"),
)


def presets_by_category() -> Dict[str, List[ColorPreset]]:
    """Group presets by category preserving declaration order."""
    grouped: Dict[str, List[ColorPreset]] = {}
    for preset in COLOR_PRESETS:
        grouped.setdefault(preset.category, []).append(preset)
    return grouped


def find_preset(name: str) -> ColorPreset | None:
    lowered = name.strip().lower()
    for preset in COLOR_PRESETS:
        if preset.name.lower() == lowered:
            return preset
    return None


__all__ = [
    "LIGHTNESS_MIN",
    "LIGHTNESS_MAX",
    "CHROMA_MIN",
    "CHROMA_MAX",
    "HUE_MIN",
    "HUE_MAX",
    "ACHROMATIC_CHROMA",
    "ADVISORY_LIGHTNESS_LOW",
    "ADVISORY_LIGHTNESS_HIGH",
    "ADVISORY_CHROMA",
    "ADVISORY_MESSAGE",
    "WCAG_AA_NORMAL",
    "WCAG_AAA_NORMAL",
    "WCAG_AA_LARGE",
    "TEXT_ON_DARK",
    "TEXT_ON_LIGHT",
    "PALETTE_SHADES",
    "BASE_SHADE",
    "LIGHT_SHADE_LIGHTNESS",
    "DARK_SHADE_OFFSETS",
    "SHADE_CHROMA_SCALE",
    "SHADE_SCALE",
    "SHADE_LIGHTNESS_MAP",
    "GRADIENT_STEPS",
    "GRADIENT_LIGHTNESS_MIN",
    "GRADIENT_LIGHTNESS_MAX",
    "HARMONY_ANGLES",
    "NEUTRAL_PALETTES",
    "THEME_MODES",
    "COLOR_PRESETS",
    "presets_by_category",
    "find_preset",
]
