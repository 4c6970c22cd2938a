"""Design core package.

Pure color math for the theme editor: OKLCH conversion, palette derivation,
WCAG contrast, validation and harmonies. Nothing here performs I/O.
"""

from .color_types import (  # noqa: F401
    HexColor,
    OklchColor,
    HsvColor,
    RgbColor,
    ColorPalette,
    ShadeStep,
    ContrastResult,
    ShadeContrast,
    ColorIssueKind,
    ValidationIssue,
    ColorValidation,
    HarmonyType,
    ColorHarmony,
    ColorPreset,
)
from .color_convert import (  # noqa: F401
    InvalidColorFormat,
    oklch_to_rgb,
    rgb_to_oklch,
    rgb_to_hex,
    hex_to_rgb,
    hsv_to_rgb,
    rgb_to_hsv,
    hsv_to_oklch,
    to_rgb,
    to_hex,
    from_rgb,
    from_hex,
    normalize_hex,
    is_valid_hex,
    oklch_to_css,
    parse_oklch_css,
    clamp_oklch,
    in_srgb_gamut,
    fit_to_gamut,
    round_oklch,
)
from .palette import (  # noqa: F401
    generate_palette,
    generate_palette_custom,
    generate_shade_scale,
    generate_gradient,
    adjust_lightness,
    adjust_chroma,
    rotate_hue,
    adjust_palette_brightness,
)
from .contrast import (  # noqa: F401
    relative_luminance,
    contrast_ratio,
    contrast,
    oklch_contrast,
    accessible_text_color,
    validate_palette_contrast,
    check_palette_against,
    suggest_contrast_fix,
)
from .color_validation import validate, is_valid_oklch  # noqa: F401
from .harmony import harmony, all_harmonies  # noqa: F401
from .constants import COLOR_PRESETS, presets_by_category, find_preset  # noqa: F401
