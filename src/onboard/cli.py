"""Command line entry point for the onboard theme tooling.

Usage examples::

    onboard convert "#3b82f6"
    onboard palette "oklch(60% 0.18 262deg)" --css
    onboard contrast "#ffffff" "#3b82f6"
    onboard validate 10 0.35 0
    onboard harmony "Electric Blue" --type triadic
    onboard theme --config _config.yml --yaml

Exit codes: 0 success, 1 a validation or contrast check failed, 2 bad input.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from onboard import __version__
from onboard.config import settings
from onboard.design import (
    HarmonyType,
    InvalidColorFormat,
    OklchColor,
    RgbColor,
    contrast,
    find_preset,
    generate_palette,
    harmony,
    hex_to_rgb,
    normalize_hex,
    oklch_to_css,
    oklch_to_rgb,
    parse_oklch_css,
    rgb_to_hsv,
    rgb_to_oklch,
    to_hex,
    validate,
    validate_palette_contrast,
)
from onboard.services.theme_config import (
    ThemeConfigError,
    generate_yaml_snippet,
    load_theme_config,
    render_css,
)

_logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(level=level.upper(), format=settings.LOG_FORMAT, stream=sys.stderr)


def _parse_rgb(text: str) -> RgbColor:
    """Accept '#rrggbb' / '#rgb', 'oklch(L% C Hdeg)' or a preset name."""
    css = parse_oklch_css(text.strip())
    if css is not None:
        return oklch_to_rgb(css)
    preset = find_preset(text)
    if preset is not None:
        return oklch_to_rgb(preset.color)
    return hex_to_rgb(normalize_hex(text))


def _parse_oklch(text: str) -> OklchColor:
    css = parse_oklch_css(text.strip())
    if css is not None:
        return css
    preset = find_preset(text)
    if preset is not None:
        return preset.color
    return rgb_to_oklch(hex_to_rgb(normalize_hex(text)))


def cmd_convert(args: argparse.Namespace) -> int:
    color = _parse_oklch(args.color)
    rgb = oklch_to_rgb(color)
    hsv = rgb_to_hsv(rgb)
    result = {
        "oklch": oklch_to_css(color),
        "hex": to_hex(color),
        "rgb": [rgb.r, rgb.g, rgb.b],
        "hsv": [round(hsv.h, 1), round(hsv.s, 1), round(hsv.v, 1)],
    }
    if args.json:
        print(json.dumps(result, indent=2))
    else:
        for key, value in result.items():
            print(f"{key}: {value}")
    return 0


def cmd_palette(args: argparse.Namespace) -> int:
    base = _parse_oklch(args.color)
    palette = generate_palette(base)
    if args.json:
        print(json.dumps(palette.to_dict(), indent=2))
    elif args.css:
        for name, value in palette.css_variables(args.prefix).items():
            print(f"{name}: {value};")
    else:
        report = {entry.shade: entry for entry in validate_palette_contrast(base)}
        for shade, hex_value in palette.items():
            entry = report[shade]
            status = "AA" if entry.passes else "--"
            print(
                f"{shade:>3}  {hex_value}  L={palette.lightness(shade):5.1f}"
                f"  text={entry.recommended_text:<5}  {entry.ratio:5.2f}:1 {status}"
            )
    return 0


def cmd_contrast(args: argparse.Namespace) -> int:
    result = contrast(_parse_rgb(args.foreground), _parse_rgb(args.background))
    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(f"ratio: {result.ratio:.2f}:1")
        for label, passed in (
            ("AA", result.wcag_aa),
            ("AAA", result.wcag_aaa),
            ("AA large", result.wcag_aa_large),
        ):
            print(f"{label}: {'pass' if passed else 'fail'}")
    return 0 if result.wcag_aa else 1


def cmd_validate(args: argparse.Namespace) -> int:
    outcome = validate(OklchColor(args.l, args.c, args.h))
    print("valid" if outcome.valid else "invalid")
    for issue in outcome.issues:
        print(f"  [{issue.kind.value}] {issue.field}: {issue.message}")
    return 0 if outcome.valid else 1


def cmd_harmony(args: argparse.Namespace) -> int:
    base = _parse_oklch(args.color)
    result = harmony(base, args.type)
    print(f"base: {to_hex(base)}  {oklch_to_css(base)}")
    for name, color in zip(result.names, result.colors):
        print(f"{name}: {to_hex(color)}  {oklch_to_css(color)}")
    return 0


def cmd_theme(args: argparse.Namespace) -> int:
    theme = load_theme_config(args.config)
    if args.css:
        sys.stdout.write(render_css(theme))
    elif args.yaml:
        sys.stdout.write(generate_yaml_snippet(theme))
    else:
        print(f"brand_primary: {oklch_to_css(theme.brand_primary)} ({to_hex(theme.brand_primary)})")
        if theme.brand_secondary is not None:
            secondary = theme.brand_secondary
            print(f"brand_secondary: {oklch_to_css(secondary)} ({to_hex(secondary)})")
        print(f"neutral: {theme.neutral}")
        print(f"mode: {theme.mode}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="onboard", description="OKLCH theme palette tooling")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=settings.LOG_LEVEL,
        help="Logging level",
    )
    sub = p.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="Show a color in every supported format")
    convert.add_argument("color", help="Hex, oklch(...) or preset name")
    convert.add_argument("--json", action="store_true", help="Output JSON")
    convert.set_defaults(func=cmd_convert)

    palette = sub.add_parser("palette", help="Generate the 50-900 shade palette")
    palette.add_argument("color", help="Base color (hex, oklch(...) or preset name)")
    fmt = palette.add_mutually_exclusive_group()
    fmt.add_argument("--css", action="store_true", help="Output CSS custom properties")
    fmt.add_argument("--json", action="store_true", help="Output JSON")
    palette.add_argument("--prefix", default="--color-primary", help="CSS variable prefix")
    palette.set_defaults(func=cmd_palette)

    check = sub.add_parser("contrast", help="WCAG contrast between two colors")
    check.add_argument("foreground")
    check.add_argument("background")
    check.add_argument("--json", action="store_true", help="Output JSON")
    check.set_defaults(func=cmd_contrast)

    valid = sub.add_parser("validate", help="Validate OKLCH components")
    valid.add_argument("l", type=float, help="Lightness 0-100")
    valid.add_argument("c", type=float, help="Chroma 0-0.4")
    valid.add_argument("h", type=float, help="Hue 0-360")
    valid.set_defaults(func=cmd_validate)

    harm = sub.add_parser("harmony", help="Hue-rotated companion colors")
    harm.add_argument("color")
    harm.add_argument(
        "--type",
        choices=[t.value for t in HarmonyType],
        default=HarmonyType.COMPLEMENTARY.value,
    )
    harm.set_defaults(func=cmd_harmony)

    theme = sub.add_parser("theme", help="Inspect the theme section of a site config")
    theme.add_argument("--config", default=settings.CONFIG_PATH, help="Path to _config.yml")
    out = theme.add_mutually_exclusive_group()
    out.add_argument("--css", action="store_true", help="Output :root CSS variables")
    out.add_argument("--yaml", action="store_true", help="Output a theme: YAML snippet")
    theme.set_defaults(func=cmd_theme)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging(args.log_level)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    _logger.debug("Running %s command", args.command)
    try:
        return args.func(args)
    except InvalidColorFormat as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ThemeConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        for path, messages in exc.errors.items():
            for message in messages:
                print(f"  {path}: {message}", file=sys.stderr)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
