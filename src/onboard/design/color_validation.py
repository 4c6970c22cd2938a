"""OKLCH color validation.

Range violations (lightness, chroma, hue) are accumulated, one issue per
offending field, and make the result invalid. The accessibility advisory
(extreme lightness combined with high chroma) is always reported alongside
them in ``errors`` but never makes a color invalid on its own; callers
decide whether to surface it as a warning.

Validation never raises: malformed numbers (NaN, infinities) are reported
as out of range.
"""

from __future__ import annotations

from typing import List

from .color_types import ColorIssueKind, ColorValidation, OklchColor, ValidationIssue
from .constants import (
    ADVISORY_CHROMA,
    ADVISORY_LIGHTNESS_HIGH,
    ADVISORY_LIGHTNESS_LOW,
    ADVISORY_MESSAGE,
    CHROMA_MAX,
    CHROMA_MIN,
    HUE_MAX,
    HUE_MIN,
    LIGHTNESS_MAX,
    LIGHTNESS_MIN,
)

__all__ = ["validate", "is_valid_oklch", "needs_accessibility_advisory"]


def _range_issue(
    field: str, label: str, value: float, lo: float, hi: float, *, hi_inclusive: bool
) -> ValidationIssue | None:
    within = lo <= value <= hi if hi_inclusive else lo <= value < hi
    if within:
        return None
    bracket = "]" if hi_inclusive else ")"
    return ValidationIssue(
        kind=ColorIssueKind.OUT_OF_RANGE,
        field=field,
        message=f"{label} must be in [{lo:g}, {hi:g}{bracket} (got {value:g})",
    )


def needs_accessibility_advisory(color: OklchColor) -> bool:
    extreme = color.l < ADVISORY_LIGHTNESS_LOW or color.l > ADVISORY_LIGHTNESS_HIGH
    return extreme and color.c > ADVISORY_CHROMA


def validate(color: OklchColor) -> ColorValidation:
    issues: List[ValidationIssue] = []
    checks = (
        _range_issue("l", "lightness", color.l, LIGHTNESS_MIN, LIGHTNESS_MAX, hi_inclusive=True),
        _range_issue("c", "chroma", color.c, CHROMA_MIN, CHROMA_MAX, hi_inclusive=True),
        _range_issue("h", "hue", color.h, HUE_MIN, HUE_MAX, hi_inclusive=False),
    )
    issues.extend(issue for issue in checks if issue is not None)
    valid = not issues
    if needs_accessibility_advisory(color):
        issues.append(
            ValidationIssue(kind=ColorIssueKind.ADVISORY, field="color", message=ADVISORY_MESSAGE)
        )
    return ColorValidation(valid=valid, issues=tuple(issues))


def is_valid_oklch(color: OklchColor) -> bool:
    return validate(color).valid
