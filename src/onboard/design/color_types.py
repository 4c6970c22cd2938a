"""Color value types shared by the design core.

All types are immutable dataclasses compared component-wise. They carry no
behavior beyond light convenience accessors; conversions live in
``color_convert`` and derived data (palettes, contrast, harmonies) in their
own modules.

Ranges (not enforced at construction so the validator can report them):
  OklchColor : l 0-100, c 0-0.4, h 0-360 degrees
  HsvColor   : h 0-360, s 0-100, v 0-100
  RgbColor   : r/g/b integer 0-255
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Mapping, Tuple

__all__ = [
    "HexColor",
    "OklchColor",
    "HsvColor",
    "RgbColor",
    "ColorPalette",
    "ShadeStep",
    "ContrastResult",
    "ShadeContrast",
    "ColorIssueKind",
    "ValidationIssue",
    "ColorValidation",
    "HarmonyType",
    "ColorHarmony",
    "ColorPreset",
]

HexColor = str  # canonical form '#rrggbb' (lowercase)


@dataclass(frozen=True)
class OklchColor:
    l: float  # noqa: E741 - conventional OKLCH component name
    c: float
    h: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return self.l, self.c, self.h

    def to_dict(self) -> Dict[str, float]:
        return {"l": self.l, "c": self.c, "h": self.h}

    @classmethod
    def from_dict(cls, data: Mapping[str, float]) -> "OklchColor":
        return cls(l=float(data["l"]), c=float(data["c"]), h=float(data["h"]))

    def with_hue(self, h: float) -> "OklchColor":
        return OklchColor(self.l, self.c, h)


@dataclass(frozen=True)
class HsvColor:
    h: float
    s: float
    v: float


@dataclass(frozen=True)
class RgbColor:
    r: int
    g: int
    b: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.r, self.g, self.b


@dataclass(frozen=True)
class ColorPalette(Mapping[int, str]):
    """Ten-shade palette derived from one base color.

    Behaves as a read-only mapping ``shade -> hex`` (``palette[500]``) and
    keeps the OKLCH value each shade was rendered from in ``colors``.
    """

    base: OklchColor
    shades: Mapping[int, str]
    colors: Mapping[int, OklchColor] = field(default_factory=dict)

    def __getitem__(self, shade: int) -> str:
        return self.shades[shade]

    def __iter__(self) -> Iterator[int]:
        return iter(self.shades)

    def __len__(self) -> int:
        return len(self.shades)

    def lightness(self, shade: int) -> float:
        """Target OKLCH lightness the shade was generated with."""
        return self.colors[shade].l

    def to_dict(self) -> Dict[str, str]:
        return {str(shade): hex_value for shade, hex_value in self.shades.items()}

    def css_variables(self, prefix: str = "--color-primary") -> Dict[str, str]:
        return {f"{prefix}-{shade}": hex_value for shade, hex_value in self.shades.items()}


@dataclass(frozen=True)
class ShadeStep:
    weight: int
    color: OklchColor
    hex: HexColor


@dataclass(frozen=True)
class ContrastResult:
    ratio: float
    wcag_aa: bool
    wcag_aaa: bool
    wcag_aa_large: bool

    def to_dict(self) -> Dict[str, object]:
        return {
            "ratio": round(self.ratio, 2),
            "wcagAA": self.wcag_aa,
            "wcagAAA": self.wcag_aaa,
            "wcagAALarge": self.wcag_aa_large,
        }


@dataclass(frozen=True)
class ShadeContrast:
    shade: int
    ratio: float
    passes: bool
    recommended_text: str  # "white" | "black"


class ColorIssueKind(str, Enum):
    OUT_OF_RANGE = "out_of_range"
    ADVISORY = "advisory"


@dataclass(frozen=True)
class ValidationIssue:
    kind: ColorIssueKind
    field: str  # "l" | "c" | "h" | "color" for cross-field advisories
    message: str


@dataclass(frozen=True)
class ColorValidation:
    valid: bool
    issues: Tuple[ValidationIssue, ...] = ()

    @property
    def errors(self) -> List[str]:
        """Every reported message, blocking and advisory alike."""
        return [issue.message for issue in self.issues]

    @property
    def blocking(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.kind is ColorIssueKind.OUT_OF_RANGE]

    @property
    def advisories(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.kind is ColorIssueKind.ADVISORY]


class HarmonyType(str, Enum):
    COMPLEMENTARY = "complementary"
    TRIADIC = "triadic"
    ANALOGOUS = "analogous"


@dataclass(frozen=True)
class ColorHarmony:
    type: HarmonyType
    colors: Tuple[OklchColor, ...]
    names: Tuple[str, ...]


@dataclass(frozen=True)
class ColorPreset:
    name: str
    color: OklchColor
    hex: HexColor
    category: str  # vibrant | pastel | neutral | dark
