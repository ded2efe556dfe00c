# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
Color sample types: canonical records for picking and comparing colors.

Design principles:
- Immutable: All types are frozen dataclasses
- Deterministic: Same input → same value
- Recomputable: Lab values are derived from an RGB sample and an illuminant,
  never stored on their own
- Serializable: JSON-ready for the storage layer of the host application

CIE L*a*b* is relative to a reference white:
- L* (Lightness): 0 = black, 100 = white
- a*: green (−) to red (+)
- b*: blue (−) to yellow (+)

A LabColor remembers which illuminant produced it. Two Lab values computed
under different illuminants are not comparable.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum


# =============================================================================
# Parsing Helpers
# =============================================================================

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


def _parse_hex(s: str) -> tuple[int, int, int]:
    """Parse '#RRGGBB' (or 'RRGGBB') into an (r, g, b) tuple."""
    m = _HEX_RE.match(s.strip())
    if not m:
        raise ValueError(f"Expected a 6-digit hex color, got {s!r}")
    digits = m.group(1)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


# =============================================================================
# Core Color Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class RGBColor:
    """
    A device sRGB color, one byte per channel.

    This is the only color value that is ever stored. Everything else
    (XYZ, Lab, ΔE) is recomputed from it on demand.

    Attributes:
        r: Red (0-255)
        g: Green (0-255)
        b: Blue (0-255)
    """
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        """Validate channels are bytes."""
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Channel {name} must be an int, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} must be 0-255, got {value}")

    @property
    def hex(self) -> str:
        """Hex string like "#3941C8"."""
        from labpicker.measure.colorspace import rgb_to_hex
        return rgb_to_hex(self)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"r": self.r, "g": self.g, "b": self.b}

    @classmethod
    def from_dict(cls, data: dict) -> RGBColor:
        """Deserialize from dictionary."""
        return cls(r=int(data["r"]), g=int(data["g"]), b=int(data["b"]))

    @classmethod
    def from_hex(cls, hex_color: str) -> RGBColor:
        """Parse a hex string like "#3941C8" or "3941c8"."""
        r, g, b = _parse_hex(hex_color)
        return cls(r, g, b)


@dataclass(frozen=True, slots=True)
class WhitePoint:
    """
    Reference white tristimulus values (0-100 scale, Y normally 100).

    Attributes:
        X, Y, Z: Tristimulus values of the reference white
    """
    X: float
    Y: float
    Z: float

    def __post_init__(self) -> None:
        """Validate components are positive and finite."""
        for name in ("X", "Y", "Z"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0.0:
                raise ValueError(f"White point {name} must be > 0, got {value}")

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.X, self.Y, self.Z)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"X": self.X, "Y": self.Y, "Z": self.Z}


class Illuminant(Enum):
    """
    Supported reference illuminants (CIE 1931 2° observer).

    Selecting one is a configuration choice. The sRGB→XYZ matrix does not
    change with the illuminant; only the white-point normalization does.
    """
    D65 = "D65"  # Daylight, default
    A = "A"      # Tungsten / incandescent
    F2 = "F2"    # Cool white fluorescent
    D50 = "D50"  # Horizon daylight, print viewing

    @property
    def white_point(self) -> WhitePoint:
        return WHITE_POINTS[self]

    @property
    def label(self) -> str:
        return _ILLUMINANT_LABELS[self]


WHITE_POINTS = {
    Illuminant.D65: WhitePoint(95.047, 100.000, 108.883),
    Illuminant.A: WhitePoint(109.850, 100.000, 35.585),
    Illuminant.F2: WhitePoint(99.187, 100.000, 67.395),
    Illuminant.D50: WhitePoint(96.422, 100.000, 82.521),
}

_ILLUMINANT_LABELS = {
    Illuminant.D65: "Daylight (D65)",
    Illuminant.A: "Incandescent (A)",
    Illuminant.F2: "Cool white fluorescent (F2)",
    Illuminant.D50: "Horizon daylight (D50)",
}

DEFAULT_ILLUMINANT = Illuminant.D65


@dataclass(frozen=True, slots=True)
class XYZColor:
    """CIE XYZ tristimulus values on the 0-100 scale (sRGB/D65 primaries)."""
    X: float
    Y: float
    Z: float

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.X, self.Y, self.Z)


@dataclass(frozen=True, slots=True)
class LabColor:
    """
    A color in CIE L*a*b*, relative to the illuminant that produced it.

    LabColor is derived, never persisted. Recompute it from the RGB sample
    whenever the illuminant changes.

    Attributes:
        L: Lightness (0 = black, 100 = white)
        a: Green (−) to red (+), practically within [-128, 127]
        b: Blue (−) to yellow (+), practically within [-128, 127]
        illuminant: Reference white the value is relative to
    """
    L: float
    a: float
    b: float
    illuminant: Illuminant = DEFAULT_ILLUMINANT

    @property
    def chroma(self) -> float:
        """C*ab = hypot(a*, b*)."""
        return math.hypot(self.a, self.b)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.L, self.a, self.b)

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "L": self.L,
            "a": self.a,
            "b": self.b,
            "illuminant": self.illuminant.value,
        }


# =============================================================================
# Geometry Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class Size:
    """Width and height of an image or a container, in pixels."""
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class Point:
    """A position in a continuous (container or rendered) coordinate space."""
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class PixelCoord:
    """Integer pixel indices in source-image space."""
    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Pixel indices must be >= 0, got ({self.x}, {self.y})")


@dataclass(frozen=True, slots=True)
class RenderedImageGeometry:
    """
    Where a letterboxed ("contain" fit) image sits inside its container.

    At most one of offset_x / offset_y is nonzero: the image fills the
    container along one axis and is centered along the other.

    Example: a 1600×900 image in an 800×800 container

        ┌──────────────────────┐ ─┬─ offset_y = 175
        │                      │  │
        ├──────────────────────┤ ─┴─
        │                      │  rendered 800 × 450
        │        image         │
        │                      │
        ├──────────────────────┤
        │                      │
        └──────────────────────┘
    """
    rendered_width: float
    rendered_height: float
    offset_x: float
    offset_y: float

    def contains(self, point: Point) -> bool:
        """True if a container-relative point lies on the rendered image."""
        return (
            self.offset_x <= point.x <= self.offset_x + self.rendered_width
            and self.offset_y <= point.y <= self.offset_y + self.rendered_height
        )

    @property
    def center(self) -> Point:
        """Container-relative center of the rendered image."""
        return Point(
            self.offset_x + self.rendered_width / 2,
            self.offset_y + self.rendered_height / 2,
        )

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "rendered_width": self.rendered_width,
            "rendered_height": self.rendered_height,
            "offset_x": self.offset_x,
            "offset_y": self.offset_y,
        }


@dataclass(frozen=True, slots=True)
class SampleWindow:
    """
    Rectangle of source pixels averaged into one sample.

    Half-open: covers columns [x, x + width) and rows [y, y + height).
    Clamped to the image, so near an edge it is smaller than the sample size.
    """
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Sample window must be at least 1x1, got {self.width}x{self.height}"
            )

    @property
    def x_end(self) -> int:
        return self.x + self.width

    @property
    def y_end(self) -> int:
        return self.y + self.height

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}
