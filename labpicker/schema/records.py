# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
Settings, stored records and derived readings.

Stored records (Standard, Capture) hold RGB values only. Readings
(ColorReading, CaptureReading) are produced on demand under the
currently selected illuminant and are never persisted.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional

from labpicker.schema.color_sample import (
    DEFAULT_ILLUMINANT,
    Illuminant,
    LabColor,
    PixelCoord,
    RGBColor,
    SampleWindow,
)


DEFAULT_SAMPLE_SIZE = 5

# Sizes offered by the picker's window-size selector
SAMPLE_SIZES = (1, 3, 5, 7, 9, 11)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%S")


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True, slots=True)
class PickerSettings:
    """
    Explicit configuration threaded through every reading.

    Attributes:
        illuminant: Reference white for Lab and ΔE
        sample_size: Side of the square averaging window in source pixels
            (positive, odd)
    """
    illuminant: Illuminant = DEFAULT_ILLUMINANT
    sample_size: int = DEFAULT_SAMPLE_SIZE

    def __post_init__(self) -> None:
        if isinstance(self.sample_size, bool) or not isinstance(self.sample_size, int):
            raise ValueError(f"Sample size must be an int, got {self.sample_size!r}")
        if self.sample_size < 1 or self.sample_size % 2 == 0:
            raise ValueError(
                f"Sample size must be a positive odd integer, got {self.sample_size}"
            )

    def to_dict(self) -> dict:
        """Serialize to the stored settings layout."""
        return {"illuminant": self.illuminant.value, "sampleSize": self.sample_size}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> PickerSettings:
        """
        Restore saved settings.

        Unknown illuminant names and missing or invalid sample sizes fall
        back to the defaults instead of failing, so stale settings never
        block startup.
        """
        if not data:
            return cls()
        try:
            illuminant = Illuminant(data.get("illuminant"))
        except ValueError:
            illuminant = DEFAULT_ILLUMINANT
        sample_size = data.get("sampleSize") or DEFAULT_SAMPLE_SIZE
        try:
            return cls(illuminant=illuminant, sample_size=int(sample_size))
        except (TypeError, ValueError):
            return cls(illuminant=illuminant)


# =============================================================================
# Stored Records
# =============================================================================


@dataclass(frozen=True, slots=True)
class Standard:
    """
    A named reference color the samples are compared against.

    Attributes:
        id: Stable identifier (epoch milliseconds at creation)
        rgb: The reference color
        timestamp: Human-readable creation time
    """
    rgb: RGBColor
    id: int = field(default_factory=_now_ms)
    timestamp: str = field(default_factory=_now_iso)

    def to_dict(self) -> dict:
        """Serialize to the stored layout (flat r/g/b keys)."""
        return {
            "id": self.id,
            "r": self.rgb.r,
            "g": self.rgb.g,
            "b": self.rgb.b,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Standard:
        """Deserialize from dictionary."""
        return cls(
            rgb=RGBColor.from_dict(data),
            id=data["id"],
            timestamp=data.get("timestamp", ""),
        )


@dataclass(frozen=True, slots=True)
class Capture:
    """
    A captured sample, optionally tied to the standard selected at capture time.

    Only RGB values are stored. Lab and ΔE are recomputed every time the
    capture is displayed, so switching the illuminant re-evaluates all
    captures consistently.

    Attributes:
        id: Stable identifier (epoch milliseconds at capture)
        rgb: The sampled color
        standard_rgb: RGB of the standard in use when captured, if any
        timestamp: Human-readable capture time
    """
    rgb: RGBColor
    standard_rgb: Optional[RGBColor] = None
    id: int = field(default_factory=_now_ms)
    timestamp: str = field(default_factory=_now_iso)

    @property
    def hex(self) -> str:
        return self.rgb.hex

    def to_dict(self) -> dict:
        """Serialize to the stored layout."""
        return {
            "id": self.id,
            "r": self.rgb.r,
            "g": self.rgb.g,
            "b": self.rgb.b,
            "hex": self.hex,
            "standardUsedRgb": (
                self.standard_rgb.to_dict() if self.standard_rgb is not None else None
            ),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Capture:
        """
        Deserialize from dictionary.

        Derived keys written by older versions (l, a, b_lab, deltaE) are
        ignored; they are recomputed on read.
        """
        standard = data.get("standardUsedRgb")
        return cls(
            rgb=RGBColor.from_dict(data),
            standard_rgb=RGBColor.from_dict(standard) if standard else None,
            id=data["id"],
            timestamp=data.get("timestamp", ""),
        )


# =============================================================================
# Derived Readings
# =============================================================================


@dataclass(frozen=True, slots=True)
class ColorReading:
    """
    Everything the picker shows for the current sample.

    Attributes:
        rgb: Averaged sample color
        lab: Lab under the illuminant in effect
        delta_e: ΔE2000 against the selected standard, None without one
        standard: The standard compared against, if any
        source_pixel: Center pixel of the sample, when picked from an image
        window: Source-pixel rectangle that was averaged, when picked
    """
    rgb: RGBColor
    lab: LabColor
    delta_e: Optional[float] = None
    standard: Optional[RGBColor] = None
    source_pixel: Optional[PixelCoord] = None
    window: Optional[SampleWindow] = None

    @property
    def hex(self) -> str:
        return self.rgb.hex

    @property
    def illuminant(self) -> Illuminant:
        return self.lab.illuminant

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        d = {
            "rgb": self.rgb.to_dict(),
            "hex": self.hex,
            "lab": self.lab.to_dict(),
            "delta_e": self.delta_e,
        }
        if self.standard is not None:
            d["standard"] = self.standard.to_dict()
        if self.source_pixel is not None:
            d["source_pixel"] = {"x": self.source_pixel.x, "y": self.source_pixel.y}
        if self.window is not None:
            d["window"] = self.window.to_dict()
        return d


@dataclass(frozen=True, slots=True)
class CaptureReading:
    """A stored capture re-evaluated under the current illuminant."""
    capture: Capture
    lab: LabColor
    delta_e: Optional[float] = None

    @property
    def illuminant(self) -> Illuminant:
        return self.lab.illuminant

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "id": self.capture.id,
            "rgb": self.capture.rgb.to_dict(),
            "hex": self.capture.hex,
            "standard": (
                self.capture.standard_rgb.to_dict()
                if self.capture.standard_rgb is not None else None
            ),
            "lab": self.lab.to_dict(),
            "delta_e": self.delta_e,
            "timestamp": self.capture.timestamp,
        }
