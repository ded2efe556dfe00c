# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
Schema definitions for color samples, geometry and stored records.

All types in this module are immutable (frozen dataclasses).
Stored records carry RGB only; Lab and ΔE are always recomputed.
"""

from labpicker.schema.color_sample import (
    DEFAULT_ILLUMINANT,
    WHITE_POINTS,
    Illuminant,
    LabColor,
    PixelCoord,
    Point,
    RenderedImageGeometry,
    RGBColor,
    SampleWindow,
    Size,
    WhitePoint,
    XYZColor,
)
from labpicker.schema.records import (
    DEFAULT_SAMPLE_SIZE,
    SAMPLE_SIZES,
    Capture,
    CaptureReading,
    ColorReading,
    PickerSettings,
    Standard,
)

__all__ = [
    # Color types
    "RGBColor",
    "XYZColor",
    "LabColor",
    # Illuminants
    "Illuminant",
    "WhitePoint",
    "WHITE_POINTS",
    "DEFAULT_ILLUMINANT",
    # Geometry types
    "Size",
    "Point",
    "PixelCoord",
    "RenderedImageGeometry",
    "SampleWindow",
    # Configuration
    "PickerSettings",
    "DEFAULT_SAMPLE_SIZE",
    "SAMPLE_SIZES",
    # Stored records
    "Standard",
    "Capture",
    # Derived readings
    "ColorReading",
    "CaptureReading",
]
