# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
Labpicker -- Sample colors from an on-screen image and compare them in CIE Lab.

Maps a pointer over a letterboxed image to source pixels, averages a small
window, converts to L*a*b* under a chosen illuminant and reports ΔE2000
against a reference standard.

Quick start::

    from labpicker import ArrayPixelReader, PickerSettings, load_image, pick

    pixels = load_image("swatch.png")
    reader = ArrayPixelReader(pixels)
    reading = pick(reader, (400, 300), reader.size, (800, 600), PickerSettings())
    reading.hex   # "#3941C8"
    reading.lab   # LabColor(L=..., a=..., b=..., illuminant=D65)
"""

from __future__ import annotations

__version__ = "1.0.0"

from labpicker.errors import GeometryError, LabPickerError, SampleError
from labpicker.measure import (
    ArrayPixelReader,
    average_color,
    capture_color,
    compute_rendered_geometry,
    delta_e_76,
    delta_e_2000,
    evaluate_captures,
    load_image,
    pick,
    read_color,
    rgb_to_lab,
    to_container_point,
    to_source_pixel,
)
from labpicker.schema import (
    Capture,
    ColorReading,
    Illuminant,
    LabColor,
    PickerSettings,
    RGBColor,
    Standard,
)

__all__ = [
    # Core API
    "pick",
    "read_color",
    "capture_color",
    "evaluate_captures",
    "rgb_to_lab",
    "delta_e_76",
    "delta_e_2000",
    "compute_rendered_geometry",
    "to_source_pixel",
    "to_container_point",
    "average_color",
    "ArrayPixelReader",
    "load_image",
    # Types (commonly needed)
    "RGBColor",
    "LabColor",
    "Illuminant",
    "PickerSettings",
    "Standard",
    "Capture",
    "ColorReading",
    # Errors
    "LabPickerError",
    "GeometryError",
    "SampleError",
    # Version
    "__version__",
]
