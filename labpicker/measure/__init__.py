# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
Measurement core for Labpicker.

Color conversion, ΔE metrics, letterbox coordinate mapping and region
sampling. All operations are pure functions of their arguments.
"""

from labpicker.measure.colorspace import hex_to_rgb, rgb_to_hex, rgb_to_lab, rgb_to_xyz, xyz_to_lab
from labpicker.measure.difference import delta_e_76, delta_e_2000
from labpicker.measure.extract import capture_color, evaluate_captures, pick, read_color
from labpicker.measure.geometry import (
    compute_rendered_geometry,
    magnifier_source_rect,
    to_container_point,
    to_source_pixel,
)
from labpicker.measure.sampler import ArrayPixelReader, average_color, compute_sample_window, load_image

__all__ = [
    # Conversion
    "rgb_to_xyz",
    "xyz_to_lab",
    "rgb_to_lab",
    "rgb_to_hex",
    "hex_to_rgb",
    # Difference
    "delta_e_76",
    "delta_e_2000",
    # Geometry
    "compute_rendered_geometry",
    "to_source_pixel",
    "to_container_point",
    "magnifier_source_rect",
    # Sampling
    "compute_sample_window",
    "average_color",
    "ArrayPixelReader",
    "load_image",
    # Readings
    "read_color",
    "pick",
    "capture_color",
    "evaluate_captures",
]
