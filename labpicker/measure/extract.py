# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
Reading API.

Composes the converter, difference, mapping and sampling layers into the
operations a picker front end calls. Every operation takes its settings
explicitly; nothing reads a "current illuminant" from ambient state.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

from labpicker.measure.colorspace import rgb_to_lab
from labpicker.measure.difference import delta_e_2000
from labpicker.measure.geometry import (
    PointLike,
    SizeLike,
    compute_rendered_geometry,
    to_source_pixel,
)
from labpicker.measure.sampler import PixelReader, average_window, compute_sample_window
from labpicker.schema import (
    Capture,
    CaptureReading,
    ColorReading,
    Illuminant,
    PickerSettings,
    RGBColor,
    Size,
    Standard,
)

logger = logging.getLogger(__name__)

StandardLike = Union[Standard, RGBColor]


def _standard_rgb(standard: Optional[StandardLike]) -> Optional[RGBColor]:
    if standard is None:
        return None
    if isinstance(standard, Standard):
        return standard.rgb
    return standard


def read_color(
    rgb: RGBColor,
    settings: PickerSettings = PickerSettings(),
    standard: Optional[StandardLike] = None,
) -> ColorReading:
    """
    Describe a sampled color under the given settings.

    Args:
        rgb: The sampled color
        settings: Illuminant (and sample size) in effect
        standard: Selected reference color, if any

    Returns:
        ColorReading with Lab and, when a standard is given, ΔE2000
    """
    illuminant = settings.illuminant
    lab = rgb_to_lab(rgb, illuminant)
    reference = _standard_rgb(standard)

    delta_e: Optional[float] = None
    if reference is not None:
        delta_e = delta_e_2000(lab, rgb_to_lab(reference, illuminant))

    return ColorReading(rgb=rgb, lab=lab, delta_e=delta_e, standard=reference)


def pick(
    reader: PixelReader,
    pointer: PointLike,
    natural: SizeLike,
    container: SizeLike,
    settings: PickerSettings = PickerSettings(),
    standard: Optional[StandardLike] = None,
) -> ColorReading:
    """
    Sample the image under a pointer and describe the result.

    Full path: letterbox geometry → source pixel → averaged window → Lab/ΔE.

    Args:
        reader: Pixel read capability of the image surface
        pointer: Position relative to the container's top-left corner
        natural: Decoded image size in source pixels
        container: Size of the element displaying the image
        settings: Illuminant and sample window size
        standard: Selected reference color, if any

    Returns:
        ColorReading including the source pixel and the averaged window

    Raises:
        GeometryError: Degenerate image or container size
        SampleError: Empty window or mismatched pixel buffer
    """
    geometry = compute_rendered_geometry(natural, container)
    pixel = to_source_pixel(pointer, geometry, natural)
    bounds = natural if isinstance(natural, Size) else Size(*natural)
    window = compute_sample_window(pixel, settings.sample_size, bounds)
    rgb = average_window(reader, window)

    reading = read_color(rgb, settings, standard)
    logger.debug("picked %s at pixel (%d, %d)", reading.hex, pixel.x, pixel.y)
    return ColorReading(
        rgb=reading.rgb,
        lab=reading.lab,
        delta_e=reading.delta_e,
        standard=reading.standard,
        source_pixel=pixel,
        window=window,
    )


def capture_color(
    rgb: RGBColor,
    standard: Optional[StandardLike] = None,
    *,
    capture_id: Optional[int] = None,
    timestamp: Optional[str] = None,
) -> Capture:
    """
    Record a sample for later comparison.

    Only RGB values are kept, for the sample and for the standard in use;
    Lab and ΔE are recomputed by evaluate_captures.
    """
    kwargs = {}
    if capture_id is not None:
        kwargs["id"] = capture_id
    if timestamp is not None:
        kwargs["timestamp"] = timestamp
    return Capture(rgb=rgb, standard_rgb=_standard_rgb(standard), **kwargs)


def evaluate_capture(capture: Capture, illuminant: Illuminant) -> CaptureReading:
    """Recompute Lab and ΔE2000 for one capture under the given illuminant."""
    lab = rgb_to_lab(capture.rgb, illuminant)
    delta_e: Optional[float] = None
    if capture.standard_rgb is not None:
        delta_e = delta_e_2000(lab, rgb_to_lab(capture.standard_rgb, illuminant))
    return CaptureReading(capture=capture, lab=lab, delta_e=delta_e)


def evaluate_captures(
    captures: Iterable[Capture],
    illuminant: Illuminant,
) -> tuple[CaptureReading, ...]:
    """
    Re-evaluate stored captures under the current illuminant.

    Captures are given oldest first (storage order) and returned newest
    first (display order).
    """
    return tuple(evaluate_capture(c, illuminant) for c in reversed(list(captures)))
