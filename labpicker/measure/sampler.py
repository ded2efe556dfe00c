# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
Region sampling.

Averages a small square of source pixels around a center pixel. Pixels
are read through a reader callable supplied by the image surface:

    reader(x, y, width, height) -> flat RGBA bytes, row-major, 4 per pixel

This mirrors what a 2D canvas offers, and lets the core stay independent
of how the image is decoded or held in memory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Union

import numpy as np
from numpy.typing import NDArray

from labpicker.errors import SampleError
from labpicker.schema import PixelCoord, RGBColor, SampleWindow, Size

logger = logging.getLogger(__name__)

PixelReader = Callable[[int, int, int, int], Union[bytes, bytearray, memoryview, NDArray[np.uint8]]]


def compute_sample_window(
    center: PixelCoord,
    sample_size: int,
    bounds: Union[Size, tuple[int, int]],
) -> SampleWindow:
    """
    Clamp a sample_size × sample_size square around center to the image.

    Args:
        center: Center pixel in source space
        sample_size: Side of the window (positive, odd)
        bounds: Image size in source pixels

    Returns:
        SampleWindow, smaller than sample_size where it meets an edge

    Raises:
        ValueError: sample_size is not a positive odd integer
        SampleError: The clamped window is empty
    """
    if sample_size < 1 or sample_size % 2 == 0:
        raise ValueError(f"Sample size must be a positive odd integer, got {sample_size}")
    if not isinstance(bounds, Size):
        bounds = Size(*bounds)

    half = sample_size // 2
    start_x = max(0, center.x - half)
    start_y = max(0, center.y - half)
    end_x = min(int(bounds.width), center.x + half + 1)
    end_y = min(int(bounds.height), center.y + half + 1)

    width = end_x - start_x
    height = end_y - start_y
    if width <= 0 or height <= 0:
        raise SampleError(
            f"Empty sample window at ({center.x}, {center.y}) "
            f"in {bounds.width}x{bounds.height} image"
        )
    return SampleWindow(start_x, start_y, width, height)


def _round_half_up(value: NDArray[np.float64]) -> NDArray[np.int64]:
    """Round to nearest, halves away from zero (values are non-negative)."""
    return np.floor(value + 0.5).astype(np.int64)


def average_color(
    reader: PixelReader,
    center: PixelCoord,
    sample_size: int,
    bounds: Union[Size, tuple[int, int]],
) -> RGBColor:
    """
    Average the RGB of the pixels around center, ignoring alpha.

    The region is read in one call. Near an edge only the in-bounds pixels
    are averaged.

    Args:
        reader: Pixel read capability (see module docstring)
        center: Center pixel in source space
        sample_size: Side of the window (positive, odd)
        bounds: Image size in source pixels

    Returns:
        Averaged RGBColor, each channel rounded to the nearest integer

    Raises:
        SampleError: Empty window, or the reader returned a buffer whose
            size does not match the requested region
    """
    window = compute_sample_window(center, sample_size, bounds)
    return average_window(reader, window)


def average_window(reader: PixelReader, window: SampleWindow) -> RGBColor:
    """Average the RGB of every pixel in an already-clamped window."""
    raw = reader(window.x, window.y, window.width, window.height)
    data = np.frombuffer(raw, dtype=np.uint8) if not isinstance(raw, np.ndarray) else raw.ravel()

    expected = window.pixel_count * 4
    if data.size != expected:
        raise SampleError(
            f"Pixel reader returned {data.size} bytes for a "
            f"{window.width}x{window.height} region, expected {expected}"
        )

    rgba = data.reshape(-1, 4)
    totals = rgba[:, :3].sum(axis=0, dtype=np.int64)
    r, g, b = _round_half_up(totals / window.pixel_count)

    color = RGBColor(int(r), int(g), int(b))
    logger.debug("averaged %d pixels in %s -> %s", window.pixel_count, window, color.as_tuple())
    return color


# =============================================================================
# Pixel sources
# =============================================================================


class ArrayPixelReader:
    """
    Pixel reader over an in-memory image.

    Wraps an (H, W, 3) or (H, W, 4) uint8 array and serves rectangular
    reads as flat RGBA bytes. RGB images are given an opaque alpha.
    """

    def __init__(self, pixels: NDArray[np.uint8]):
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError(
                f"Expected (H, W, 3) or (H, W, 4) array, got shape {pixels.shape}"
            )
        if pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 array, got {pixels.dtype}")

        if pixels.shape[2] == 3:
            alpha = np.full(pixels.shape[:2] + (1,), 255, dtype=np.uint8)
            pixels = np.concatenate([pixels, alpha], axis=2)
        self._pixels = np.ascontiguousarray(pixels)

    @property
    def size(self) -> Size:
        height, width = self._pixels.shape[:2]
        return Size(width, height)

    def __call__(self, x: int, y: int, width: int, height: int) -> bytes:
        img_h, img_w = self._pixels.shape[:2]
        if x < 0 or y < 0 or width < 1 or height < 1 or x + width > img_w or y + height > img_h:
            raise SampleError(
                f"Region ({x}, {y}, {width}x{height}) is outside the "
                f"{img_w}x{img_h} image"
            )
        return self._pixels[y:y + height, x:x + width].tobytes()


def load_image(path: Union[str, Path]) -> NDArray[np.uint8]:
    """
    Decode an image file to an (H, W, 4) uint8 RGBA array.

    No color-profile conversion is applied; embedded ICC profiles are
    ignored.
    """
    try:
        from PIL import Image
    except ImportError as e:
        raise ImportError(
            "Pillow is required for image loading. "
            "Install with: pip install Pillow"
        ) from e

    with Image.open(path) as img:
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        pixels = np.array(img, dtype=np.uint8)

    logger.debug("loaded %s (%dx%d)", path, pixels.shape[1], pixels.shape[0])
    return pixels
