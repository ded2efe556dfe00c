# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
Coordinate mapping for a letterboxed image.

Three coordinate spaces are involved:

- Container: pointer position relative to the element holding the image
- Rendered: position relative to the top-left of the scaled image
- Source: integer pixel indices in the decoded image

The image is fitted with "contain" semantics: scaled uniformly to the
largest size that fits, centered along the axis with spare room.
"""

from __future__ import annotations

import logging
import math
from typing import Union

from labpicker.errors import GeometryError
from labpicker.schema import PixelCoord, Point, RenderedImageGeometry, Size

logger = logging.getLogger(__name__)

SizeLike = Union[Size, tuple[float, float]]
PointLike = Union[Point, tuple[float, float]]


def _as_size(size: SizeLike, what: str) -> Size:
    if not isinstance(size, Size):
        size = Size(*size)
    for dim in (size.width, size.height):
        if not math.isfinite(dim) or dim <= 0:
            raise GeometryError(
                f"{what} dimensions must be positive, got {size.width}x{size.height}"
            )
    return size


def _as_point(point: PointLike) -> Point:
    if isinstance(point, Point):
        return point
    return Point(*point)


def _check_geometry(geometry: RenderedImageGeometry) -> None:
    if not (geometry.rendered_width > 0 and geometry.rendered_height > 0):
        raise GeometryError(
            f"Rendered image is empty ({geometry.rendered_width}x{geometry.rendered_height})"
        )


def compute_rendered_geometry(
    natural: SizeLike,
    container: SizeLike,
) -> RenderedImageGeometry:
    """
    Compute where a "contain"-fitted image lands inside its container.

    Args:
        natural: Decoded image size in source pixels
        container: Size of the element displaying the image

    Returns:
        RenderedImageGeometry with the scaled size and letterbox offsets

    Raises:
        GeometryError: Any dimension is zero, negative or non-finite

    Example:
        >>> compute_rendered_geometry(Size(1600, 900), Size(800, 800))
        RenderedImageGeometry(rendered_width=800.0, rendered_height=450.0, offset_x=0.0, offset_y=175.0)
    """
    natural = _as_size(natural, "Image")
    container = _as_size(container, "Container")

    image_aspect = natural.width / natural.height
    container_aspect = container.width / container.height

    if image_aspect > container_aspect:
        # Relatively wider: fill the width, bands above and below
        rendered_width = float(container.width)
        rendered_height = container.width * natural.height / natural.width
        offset_x = 0.0
        offset_y = (container.height - rendered_height) / 2
    else:
        # Relatively taller or same shape: fill the height, bands left and right
        rendered_height = float(container.height)
        rendered_width = container.height * natural.width / natural.height
        offset_y = 0.0
        offset_x = (container.width - rendered_width) / 2

    geometry = RenderedImageGeometry(
        rendered_width=rendered_width,
        rendered_height=rendered_height,
        offset_x=offset_x,
        offset_y=offset_y,
    )
    logger.debug(
        "geometry natural=%sx%s container=%sx%s -> %s",
        natural.width, natural.height, container.width, container.height, geometry,
    )
    return geometry


def to_source_pixel(
    pointer: PointLike,
    geometry: RenderedImageGeometry,
    natural: SizeLike,
) -> PixelCoord:
    """
    Map a container-relative pointer position to a source pixel.

    Pointers over the letterbox bands are clamped onto the nearest image
    edge, so the result is always a valid pixel index.

    Args:
        pointer: Position relative to the container's top-left corner
        geometry: Result of compute_rendered_geometry for the same sizes
        natural: Decoded image size in source pixels

    Returns:
        PixelCoord within [0, width-1] × [0, height-1]
    """
    pointer = _as_point(pointer)
    natural = _as_size(natural, "Image")
    _check_geometry(geometry)

    rendered_x = min(max(pointer.x - geometry.offset_x, 0.0), geometry.rendered_width)
    rendered_y = min(max(pointer.y - geometry.offset_y, 0.0), geometry.rendered_height)

    scale_x = natural.width / geometry.rendered_width
    scale_y = natural.height / geometry.rendered_height

    x = math.floor(rendered_x * scale_x)
    y = math.floor(rendered_y * scale_y)

    max_x = int(math.ceil(natural.width)) - 1
    max_y = int(math.ceil(natural.height)) - 1
    return PixelCoord(min(max(x, 0), max_x), min(max(y, 0), max_y))


def to_container_point(
    pixel: PixelCoord,
    geometry: RenderedImageGeometry,
    natural: SizeLike,
    *,
    center: bool = False,
) -> Point:
    """
    Map a source pixel back to a container-relative position.

    Args:
        pixel: Source pixel indices
        geometry: Result of compute_rendered_geometry for the same sizes
        natural: Decoded image size in source pixels
        center: If True, return the center of the pixel's footprint on
            screen instead of its top-left corner

    Returns:
        Point relative to the container's top-left corner
    """
    natural = _as_size(natural, "Image")
    _check_geometry(geometry)

    shift = 0.5 if center else 0.0
    scale_x = geometry.rendered_width / natural.width
    scale_y = geometry.rendered_height / natural.height
    return Point(
        (pixel.x + shift) * scale_x + geometry.offset_x,
        (pixel.y + shift) * scale_y + geometry.offset_y,
    )


def magnifier_source_rect(
    pointer: PointLike,
    geometry: RenderedImageGeometry,
    natural: SizeLike,
    *,
    zoom: float = 10.0,
    canvas_size: float = 150.0,
) -> tuple[float, float, float]:
    """
    Source region shown by a square magnifier centered on the pointer.

    The magnifier draws canvas_size device pixels at zoom× magnification,
    so it shows a square of canvas_size / zoom source pixels. The region
    is not clamped; parts outside the image are drawn as background.

    Returns:
        (x, y, size) of the source square, in source-pixel units
    """
    pointer = _as_point(pointer)
    natural = _as_size(natural, "Image")
    _check_geometry(geometry)
    if zoom <= 0 or canvas_size <= 0:
        raise GeometryError(f"Magnifier zoom and size must be positive, got {zoom}, {canvas_size}")

    source_size = canvas_size / zoom
    scale_x = natural.width / geometry.rendered_width
    scale_y = natural.height / geometry.rendered_height

    x = (pointer.x - geometry.offset_x) * scale_x - source_size / 2
    y = (pointer.y - geometry.offset_y) * scale_y - source_size / 2
    return x, y, source_size
