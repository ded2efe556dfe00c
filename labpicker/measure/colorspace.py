# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
Color space conversions.

Conversion chain: sRGB → Linear RGB → CIE XYZ → CIE L*a*b*

References:
- sRGB: IEC 61966-2-1
- CIE L*a*b*: CIE 15:2004

The sRGB→XYZ matrix is always the sRGB/D65 primaries matrix. Choosing a
different illuminant only changes the white point XYZ is normalized by
before the Lab nonlinearity; there is no chromatic adaptation transform.

All array conversions are pure NumPy and operate on shape (..., 3).
"""

from __future__ import annotations

import logging
from typing import Union

import numpy as np
from numpy.typing import NDArray

from labpicker.schema import (
    DEFAULT_ILLUMINANT,
    Illuminant,
    LabColor,
    RGBColor,
    WhitePoint,
    XYZColor,
)

logger = logging.getLogger(__name__)

WhiteReference = Union[Illuminant, WhitePoint]


# =============================================================================
# sRGB → Linear RGB
# =============================================================================


def srgb_to_linear(srgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert sRGB values [0,1] to linear RGB [0,1].

    sRGB uses a piecewise gamma curve:
    - For values <= 0.04045: value / 12.92
    - For values > 0.04045: ((value + 0.055) / 1.055) ^ 2.4
    """
    srgb = np.asarray(srgb, dtype=np.float64)
    linear = np.where(
        srgb > 0.04045,
        np.power((np.maximum(srgb, 0.04045) + 0.055) / 1.055, 2.4),
        srgb / 12.92,
    )
    return linear


# =============================================================================
# Linear RGB → XYZ
# =============================================================================

# sRGB primaries, D65 basis (rows: X, Y, Z)
_M_RGB_TO_XYZ = np.array([
    [0.4124, 0.3576, 0.1805],
    [0.2126, 0.7152, 0.0722],
    [0.0193, 0.1192, 0.9505],
], dtype=np.float64)


def linear_rgb_to_xyz(linear: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert linear RGB [0,1] to XYZ on the 0-100 scale.

    Args:
        linear: Array of shape (..., 3) with linear RGB values

    Returns:
        Array of shape (..., 3) with X, Y, Z (white ≈ 95.05, 100, 108.9)
    """
    linear = np.asarray(linear, dtype=np.float64) * 100.0
    return np.einsum('...j,ij->...i', linear, _M_RGB_TO_XYZ)


# =============================================================================
# XYZ → L*a*b*
# =============================================================================

_EPSILON = 0.008856
_KAPPA_SLOPE = 7.787
_OFFSET = 16.0 / 116.0


def _white_tuple(white: WhiteReference) -> tuple[float, float, float]:
    if isinstance(white, Illuminant):
        white = white.white_point
    return white.as_tuple()


def _lab_f(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """CIE nonlinearity: cube root above ε, linear segment below."""
    return np.where(t > _EPSILON, np.cbrt(t), _KAPPA_SLOPE * t + _OFFSET)


def xyz_to_lab_array(
    xyz: NDArray[np.float64],
    white: WhiteReference = DEFAULT_ILLUMINANT,
) -> NDArray[np.float64]:
    """
    Convert XYZ (0-100 scale) to L*a*b* relative to a white point.

    Args:
        xyz: Array of shape (..., 3) with X, Y, Z
        white: Illuminant preset or explicit white point

    Returns:
        Array of shape (..., 3) with L*, a*, b*
    """
    xyz = np.asarray(xyz, dtype=np.float64)
    ref = np.array(_white_tuple(white), dtype=np.float64)

    f = _lab_f(xyz / ref)
    fx = f[..., 0]
    fy = f[..., 1]
    fz = f[..., 2]

    L = 116.0 * fy - 16.0
    a = 500.0 * (fx - fy)
    b = 200.0 * (fy - fz)

    return np.stack([L, a, b], axis=-1)


# =============================================================================
# Convenience: sRGB uint8 → L*a*b* (full chain)
# =============================================================================


def srgb_uint8_to_lab(
    pixels: NDArray[np.uint8],
    white: WhiteReference = DEFAULT_ILLUMINANT,
) -> NDArray[np.float64]:
    """
    Convert uint8 sRGB pixels [0,255] to L*a*b*.

    Full chain: sRGB → Linear RGB → XYZ → Lab

    Args:
        pixels: Array of shape (..., 3) with sRGB values [0, 255]
        white: Illuminant preset or explicit white point

    Returns:
        Array of shape (..., 3) with L*, a*, b*
    """
    srgb = np.asarray(pixels, dtype=np.float64) / 255.0
    xyz = linear_rgb_to_xyz(srgb_to_linear(srgb))
    return xyz_to_lab_array(xyz, white)


# =============================================================================
# Scalar API (record types)
# =============================================================================


def rgb_to_xyz(rgb: RGBColor) -> XYZColor:
    """Convert a device RGB color to XYZ (0-100 scale, D65 basis)."""
    srgb = np.array(rgb.as_tuple(), dtype=np.float64) / 255.0
    X, Y, Z = linear_rgb_to_xyz(srgb_to_linear(srgb))
    return XYZColor(float(X), float(Y), float(Z))


def xyz_to_lab(xyz: XYZColor, illuminant: Illuminant = DEFAULT_ILLUMINANT) -> LabColor:
    """Convert XYZ to Lab relative to a named illuminant."""
    L, a, b = xyz_to_lab_array(np.array(xyz.as_tuple()), illuminant)
    return LabColor(float(L), float(a), float(b), illuminant)


def rgb_to_lab(rgb: RGBColor, illuminant: Illuminant = DEFAULT_ILLUMINANT) -> LabColor:
    """
    Convert a device RGB color to L*a*b* under the given illuminant.

    Every byte triple is valid input; there are no error cases.

    Example:
        rgb_to_lab(RGBColor(255, 255, 255)) gives L* ≈ 100, a* ≈ 0, b* ≈ 0
        under D65; under A the same white reads strongly blue (b* < 0).
    """
    lab = xyz_to_lab(rgb_to_xyz(rgb), illuminant)
    logger.debug("rgb_to_lab %s under %s -> %s", rgb.as_tuple(), illuminant.value, lab.as_tuple())
    return lab


# =============================================================================
# Hex
# =============================================================================


def rgb_to_hex(rgb: RGBColor) -> str:
    """
    Format an RGB color as an uppercase hex string.

    Returns:
        Hex string like "#3941C8"
    """
    return f"#{rgb.r:02X}{rgb.g:02X}{rgb.b:02X}"


def hex_to_rgb(hex_color: str) -> RGBColor:
    """
    Parse a hex color string.

    Args:
        hex_color: Hex string like "#3941C8" or "3941c8"
    """
    return RGBColor.from_hex(hex_color)
