# Copyright (c) 2026 Labpicker
# SPDX-License-Identifier: MIT

"""
ΔE color difference metrics over CIE L*a*b*.

- ΔE*76: Euclidean distance in Lab.
- ΔE*2000: CIEDE2000 (Sharma, Wu & Dalal, 2005), kL = kC = kH = 1.

Intermediate angles are carried in degrees and converted to radians only
at each trigonometric call.

Reference thresholds (ΔE2000):
- ΔE < 1: not perceptible
- ΔE 1-2: perceptible on close inspection
- ΔE 2-10: perceptible at a glance
- ΔE > 50: colors are more opposite than similar

Both metrics are total over finite inputs. Lab values being compared must
come from the same illuminant; LabColor arguments are checked for that.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from labpicker.schema import LabColor

LabLike = Union[LabColor, Sequence[float], NDArray[np.float64]]

_POW25_7 = 25.0 ** 7


def _as_lab_array(lab: LabLike) -> NDArray[np.float64]:
    if isinstance(lab, LabColor):
        return np.array(lab.as_tuple(), dtype=np.float64)
    return np.asarray(lab, dtype=np.float64)


def _check_same_illuminant(lab1: LabLike, lab2: LabLike) -> None:
    if (
        isinstance(lab1, LabColor)
        and isinstance(lab2, LabColor)
        and lab1.illuminant is not lab2.illuminant
    ):
        raise ValueError(
            f"Cannot compare Lab values under different illuminants "
            f"({lab1.illuminant.value} vs {lab2.illuminant.value})"
        )


# =============================================================================
# ΔE*76
# =============================================================================


def delta_e_76_batch(
    lab1: NDArray[np.float64],
    lab2: NDArray[np.float64],
) -> NDArray[np.float64]:
    """
    Vectorized ΔE*76 for broadcastable arrays of shape (..., 3).

    Returns:
        Array of shape (...,) with ΔE values
    """
    lab1 = np.asarray(lab1, dtype=np.float64)
    lab2 = np.asarray(lab2, dtype=np.float64)
    delta = lab1 - lab2
    return np.sqrt(np.sum(delta ** 2, axis=-1))


def delta_e_76(lab1: LabLike, lab2: LabLike) -> float:
    """ΔE*76: Euclidean distance between two Lab colors."""
    _check_same_illuminant(lab1, lab2)
    return float(delta_e_76_batch(_as_lab_array(lab1), _as_lab_array(lab2)))


# =============================================================================
# ΔE*2000
# =============================================================================


def delta_e_2000_batch(
    lab1: NDArray[np.float64],
    lab2: NDArray[np.float64],
) -> NDArray[np.float64]:
    """
    Vectorized CIEDE2000 for broadcastable arrays of shape (..., 3).

    Args:
        lab1: Array of shape (..., 3) with L*, a*, b*
        lab2: Array of shape (..., 3) with L*, a*, b*

    Returns:
        Array of shape (...,) with ΔE2000 values
    """
    lab1 = np.asarray(lab1, dtype=np.float64)
    lab2 = np.asarray(lab2, dtype=np.float64)

    L1, a1, b1 = lab1[..., 0], lab1[..., 1], lab1[..., 2]
    L2, a2, b2 = lab2[..., 0], lab2[..., 1], lab2[..., 2]

    # Chroma correction on a*
    C1 = np.hypot(a1, b1)
    C2 = np.hypot(a2, b2)
    avg_C = (C1 + C2) / 2.0
    avg_C7 = avg_C ** 7
    G = 0.5 * (1.0 - np.sqrt(avg_C7 / (avg_C7 + _POW25_7)))
    a1p = (1.0 + G) * a1
    a2p = (1.0 + G) * a2

    C1p = np.hypot(a1p, b1)
    C2p = np.hypot(a2p, b2)

    # Hue angles in [0, 360)
    h1p = np.degrees(np.arctan2(b1, a1p))
    h1p = np.where(h1p < 0, h1p + 360.0, h1p)
    h2p = np.degrees(np.arctan2(b2, a2p))
    h2p = np.where(h2p < 0, h2p + 360.0, h2p)

    chroma_product = C1p * C2p
    achromatic = chroma_product == 0

    # Differences
    dLp = L2 - L1
    dCp = C2p - C1p

    dhp = h2p - h1p
    dhp = np.where(dhp > 180.0, dhp - 360.0, dhp)
    dhp = np.where(dhp < -180.0, dhp + 360.0, dhp)
    dhp = np.where(achromatic, 0.0, dhp)

    dHp = 2.0 * np.sqrt(chroma_product) * np.sin(np.radians(dhp / 2.0))

    # Means
    avg_Lp = (L1 + L2) / 2.0
    avg_Cp = (C1p + C2p) / 2.0

    avg_hp = np.where(
        np.abs(h1p - h2p) > 180.0,
        (h1p + h2p + 360.0) / 2.0,
        (h1p + h2p) / 2.0,
    )
    avg_hp = np.where(achromatic, h1p + h2p, avg_hp)

    # Weighting functions
    T = (
        1.0
        - 0.17 * np.cos(np.radians(avg_hp - 30.0))
        + 0.24 * np.cos(np.radians(2.0 * avg_hp))
        + 0.32 * np.cos(np.radians(3.0 * avg_hp + 6.0))
        - 0.20 * np.cos(np.radians(4.0 * avg_hp - 63.0))
    )
    avg_Lp_50_sq = (avg_Lp - 50.0) ** 2
    S_L = 1.0 + (0.015 * avg_Lp_50_sq) / np.sqrt(20.0 + avg_Lp_50_sq)
    S_C = 1.0 + 0.045 * avg_Cp
    S_H = 1.0 + 0.015 * avg_Cp * T

    # Rotation term
    delta_theta = 30.0 * np.exp(-(((avg_hp - 275.0) / 25.0) ** 2))
    avg_Cp7 = avg_Cp ** 7
    R_C = 2.0 * np.sqrt(avg_Cp7 / (avg_Cp7 + _POW25_7))
    R_T = -np.sin(np.radians(2.0 * delta_theta)) * R_C

    dL_term = dLp / S_L
    dC_term = dCp / S_C
    dH_term = dHp / S_H

    result = dL_term ** 2 + dC_term ** 2 + dH_term ** 2 + R_T * dC_term * dH_term
    # Rounding can leave identical inputs a hair below zero
    return np.sqrt(np.maximum(result, 0.0))


def delta_e_2000(lab1: LabLike, lab2: LabLike) -> float:
    """
    CIEDE2000 color difference between two Lab colors.

    Args:
        lab1: LabColor or (L*, a*, b*) triple
        lab2: LabColor or (L*, a*, b*) triple

    Returns:
        ΔE2000 value (>= 0, lower = more similar)

    Raises:
        ValueError: Both arguments are LabColor values computed under
            different illuminants.
    """
    _check_same_illuminant(lab1, lab2)
    return float(delta_e_2000_batch(_as_lab_array(lab1), _as_lab_array(lab2)))
