# -*- coding: utf-8 -*-
"""
Miscellaneous Utilities - Angle formatting and safe vector arithmetic.

Provides decimal degrees <-> degrees/minutes/seconds conversions and the
small vector helpers shared by the geometry modules, which map degenerate
inputs (zero-length vectors, zero denominators) to NaN or zero instead of
raising or propagating infinities.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from typing import Tuple, Union
import numpy as np


# ===================================================================
# Degrees / Minutes / Seconds
# ===================================================================

def dd_to_dms(dd: float) -> Tuple[float, float, float]:
    """
    Convert decimal degrees to degrees, minutes, seconds.

    The sign is carried by the degrees term only, so ``-0.5`` yields
    ``(-0.0, 30.0, 0.0)``.

    Parameters
    ----------
    dd : float
        Angle in decimal degrees.

    Returns
    -------
    tuple of float
        (degrees, minutes, seconds).
    """
    d = float(np.trunc(dd))
    minutes = abs(dd - d) * 60.0
    m = float(np.trunc(minutes))
    s = (minutes - m) * 60.0
    return d, m, s


def dms_to_dd(d: float, m: float, s: float) -> float:
    """
    Convert degrees, minutes, seconds to decimal degrees.

    Parameters
    ----------
    d : float
        Degrees, carrying the sign of the angle.
    m : float
        Minutes, non-negative.
    s : float
        Seconds, non-negative.

    Returns
    -------
    float
        Angle in decimal degrees.
    """
    frac = (m + s / 60.0) / 60.0
    if d < 0.0:
        return -(-d + frac)
    return d + frac


def dd_to_dms_string(dd: float) -> str:
    """Format decimal degrees as ``"D° Mm Ss"`` after rounding to 1e-12 deg."""
    d, m, s = dd_to_dms(round(dd * 1e12) * 1e-12)
    return f"{d:g}° {m:g}m {s:g}s"


# ===================================================================
# Vector helpers
# ===================================================================

def normalize_or_zero(vector: np.ndarray) -> np.ndarray:
    """
    Normalize vector(s) along the last axis, mapping zero vectors to zero.

    Parameters
    ----------
    vector : np.ndarray
        Shape (3,) or (..., 3).

    Returns
    -------
    np.ndarray
        Unit vector(s), or zeros where the input norm is zero or not finite.
    """
    vector = np.asarray(vector, dtype=np.float64)
    norm = np.linalg.norm(vector, axis=-1, keepdims=True)
    with np.errstate(divide='ignore', invalid='ignore'):
        unit = vector / norm
    return np.where((norm > 0.0) & np.isfinite(norm), unit, 0.0)


def safe_divide(
    numerator: Union[float, np.ndarray],
    denominator: Union[float, np.ndarray]
) -> Union[float, np.ndarray]:
    """
    Divide, returning NaN wherever the denominator is zero.

    Parameters
    ----------
    numerator : float or np.ndarray
    denominator : float or np.ndarray

    Returns
    -------
    float or np.ndarray
        ``numerator / denominator`` with NaN for zero denominators. Scalar
        inputs give a Python float.
    """
    num = np.asarray(numerator, dtype=np.float64)
    den = np.asarray(denominator, dtype=np.float64)
    with np.errstate(divide='ignore', invalid='ignore'):
        result = np.where(den != 0.0, num / np.where(den != 0.0, den, 1.0), np.nan)
    if result.ndim == 0:
        return float(result)
    return result


def ground_projection(vector: np.ndarray) -> np.ndarray:
    """Return a copy of vector(s) with the vertical (last) component zeroed."""
    projected = np.array(vector, dtype=np.float64, copy=True)
    projected[..., 2] = 0.0
    return projected


__all__ = [
    "dd_to_dms",
    "dms_to_dd",
    "dd_to_dms_string",
    "normalize_or_zero",
    "safe_divide",
    "ground_projection",
]
