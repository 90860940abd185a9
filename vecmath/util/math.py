from __future__ import annotations

import numpy as np


def to_radians(deg: float) -> float:
    """Convert degrees to radians."""
    return np.pi * deg / 180.0


def to_degrees(rad: float) -> float:
    """Convert radians to degrees."""
    return 180.0 * rad / np.pi


def approx_eq_abs(x: float, y: float, tolerance: float) -> bool:
    """True if |x - y| <= tolerance. Equal infinities compare equal, NaN never does."""
    if tolerance < 0:
        raise ValueError(f"tolerance must be >= 0, got {tolerance}")
    if x == y:
        return True
    xf = float(x)
    yf = float(y)
    if np.isnan(xf) or np.isnan(yf):
        return False
    return abs(xf - yf) <= tolerance


def approx_eq_rel(x: float, y: float, tolerance: float) -> bool:
    """True if |x - y| <= max(|x|, |y|) * tolerance."""
    if tolerance <= 0:
        raise ValueError(f"tolerance must be > 0, got {tolerance}")
    if x == y:
        return True
    xf = float(x)
    yf = float(y)
    if np.isnan(xf) or np.isnan(yf):
        return False
    return abs(xf - yf) <= max(abs(xf), abs(yf)) * tolerance
