"""
Numeric primitives shared by the stat computators.

All functions are pure and operate on plain floats.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence


def is_finite(value: Optional[float]) -> bool:
    """True when ``value`` is a real number (not ``None``, NaN or ±inf)."""
    return value is not None and math.isfinite(value)


def linear_regression_slope(values: Sequence[float]) -> float:
    """Ordinary least-squares slope of ``values`` against their index.

    Returns 0.0 for fewer than two points.
    """
    n = len(values)
    if n < 2:
        return 0.0

    sum_x = sum_y = sum_xy = sum_x2 = 0.0
    for i, y in enumerate(values):
        sum_x += i
        sum_y += y
        sum_xy += i * y
        sum_x2 += i * i

    return (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)


def count_sign_flips(values: Sequence[float]) -> int:
    """Count adjacent pairs whose sign differs. Zero counts as non-negative."""
    flips = 0
    for prev, curr in zip(values, values[1:]):
        if (curr >= 0) != (prev >= 0):
            flips += 1
    return flips


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def normalize(value: float, lo: float, hi: float) -> float:
    """Linearly rescale ``value`` from ``[lo, hi]`` onto ``[0, 100]``, clamped.

    Returns 50.0 when the range is degenerate (``lo == hi``).
    """
    if hi == lo:
        return 50.0
    return clamp((value - lo) / (hi - lo) * 100.0, 0.0, 100.0)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (toward +inf).

    Python's ``round()`` uses banker's rounding; stats and suitability
    scores use half-up so 52.5 → 53 and -2.5 → -2 on every platform.
    """
    return math.floor(value + 0.5)
