"""Scalar helpers shared by the crop and overlay geometry. No package imports."""

from __future__ import annotations

import math


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 → 3, -2.5 → -3).

    Python's built-in round() is banker's rounding; crop rectangles must be
    reproducible at pixel granularity, so ties never go to even.
    """
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def is_finite_positive(value: float) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0
