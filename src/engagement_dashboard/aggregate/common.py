"""Arithmetic helpers shared by the aggregation modules."""

from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up.

    Python's built-in `round` uses banker's rounding; goals are rounded the
    way a spreadsheet would (2.5 -> 3).
    """
    return int(math.floor(value + 0.5))


def safe_div(numerator: float, denominator: float) -> float:
    """Return numerator / denominator, or 0.0 when the denominator is 0."""
    if not denominator:
        return 0.0
    return numerator / denominator


def pct(numerator: float, denominator: float) -> float:
    """Percentage of `denominator`, 0.0 for a zero denominator."""
    return safe_div(numerator, denominator) * 100.0


def growth_pct(current: float, previous: float) -> float:
    """Percent change from `previous` to `current`, 0.0 without a baseline."""
    return safe_div(current - previous, previous) * 100.0
