from __future__ import annotations

import math

import numpy as np


def period_count(years: float, freq: int) -> int:
    """
    Number of coupon periods for a term, rounded half-up.

    Products such as 2.5y x 2/yr are integral on the accepted input grids;
    rounding guards against floating-point drift (e.g. 4.999999999).
    """
    return int(math.floor(years * freq + 0.5))


def discount_factors(periodic_yield: float, n: int) -> np.ndarray:
    """
    Compounding factors (1 + y)^t for t = 1..n.

    Empty for n == 0. A zero yield gives all ones.
    """
    t = np.arange(1, n + 1, dtype=float)
    return np.power(1.0 + periodic_yield, t)


def percent_to_rate(pct: float) -> float:
    """8.6 -> 0.086. Used where rates enter from user-facing inputs."""
    return float(pct) / 100.0


def rate_to_percent(rate: float) -> float:
    """0.086 -> 8.6."""
    return float(rate) * 100.0


def is_whole_number(x) -> bool:
    if isinstance(x, bool):
        return False
    if isinstance(x, (int, np.integer)):
        return True
    if isinstance(x, (float, np.floating)):
        return math.isfinite(x) and float(x).is_integer()
    return False
