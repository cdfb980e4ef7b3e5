from __future__ import annotations

import numpy as np
from scipy.optimize import brentq

from .bonds import BondParameters, BondValuationResult, price_bond


def reprice_at_yield(params: BondParameters, ytm: float) -> float:
    return price_bond(
        params.face_value,
        params.coupon_rate,
        ytm,
        params.years_to_maturity,
        int(params.payment_frequency),
    )


def yield_dv01(params: BondParameters, bp: float = 1.0) -> float:
    """
    Price change for a +bp move in yield to maturity (negative for a long bond).
    """
    h = bp / 10000.0
    return reprice_at_yield(params, params.yield_to_maturity + h) - reprice_at_yield(params, params.yield_to_maturity)


def macaulay_duration(result: BondValuationResult) -> float:
    """PV-weighted average time to each cash flow, in years."""
    n = result.period_count
    if n == 0:
        return 0.0

    freq = int(result.parameters.payment_frequency)
    t = np.arange(1, n + 1, dtype=float)
    cfs = np.full(n, result.periodic_coupon, dtype=float)
    cfs[-1] += result.parameters.face_value

    pv = cfs / np.power(1.0 + result.periodic_yield, t)
    return float(np.sum((t / freq) * pv) / result.price)


def modified_duration(result: BondValuationResult) -> float:
    return macaulay_duration(result) / (1.0 + result.periodic_yield)


def effective_duration(params: BondParameters, bp: float = 1.0) -> float:
    h = bp / 10000.0
    y = params.yield_to_maturity
    p0 = reprice_at_yield(params, y)
    up = reprice_at_yield(params, y + h)
    down = reprice_at_yield(params, y - h)
    return (down - up) / (2.0 * p0 * h)


def convexity(params: BondParameters, bp: float = 1.0) -> float:
    h = bp / 10000.0
    y = params.yield_to_maturity
    p0 = reprice_at_yield(params, y)
    up = reprice_at_yield(params, y + h)
    down = reprice_at_yield(params, y - h)
    return (up + down - 2.0 * p0) / (p0 * h**2)


def yield_from_price(
    target_price: float,
    params: BondParameters,
    lower: float = -0.99,
    upper: float = 1.0,
    tol: float = 1e-12,
) -> float:
    """
    Annual yield to maturity that reproduces target_price for the bond's
    face, coupon, term and frequency. The yield in params is ignored.
    """
    if target_price <= 0:
        raise ValueError("Target price must be positive.")

    freq = int(params.payment_frequency)
    lo = max(lower, -0.99 * freq)

    def f(y: float) -> float:
        return reprice_at_yield(params, y) - target_price

    f_lo, f_hi = f(lo), f(upper)
    if f_lo * f_hi > 0:
        raise ValueError(f"Price {target_price} not bracketed by yields [{lo}, {upper}].")

    return float(brentq(f, lo, upper, xtol=tol, maxiter=200))
