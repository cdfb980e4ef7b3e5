from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

import numpy as np

from .config import DEFAULT_BOUNDS, EngineBounds
from .utils import discount_factors, is_whole_number, period_count, rate_to_percent

logger = logging.getLogger(__name__)


class InvalidParameters(ValueError):
    """Raised when bond inputs fail validation. Carries every violated check."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


@dataclass(frozen=True)
class BondParameters:
    face_value: float
    coupon_rate: float         # annual, decimal
    yield_to_maturity: float   # annual, decimal
    years_to_maturity: float
    payment_frequency: int = 2


@dataclass(frozen=True)
class CashFlowEntry:
    period_index: int
    time_years: float
    coupon_payment: float
    principal_payment: float
    total_cash_flow: float


@dataclass(frozen=True)
class BondValuationResult:
    parameters: BondParameters
    period_count: int
    periodic_coupon: float
    periodic_yield: float
    present_value_of_coupons: float
    present_value_of_face_value: float
    price: float
    cash_flows: Tuple[CashFlowEntry, ...]


def validate(params: BondParameters, bounds: EngineBounds = DEFAULT_BOUNDS) -> List[str]:
    """
    Check every input independently and return all violations, in field order:
    face value, coupon rate, yield, years, frequency. Empty list means valid.
    """
    errors: List[str] = []

    if not (0.0 < params.face_value <= bounds.max_face_value):
        errors.append(f"Face value must be greater than 0 and at most {bounds.max_face_value:,.2f}.")

    max_pct = rate_to_percent(bounds.max_rate)
    if not (0.0 <= params.coupon_rate <= bounds.max_rate):
        errors.append(f"Coupon rate must be between 0% and {max_pct:g}%.")

    if not (0.0 <= params.yield_to_maturity <= bounds.max_rate):
        errors.append(f"Yield to maturity must be between 0% and {max_pct:g}%.")

    if not (bounds.min_years <= params.years_to_maturity <= bounds.max_years):
        errors.append(f"Years to maturity must be between {bounds.min_years:g} and {bounds.max_years:g}.")

    freq = params.payment_frequency
    if bounds.allowed_frequencies is None:
        if not is_whole_number(freq) or not (1 <= freq <= bounds.max_frequency):
            errors.append(f"Payment frequency must be a whole number from 1 to {bounds.max_frequency} payments per year.")
    elif not is_whole_number(freq) or int(freq) not in bounds.allowed_frequencies:
        allowed = ", ".join(str(f) for f in bounds.allowed_frequencies)
        errors.append(f"Payment frequency must be one of: {allowed}.")

    return errors


def _present_values(
    face: float,
    coupon_rate: float,
    ytm: float,
    years: float,
    freq: int,
) -> Tuple[int, float, float, float, float]:
    """
    Returns (n_periods, periodic_coupon, periodic_yield, pv_coupons, pv_face).
    """
    n = period_count(years, freq)
    c = face * (coupon_rate / freq)
    y = ytm / freq
    if 1.0 + y <= 0.0:
        raise ValueError(f"Periodic yield {y} must be above -100%.")

    dfs = discount_factors(y, n)
    pv_coupons = float(np.sum(c / dfs))
    pv_face = face / (1.0 + y) ** n
    return n, c, y, pv_coupons, pv_face


def price_bond(face: float, coupon_rate: float, ytm: float, years: float, freq: int = 2) -> float:
    """
    Unvalidated price kernel: PV of coupons plus PV of redemption.
    Used for bump-and-reprice, where shocked yields may leave the input bounds.
    """
    _, _, _, pv_coupons, pv_face = _present_values(face, coupon_rate, ytm, years, int(freq))
    return pv_coupons + pv_face


def build_cash_flows(n: int, freq: int, coupon: float, face: float, price: float) -> Tuple[CashFlowEntry, ...]:
    rows = [CashFlowEntry(0, 0.0, 0.0, -price, -price)]
    for t in range(1, n + 1):
        principal = face if t == n else 0.0
        rows.append(CashFlowEntry(t, t / freq, coupon, principal, coupon + principal))
    return tuple(rows)


@lru_cache(maxsize=4096)
def _cached_valuation(params: BondParameters) -> BondValuationResult:
    freq = int(params.payment_frequency)
    n, c, y, pv_coupons, pv_face = _present_values(
        params.face_value,
        params.coupon_rate,
        params.yield_to_maturity,
        params.years_to_maturity,
        freq,
    )
    price = pv_coupons + pv_face

    logger.debug("Valued %s: n=%d price=%.6f", params, n, price)

    return BondValuationResult(
        parameters=params,
        period_count=n,
        periodic_coupon=c,
        periodic_yield=y,
        present_value_of_coupons=pv_coupons,
        present_value_of_face_value=pv_face,
        price=price,
        cash_flows=build_cash_flows(n, freq, c, params.face_value, price),
    )


def compute_valuation(params: BondParameters, bounds: EngineBounds = DEFAULT_BOUNDS) -> BondValuationResult:
    """
    Price the bond and build its cash-flow schedule.

    Raises InvalidParameters (with the full error list) instead of computing on
    out-of-range input. Results are memoized on the parameter tuple.
    """
    errors = validate(params, bounds)
    if errors:
        logger.warning("Rejected bond parameters %s: %s", params, "; ".join(errors))
        raise InvalidParameters(errors)

    return _cached_valuation(params)


def try_valuation(params: BondParameters, bounds: EngineBounds = DEFAULT_BOUNDS) -> Optional[BondValuationResult]:
    """Valuation for reactive callers: None when the inputs are invalid."""
    try:
        return compute_valuation(params, bounds)
    except InvalidParameters:
        return None


class BondPricer:
    def __init__(self, bounds: EngineBounds = DEFAULT_BOUNDS):
        self.bounds = bounds

    def validate(self, params: BondParameters) -> None:
        errors = validate(params, self.bounds)
        if errors:
            raise InvalidParameters(errors)

    def value(self, params: BondParameters) -> BondValuationResult:
        return compute_valuation(params, self.bounds)

    def price(self, params: BondParameters) -> float:
        return self.value(params).price
