from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

from .bonds import BondValuationResult
from .config import PAR_EPSILON


class BondClassification(str, Enum):
    PAR = "Par"
    PREMIUM = "Premium"
    DISCOUNT = "Discount"


def classify(price: float, face_value: float, epsilon: float = PAR_EPSILON) -> BondClassification:
    """
    Par when |price - face| < epsilon, else Premium above face and Discount below.
    """
    diff = price - face_value
    if abs(diff) < epsilon:
        return BondClassification.PAR
    if diff > 0:
        return BondClassification.PREMIUM
    return BondClassification.DISCOUNT


@dataclass(frozen=True)
class BondAnalysis:
    classification: BondClassification
    price: float
    face_value: float
    premium: float               # price - face, floored at 0
    discount: float              # face - price, floored at 0
    price_per_100: float
    current_yield: float         # annual coupon / price
    coupon_share: float          # PV(coupons) / price
    redemption_share: float      # PV(face) / price
    total_cash_received: float   # undiscounted coupons + redemption
    coupon_rate: float
    yield_to_maturity: float


def analyze(result: BondValuationResult, epsilon: float = PAR_EPSILON) -> BondAnalysis:
    p = result.parameters
    price = result.price
    face = p.face_value
    annual_coupon = face * p.coupon_rate

    return BondAnalysis(
        classification=classify(price, face, epsilon),
        price=price,
        face_value=face,
        premium=max(price - face, 0.0),
        discount=max(face - price, 0.0),
        price_per_100=100.0 * price / face,
        current_yield=annual_coupon / price,
        coupon_share=result.present_value_of_coupons / price,
        redemption_share=result.present_value_of_face_value / price,
        total_cash_received=sum(cf.total_cash_flow for cf in result.cash_flows[1:]) if result.period_count > 0 else face,
        coupon_rate=p.coupon_rate,
        yield_to_maturity=p.yield_to_maturity,
    )


def describe(a: BondAnalysis) -> List[str]:
    """Narrative sentences for the analysis panel."""
    lines: List[str] = []

    if a.classification is BondClassification.PREMIUM:
        lines.append(
            f"Premium bond: price {a.price:,.2f} exceeds face value {a.face_value:,.2f} by {a.premium:,.2f}, "
            f"because the coupon rate ({a.coupon_rate:.2%}) is above the yield to maturity ({a.yield_to_maturity:.2%})."
        )
    elif a.classification is BondClassification.DISCOUNT:
        lines.append(
            f"Discount bond: price {a.price:,.2f} is below face value {a.face_value:,.2f} by {a.discount:,.2f}, "
            f"because the coupon rate ({a.coupon_rate:.2%}) is below the yield to maturity ({a.yield_to_maturity:.2%})."
        )
    else:
        lines.append(
            f"Par bond: price {a.price:,.2f} equals face value {a.face_value:,.2f}; "
            f"the coupon rate matches the yield to maturity ({a.yield_to_maturity:.2%})."
        )

    lines.append(
        f"Coupons account for {a.coupon_share:.1%} of the price and redemption for {a.redemption_share:.1%}."
    )
    lines.append(
        f"Current yield {a.current_yield:.2%}; total undiscounted cash received {a.total_cash_received:,.2f}."
    )
    return lines
