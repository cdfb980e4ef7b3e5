from __future__ import annotations

import numpy as np
import pandas as pd

from .bonds import BondValuationResult


def cashflow_table(result: BondValuationResult) -> pd.DataFrame:
    """
    One row per period, row 0 being the purchase.

    present_value discounts each total at the periodic yield; over rows 1..N it
    sums to the price, and row 0 carries -price undiscounted.
    """
    rows = [
        (cf.period_index, cf.time_years, cf.coupon_payment, cf.principal_payment, cf.total_cash_flow)
        for cf in result.cash_flows
    ]
    out = pd.DataFrame(rows, columns=["period_index", "time_years", "coupon", "principal", "total"])

    periods = out["period_index"].to_numpy(dtype=float)
    out["discount_factor"] = 1.0 / np.power(1.0 + result.periodic_yield, periods)
    out["present_value"] = out["total"] * out["discount_factor"]
    return out


def chart_series(result: BondValuationResult) -> pd.DataFrame:
    """
    The two bar series of the cash-flow chart, indexed by time in years:
    coupons, and principal (negative price at t=0, redemption at maturity).
    """
    table = cashflow_table(result)
    out = table[["time_years", "coupon", "principal"]].rename(columns={"principal": "principal_or_price"})
    return out.set_index("time_years")
