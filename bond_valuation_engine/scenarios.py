from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

import numpy as np
import pandas as pd

from .analysis import classify
from .bonds import BondParameters
from .risk import reprice_at_yield

logger = logging.getLogger(__name__)

DEFAULT_SHOCKS_BP = (-100, -50, -25, 0, 25, 50, 100)


def run_yield_scenarios(
    params: BondParameters,
    shocks_bp: Sequence[float] = DEFAULT_SHOCKS_BP,
) -> pd.DataFrame:
    """
    Reprice under parallel yield shocks. pnl is relative to the unshocked price.
    Shocks are applied to the raw kernel, so a shocked yield may go below zero.
    """
    base = reprice_at_yield(params, params.yield_to_maturity)

    rows = []
    for s_bp in shocks_bp:
        ytm = params.yield_to_maturity + s_bp / 10000.0
        px = reprice_at_yield(params, ytm)
        rows.append(
            {
                "ytm_shock_bp": s_bp,
                "ytm": ytm,
                "price": px,
                "pnl": px - base,
                "classification": classify(px, params.face_value).value,
            }
        )

    out = pd.DataFrame(rows)
    logger.debug("Ran %d yield scenarios around ytm=%s", len(out), params.yield_to_maturity)
    return out.sort_values("ytm_shock_bp").reset_index(drop=True)


def price_yield_curve(params: BondParameters, yields: Optional[Iterable[float]] = None) -> pd.DataFrame:
    if yields is None:
        yields = np.linspace(0.0, max(2.0 * params.yield_to_maturity, 0.10), 41)

    ys = np.asarray(list(yields), dtype=float)
    prices = np.array([reprice_at_yield(params, y) for y in ys], dtype=float)
    return pd.DataFrame({"ytm": ys, "price": prices})
