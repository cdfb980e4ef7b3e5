from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import pandas as pd

from .analysis import analyze, describe
from .bonds import BondParameters, InvalidParameters, compute_valuation
from .config import (
    BOUNDS_PRESETS,
    DEFAULT_COUPON_RATE,
    DEFAULT_FACE_VALUE,
    DEFAULT_FREQUENCY,
    DEFAULT_YEARS,
    DEFAULT_YIELD,
    get_bounds,
)
from .risk import convexity, macaulay_duration, modified_duration, yield_dv01
from .scenarios import run_yield_scenarios
from .schedule import cashflow_table
from .utils import percent_to_rate, rate_to_percent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Price a fixed-coupon bond and show its cash-flow schedule")
    parser.add_argument("--face", type=float, default=DEFAULT_FACE_VALUE, help="Face (par) value")
    parser.add_argument("--coupon", type=float, default=rate_to_percent(DEFAULT_COUPON_RATE), help="Annual coupon rate, in percent")
    parser.add_argument("--ytm", type=float, default=rate_to_percent(DEFAULT_YIELD), help="Annual yield to maturity, in percent")
    parser.add_argument("--years", type=float, default=DEFAULT_YEARS, help="Years to maturity")
    parser.add_argument("--freq", type=int, default=DEFAULT_FREQUENCY, help="Coupon payments per year")
    parser.add_argument("--bounds", default="standard", choices=sorted(BOUNDS_PRESETS), help="Input bounds preset")
    parser.add_argument("--scenarios", action="store_true", help="Also print a parallel yield-shock grid")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s: %(message)s",
    )

    params = BondParameters(
        face_value=args.face,
        coupon_rate=percent_to_rate(args.coupon),
        yield_to_maturity=percent_to_rate(args.ytm),
        years_to_maturity=args.years,
        payment_frequency=args.freq,
    )

    try:
        result = compute_valuation(params, get_bounds(args.bounds))
    except InvalidParameters as e:
        for msg in e.errors:
            print(f"error: {msg}", file=sys.stderr)
        return 2

    print(f"Price: {result.price:,.2f}  (PV of coupons {result.present_value_of_coupons:,.2f} "
          f"+ PV of redemption {result.present_value_of_face_value:,.2f})")
    print(f"Coupon/period: {result.periodic_coupon:,.2f} ({params.payment_frequency}x/yr)  |  "
          f"Yield/period: {rate_to_percent(result.periodic_yield):.3f}%  |  Periods: {result.period_count}")
    print()

    with pd.option_context("display.float_format", "{:,.2f}".format):
        print(cashflow_table(result).to_string(index=False))
    print()

    for line in describe(analyze(result)):
        print(line)

    if result.period_count > 0:
        print(
            f"Macaulay duration {macaulay_duration(result):.3f}y, modified {modified_duration(result):.3f}, "
            f"DV01 {yield_dv01(params):.4f}, convexity {convexity(params):.2f}"
        )

    if args.scenarios:
        print()
        with pd.option_context("display.float_format", "{:,.4f}".format):
            print(run_yield_scenarios(params).to_string(index=False))

    return 0
