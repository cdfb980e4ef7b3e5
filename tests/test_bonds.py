import numpy as np
import pytest

from bond_valuation_engine.bonds import (
    BondParameters,
    BondPricer,
    InvalidParameters,
    compute_valuation,
    price_bond,
    try_valuation,
    validate,
)
from bond_valuation_engine.config import CLASSIC_BOUNDS, EngineBounds, LOOSE_BOUNDS, STANDARD_BOUNDS, get_bounds


@pytest.fixture(scope="module")
def premium_bond():
    return BondParameters(
        face_value=100.0,
        coupon_rate=0.086,
        yield_to_maturity=0.065,
        years_to_maturity=5,
        payment_frequency=2,
    )


@pytest.fixture(scope="module")
def premium_result(premium_bond):
    return compute_valuation(premium_bond)


def test_reference_bond_values(premium_result):
    r = premium_result
    assert r.period_count == 10
    assert r.periodic_coupon == pytest.approx(4.30, abs=1e-12)
    assert r.periodic_yield == pytest.approx(0.0325, abs=1e-12)

    # closed-form annuity + redemption
    v = 1.0325 ** -10
    expected = 4.30 * (1 - v) / 0.0325 + 100.0 * v
    assert np.isclose(r.price, expected, rtol=1e-12)
    assert r.price == pytest.approx(108.84, abs=0.01)
    assert r.price > 100.0, "coupon above yield must price at a premium"


def test_reference_bond_schedule(premium_result):
    flows = premium_result.cash_flows
    assert len(flows) == 11

    first = flows[0]
    assert first.period_index == 0 and first.time_years == 0.0
    assert first.coupon_payment == 0.0
    assert first.total_cash_flow == -premium_result.price
    assert first.principal_payment == -premium_result.price

    last = flows[10]
    assert last.coupon_payment == pytest.approx(4.30)
    assert last.principal_payment == 100.0
    assert last.total_cash_flow == pytest.approx(104.30)
    assert last.time_years == 5.0


def test_only_final_entry_redeems(premium_result):
    flows = premium_result.cash_flows
    n = premium_result.period_count
    assert all(cf.principal_payment == 0.0 for cf in flows[1:n])
    assert all(cf.total_cash_flow > 0 for cf in flows[1:])
    assert [cf.period_index for cf in flows] == list(range(n + 1))
    assert [cf.time_years for cf in flows] == [t / 2 for t in range(n + 1)]


def test_price_is_sum_of_present_values(premium_result):
    r = premium_result
    assert r.price == r.present_value_of_coupons + r.present_value_of_face_value


def test_schedule_conservation(premium_result):
    r = premium_result
    undiscounted = sum(cf.total_cash_flow for cf in r.cash_flows[1:])
    coupons = sum(cf.coupon_payment for cf in r.cash_flows[1:])
    assert coupons == pytest.approx(r.periodic_coupon * r.period_count, rel=1e-12)
    assert undiscounted == pytest.approx(r.periodic_coupon * r.period_count + 100.0, rel=1e-12)


@pytest.mark.parametrize("freq", [1, 2, 4, 12])
@pytest.mark.parametrize("years", [0.5, 1, 2.5, 10, 30])
@pytest.mark.parametrize("rate", [0.0, 0.03, 0.086, 0.25])
def test_par_identity(freq, years, rate):
    r = compute_valuation(BondParameters(1000.0, rate, rate, years, freq))
    assert r.period_count >= 1
    assert np.isclose(r.price, 1000.0, rtol=1e-6), "coupon == yield must price at par"


@pytest.mark.parametrize("freq", [1, 2, 4, 12])
def test_premium_discount_ordering(freq):
    premium = compute_valuation(BondParameters(100.0, 0.07, 0.05, 10, freq))
    discount = compute_valuation(BondParameters(100.0, 0.03, 0.05, 10, freq))
    assert premium.price > 100.0
    assert discount.price < 100.0


def test_price_strictly_decreasing_in_yield():
    prices = [
        compute_valuation(BondParameters(100.0, 0.05, y, 20, 2)).price
        for y in np.linspace(0.0, 0.5, 51)
    ]
    assert np.all(np.diff(prices) < 0), "Price should fall as yield rises"


def test_zero_yield_is_undiscounted():
    r = compute_valuation(BondParameters(100.0, 0.06, 0.0, 7, 4))
    assert r.periodic_yield == 0.0
    assert r.price == pytest.approx(r.periodic_coupon * r.period_count + 100.0, rel=1e-12)


def test_degenerate_zero_coupon_zero_yield():
    r = compute_valuation(BondParameters(100.0, 0.0, 0.0, 1, 1))
    assert r.price == 100.0
    assert r.period_count == 1
    assert r.cash_flows[1].total_cash_flow == 100.0


def test_zero_periods_redeem_immediately():
    bounds = EngineBounds(min_years=0.0)
    r = compute_valuation(BondParameters(250.0, 0.05, 0.08, 0.25, 1), bounds)
    assert r.period_count == 0
    assert r.price == 250.0
    assert len(r.cash_flows) == 1
    assert r.cash_flows[0].total_cash_flow == -250.0


def test_fractional_years_round_half_up():
    r = compute_valuation(BondParameters(100.0, 0.05, 0.05, 2.5, 2))
    assert r.period_count == 5
    assert r.cash_flows[-1].time_years == 2.5


def test_invalid_coupon_rejected():
    params = BondParameters(100.0, -1.0, 0.05, 5, 2)
    errors = validate(params)
    assert len(errors) == 1
    assert "Coupon rate" in errors[0]

    with pytest.raises(InvalidParameters) as exc:
        compute_valuation(params)
    assert exc.value.errors == errors
    assert try_valuation(params) is None


def test_all_errors_reported_in_field_order():
    params = BondParameters(0.0, -0.01, 0.9, 100, 3)
    errors = validate(params)
    assert len(errors) == 5
    assert errors[0].startswith("Face value")
    assert errors[1].startswith("Coupon rate")
    assert errors[2].startswith("Yield to maturity")
    assert errors[3].startswith("Years to maturity")
    assert errors[4].startswith("Payment frequency")


def test_non_finite_inputs_rejected():
    errors = validate(BondParameters(float("nan"), 0.05, float("inf"), 5, 2))
    assert len(errors) == 2


def test_face_value_upper_bound():
    assert validate(BondParameters(100_000.0, 0.05, 0.05, 5, 2)) == []
    assert len(validate(BondParameters(100_000.01, 0.05, 0.05, 5, 2))) == 1


def test_frequency_strictness_by_bounds():
    monthly_ish = BondParameters(100.0, 0.05, 0.05, 5, 3)
    assert len(validate(monthly_ish, STANDARD_BOUNDS)) == 1
    assert validate(monthly_ish, LOOSE_BOUNDS) == []
    assert len(validate(BondParameters(100.0, 0.05, 0.05, 5, 0), LOOSE_BOUNDS)) == 1
    assert len(validate(BondParameters(100.0, 0.05, 0.05, 5, True), LOOSE_BOUNDS)) == 1
    assert len(validate(BondParameters(100.0, 0.05, 0.05, 5, 2.5), LOOSE_BOUNDS)) == 1
    assert validate(BondParameters(100.0, 0.05, 0.05, 5, 2.0), STANDARD_BOUNDS) == []


def test_classic_bounds_cap_rates_at_ten_percent():
    params = BondParameters(100.0, 0.12, 0.05, 5, 2)
    assert validate(params, STANDARD_BOUNDS) == []
    errors = validate(params, CLASSIC_BOUNDS)
    assert errors == ["Coupon rate must be between 0% and 10%."]


def test_get_bounds_presets():
    assert get_bounds("Loose") is LOOSE_BOUNDS
    with pytest.raises(KeyError):
        get_bounds("nope")


def test_valuation_is_memoized(premium_bond):
    a = compute_valuation(premium_bond)
    b = compute_valuation(BondParameters(100.0, 0.086, 0.065, 5, 2))
    assert a is b


def test_pricer_matches_kernel(premium_bond):
    pricer = BondPricer(STANDARD_BOUNDS)
    px = pricer.price(premium_bond)
    assert px == pytest.approx(price_bond(100.0, 0.086, 0.065, 5, 2), rel=1e-15)

    with pytest.raises(InvalidParameters):
        pricer.validate(BondParameters(-5.0, 0.05, 0.05, 5, 2))


def test_kernel_rejects_yield_below_minus_100pct():
    with pytest.raises(ValueError):
        price_bond(100.0, 0.05, -2.5, 5, 2)


def test_loose_bounds_cap_frequency():
    assert validate(BondParameters(100.0, 0.05, 0.05, 50, 365), LOOSE_BOUNDS) == []

    errors = validate(BondParameters(100.0, 0.05, 0.05, 50, 10**12), LOOSE_BOUNDS)
    assert errors == ["Payment frequency must be a whole number from 1 to 365 payments per year."]
    with pytest.raises(InvalidParameters):
        compute_valuation(BondParameters(100.0, 0.05, 0.05, 50, 10**12), LOOSE_BOUNDS)

    assert len(validate(BondParameters(100.0, 0.05, 0.05, 50, 366), LOOSE_BOUNDS)) == 1
    assert validate(BondParameters(100.0, 0.05, 0.05, 50, 400), EngineBounds(allowed_frequencies=None, max_frequency=400)) == []
