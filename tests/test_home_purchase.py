import pytest

from src.core.home_purchase import (
    average_cost_basis,
    compute_buy_series,
    compute_purchase_economics,
)
from src.core.mortgage import amortize_by_year, monthly_payment
from src.core.scenario_config import build_default_input
from src.core.scenario_engine import run_scenario
from src.core.scenario_models import PurchaseTiming


def _flat_costs_input(**overrides):
    """Home purchase with every recurring cost switched off."""
    values = dict(
        years=2,
        btc_price=100_000.0,
        btc_amount=10.0,
        dca_amount=0.0,
        cap_gains_tax_rate=0.0,
        home_price=500_000.0,
        down_pct=0.20,
        closing_costs_pct=0.03,
        mortgage_rate=0.0,
        term=30,
        property_tax_rate=0.0,
        insurance_annual=0.0,
        hoa_monthly=0.0,
        appreciation_rate=0.0,
        maintenance_rate=0.0,
        purchase_timing=PurchaseTiming.NOW,
    )
    values.update(overrides)
    return build_default_input(**values)


def _const_price(price):
    return lambda t: price


def test_sale_covers_down_payment_and_closing_without_tax():
    inp = _flat_costs_input()
    series, details = compute_buy_series(inp, _const_price(100_000.0), [0.0] * 3)

    assert details.btc_sold_for_down == pytest.approx(1.15)
    assert details.remaining_btc == pytest.approx(8.85)
    assert details.tax_owed == 0.0
    assert details.external_cash_needed == 0.0
    payment = 400_000.0 / 360
    assert details.monthly_payment == pytest.approx(payment)

    # Purchase year already reflects the first twelve payments
    assert series[0] == pytest.approx(
        (500_000.0 - (400_000.0 - 12 * payment)) + 885_000.0 - 15_000.0
    )
    assert series[0] == pytest.approx(983_333.33, abs=0.01)
    assert series[1] == pytest.approx(
        (500_000.0 - (400_000.0 - 24 * payment)) + 885_000.0 - 15_000.0
    )


def test_sale_is_sized_before_tax_and_tax_forces_a_full_sale():
    inp = _flat_costs_input(btc_price=50_000.0, cap_gains_tax_rate=0.20)
    purchase = compute_purchase_economics(inp, _const_price(100_000.0), [0.0] * 3)

    # 10 BTC bought at 50k, 115k needed at 100k/BTC: 1.15 BTC taxed on 50k gain each
    assert purchase.avg_cost_basis == pytest.approx(50_000.0)
    assert purchase.tax_owed == pytest.approx(11_500.0)
    assert purchase.proceeds == pytest.approx(103_500.0)
    assert purchase.external_cash_needed == pytest.approx(11_500.0)
    assert purchase.btc_to_sell == 10.0
    assert purchase.btc_remaining == 0.0
    assert purchase.one_time_costs == pytest.approx(15_000.0 + 11_500.0 + 11_500.0)


def test_uncapped_sale_without_gain_has_no_shortfall():
    inp = _flat_costs_input(btc_price=100_000.0, cap_gains_tax_rate=0.20)
    purchase = compute_purchase_economics(inp, _const_price(100_000.0), [0.0] * 3)

    assert purchase.tax_owed == 0.0
    assert purchase.proceeds == purchase.required_cash
    assert purchase.external_cash_needed == 0.0
    assert purchase.btc_to_sell == pytest.approx(1.15)


def test_shortfall_sells_everything_and_injects_external_cash():
    inp = _flat_costs_input(
        btc_price=50_000.0, btc_amount=1.0, cap_gains_tax_rate=0.20
    )
    series, details = compute_buy_series(inp, _const_price(50_000.0), [0.0] * 3)

    assert details.btc_sold_for_down == 1.0
    assert details.remaining_btc == 0.0
    assert details.tax_owed == 0.0
    assert details.external_cash_needed == pytest.approx(65_000.0)
    # Equity after a year of payments, minus closing and the injected cash
    first_year_paydown = 12 * 400_000.0 / 360
    assert series[0] == pytest.approx(
        100_000.0 + first_year_paydown - 15_000.0 - 65_000.0
    )


def test_shortfall_with_gains_taxes_the_full_sale():
    inp = _flat_costs_input(
        btc_price=40_000.0, btc_amount=1.0, cap_gains_tax_rate=0.20
    )
    purchase = compute_purchase_economics(inp, _const_price(50_000.0), [0.0] * 3)

    assert purchase.btc_to_sell == 1.0
    assert purchase.tax_owed == pytest.approx(2_000.0)
    assert purchase.proceeds == pytest.approx(48_000.0)
    assert purchase.external_cash_needed == pytest.approx(67_000.0)
    assert purchase.one_time_costs == pytest.approx(15_000.0 + 2_000.0 + 67_000.0)


def test_cost_basis_blends_initial_stack_and_dca():
    inp = _flat_costs_input(btc_price=30_000.0, btc_amount=1.0, dca_amount=1_000.0)
    # 1 BTC at 30k plus 12k of monthly DCA that bought 0.2 BTC
    assert average_cost_basis(inp, 1.2, 1) == pytest.approx(42_000.0 / 1.2)
    assert average_cost_basis(inp, 0.0, 1) == 30_000.0


def test_interest_lags_the_balance_by_one_loan_year():
    inp = _flat_costs_input(mortgage_rate=0.06)
    series, details = compute_buy_series(inp, _const_price(100_000.0), [0.0] * 3)

    payment = monthly_payment(400_000.0, 0.06, 30)
    balances, interests = amortize_by_year(400_000.0, 0.06 / 12.0, payment, 24)

    assert details.monthly_payment == pytest.approx(payment)
    # Purchase year: balance after twelve payments, no interest charged yet
    assert series[0] == pytest.approx((500_000.0 - balances[0]) + 885_000.0 - 15_000.0)
    expected_year1 = (
        (500_000.0 - balances[1]) + 885_000.0 - (15_000.0 + interests[0])
    )
    assert series[1] == pytest.approx(expected_year1)
    assert details.total_non_recoverable_costs == pytest.approx(
        15_000.0 + interests[0] + interests[1]
    )
    assert details.home_equity == pytest.approx(500_000.0 - balances[1])


def test_recurring_costs_follow_home_value():
    inp = _flat_costs_input(
        years=1,
        property_tax_rate=0.01,
        maintenance_rate=0.01,
        insurance_annual=1_000.0,
        hoa_monthly=100.0,
        appreciation_rate=0.10,
    )
    _, details = compute_buy_series(inp, _const_price(100_000.0), [0.0] * 2)

    year0 = 0.02 * 500_000.0 + 1_000.0 + 1_200.0 + 15_000.0
    year1 = 0.02 * 550_000.0 + 1_000.0 + 1_200.0
    assert details.total_non_recoverable_costs == pytest.approx(year0 + year1)


def test_loan_paid_off_before_horizon_leaves_full_equity():
    inp = _flat_costs_input(years=3, term=1)
    series, details = compute_buy_series(inp, _const_price(100_000.0), [0.0] * 4)

    assert details.home_equity == pytest.approx(500_000.0)
    assert series[3] == pytest.approx(500_000.0 + 885_000.0 - 15_000.0)


def test_purchase_in_final_year_keeps_full_principal_outstanding():
    inp = _flat_costs_input(years=1, purchase_timing=PurchaseTiming.YEAR_1)
    series, details = compute_buy_series(inp, _const_price(100_000.0), [0.0] * 2)

    assert series[0] == pytest.approx(1_000_000.0)
    # No amortisation window: the whole 400k loan is still owed
    assert series[1] == pytest.approx(100_000.0 + 885_000.0 - 15_000.0)
    assert details.home_equity == pytest.approx(100_000.0)
    assert details.purchase_year == 1


def test_purchase_beyond_horizon_tracks_hold():
    inp = build_default_input(years=2, purchase_timing=PurchaseTiming.YEAR_5)
    result = run_scenario(inp)
    details = result.summary.buy_house_details

    assert result.buy_house_value == result.hold_all_value
    assert details.btc_sold_for_down == 0.0
    assert details.purchase_year == 5


@pytest.mark.parametrize(
    "timing",
    [
        PurchaseTiming.YEAR_1,
        PurchaseTiming.YEAR_2,
        PurchaseTiming.YEAR_3,
        PurchaseTiming.YEAR_5,
    ],
)
def test_buy_equals_hold_before_purchase(timing):
    inp = build_default_input(years=8, dca_amount=250.0, purchase_timing=timing)
    result = run_scenario(inp)

    for i in range(inp.purchase_year):
        assert result.buy_house_value[i] == result.hold_all_value[i]
    assert result.buy_house_value[inp.purchase_year] != result.hold_all_value[
        inp.purchase_year
    ]


def test_higher_capital_gains_tax_never_helps_buying():
    low = run_scenario(
        build_default_input(cap_gains_tax_rate=0.1, btc_amount=5.0, purchase_timing="year-2")
    )
    high = run_scenario(
        build_default_input(cap_gains_tax_rate=0.4, btc_amount=5.0, purchase_timing="year-2")
    )

    assert high.buy_house_value[-1] <= low.buy_house_value[-1]
    assert (
        high.summary.buy_house_details.btc_sold_for_down
        >= low.summary.buy_house_details.btc_sold_for_down
    )


def test_higher_capital_gains_tax_with_shortfall():
    kwargs = dict(btc_amount=0.5, btc_price=20_000.0, dca_amount=200.0)
    low = run_scenario(
        build_default_input(cap_gains_tax_rate=0.1, purchase_timing="year-2", **kwargs)
    )
    high = run_scenario(
        build_default_input(cap_gains_tax_rate=0.4, purchase_timing="year-2", **kwargs)
    )

    assert low.summary.buy_house_details.external_cash_needed > 0
    assert high.buy_house_value[-1] <= low.buy_house_value[-1]
