from datetime import date

import pytest

from src.core.dca import accumulate_dca_cum
from src.core.price_models import bind_price_fn
from src.core.scenario_config import build_default_input
from src.core.scenario_engine import (
    _best_strategy,
    run_scenario,
    scenario_to_dataframe,
)
from src.core.scenario_models import PriceModelKey, PurchaseTiming, ScenarioInput


@pytest.fixture()
def example_input() -> ScenarioInput:
    return build_default_input(
        years=5,
        btc_price=50_000.0,
        btc_amount=1.0,
        model=PriceModelKey.POWER_LAW,
        model_confidence=1.0,
        dca_amount=0.0,
        home_price=500_000.0,
        down_pct=0.2,
        mortgage_rate=0.06,
        term=30,
        purchase_timing=PurchaseTiming.NOW,
    )


def test_end_to_end_power_law_example(example_input: ScenarioInput):
    result = run_scenario(example_input)

    assert result.hold_all_value[0] == 50_000.0
    assert result.hold_all_value[5] > result.hold_all_value[0]
    assert result.summary.buy_house_details.monthly_payment == pytest.approx(
        2398.20, abs=0.5
    )


def test_series_lengths_and_labels(example_input: ScenarioInput):
    result = run_scenario(example_input, start_year=2030)

    n = example_input.years + 1
    assert len(result.years_labels) == n
    assert len(result.hold_all_value) == n
    assert len(result.buy_house_value) == n
    assert len(result.rent_forever_value) == n
    assert len(result.opportunity_cost_series) == n
    assert result.years_labels == [2030, 2031, 2032, 2033, 2034, 2035]


def test_labels_default_to_current_year(example_input: ScenarioInput):
    result = run_scenario(example_input)
    assert result.years_labels[0] == date.today().year


def test_year_zero_is_the_btc_baseline():
    inp = build_default_input(
        btc_amount=2.0, btc_price=40_000.0, dca_amount=500.0, purchase_timing="year-1"
    )
    result = run_scenario(inp)

    assert result.hold_all_value[0] == 80_000.0
    assert result.rent_forever_value[0] == 80_000.0
    assert result.buy_house_value[0] == 80_000.0


@pytest.mark.parametrize("timing", list(PurchaseTiming))
@pytest.mark.parametrize("model", list(PriceModelKey))
def test_opportunity_cost_is_never_positive(timing, model):
    inp = build_default_input(
        years=12, model=model, dca_amount=300.0, purchase_timing=timing
    )
    result = run_scenario(inp)

    for i, opp in enumerate(result.opportunity_cost_series):
        hold = result.hold_all_value[i]
        best = max(hold, result.buy_house_value[i], result.rent_forever_value[i])
        assert opp <= 0
        assert (opp == 0) == (hold == best)


def test_best_strategy_tie_break_order():
    assert _best_strategy(1.0, 1.0, 1.0) == "hold"
    assert _best_strategy(0.0, 1.0, 1.0) == "buy"
    assert _best_strategy(0.0, 0.5, 1.0) == "rent"


def test_final_year_summary_matches_series(example_input: ScenarioInput):
    result = run_scenario(example_input)
    final = result.summary.final_year

    assert final.hold_all == result.hold_all_value[-1]
    assert final.buy_house == result.buy_house_value[-1]
    assert final.rent_forever == result.rent_forever_value[-1]
    assert final.opportunity_cost == result.opportunity_cost_series[-1]
    assert final.best_strategy == _best_strategy(
        final.hold_all, final.buy_house, final.rent_forever
    )


def test_dca_summary():
    inp = build_default_input(
        years=5, btc_amount=1.0, btc_price=50_000.0, dca_amount=100.0
    )
    result = run_scenario(inp)
    dca = result.summary.dca_details

    price_fn = bind_price_fn(inp.model, inp.btc_price, inp.model_confidence)
    expected_cum = accumulate_dca_cum(5, 100.0, "monthly", price_fn)

    assert dca.total_invested == pytest.approx(56_000.0)
    assert dca.btc_accumulated == pytest.approx(expected_cum[-1])
    assert dca.average_cost == pytest.approx(56_000.0 / (1.0 + expected_cum[-1]))
    # Hold sees the same accumulation
    assert result.hold_all_value[-1] == pytest.approx(
        (1.0 + expected_cum[-1]) * price_fn(5)
    )


def test_dca_summary_without_any_btc_uses_spot_price():
    inp = build_default_input(btc_amount=0.0, dca_amount=0.0, btc_price=42_000.0)
    dca = run_scenario(inp).summary.dca_details
    assert dca.btc_accumulated == 0.0
    assert dca.average_cost == 42_000.0


def test_run_scenario_is_idempotent(example_input: ScenarioInput):
    assert run_scenario(example_input, start_year=2025) == run_scenario(
        example_input, start_year=2025
    )


@pytest.mark.parametrize(
    "overrides",
    [
        {"home_price": 0.0},
        {"btc_price": 0.0},
        {"btc_amount": 0.0, "dca_amount": 0.0},
        {"years": 0},
        {"years": -3},
        {"term": 0},
        {"down_pct": 1.0},
        {"mortgage_rate": 0.0},
    ],
)
def test_degenerate_inputs_do_not_raise(overrides):
    result = run_scenario(build_default_input(**overrides))
    n = max(0, overrides.get("years", 10)) + 1
    assert len(result.hold_all_value) == n
    assert len(result.buy_house_value) == n


def test_scenario_to_dataframe(example_input: ScenarioInput):
    result = run_scenario(example_input, start_year=2025)
    df = scenario_to_dataframe(result)

    assert list(df.columns) == [
        "Year",
        "BTC price (USD)",
        "Hold all BTC (USD)",
        "Buy a house (USD)",
        "Rent forever (USD)",
        "Opportunity cost (USD)",
    ]
    assert len(df) == example_input.years + 1
    assert df["Year"].iloc[0] == 2025
    assert df["BTC price (USD)"].iloc[0] == pytest.approx(50_000.0)
    assert df["Hold all BTC (USD)"].tolist() == result.hold_all_value
