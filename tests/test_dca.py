import pytest

from src.core.dca import (
    accumulate_dca_cum,
    dca_dollars_spent,
    hold_value_series,
    periods_per_year,
)
from src.core.price_models import bind_price_fn
from src.core.scenario_models import DcaPeriod


def test_periods_per_year():
    assert periods_per_year("weekly") == 52
    assert periods_per_year(DcaPeriod.MONTHLY) == 12
    assert periods_per_year("quarterly") == 4


def test_zero_dca_amount_accumulates_nothing():
    cum = accumulate_dca_cum(5, 0.0, "monthly", lambda t: 100.0)
    assert cum == [0.0] * 6


def test_constant_price_accumulates_linearly():
    cum = accumulate_dca_cum(3, 100.0, "monthly", lambda t: 100.0)
    assert cum == pytest.approx([0.0, 12.0, 24.0, 36.0])


def test_purchases_are_spread_within_each_year():
    seen = []

    def price_fn(t: float) -> float:
        seen.append(t)
        return 1.0

    accumulate_dca_cum(2, 10.0, "quarterly", price_fn)
    assert seen == pytest.approx([0.25, 0.5, 0.75, 1.0, 1.25, 1.5, 1.75, 2.0])


def test_non_positive_prices_are_skipped():
    cum = accumulate_dca_cum(2, 100.0, "weekly", lambda t: 0.0)
    assert cum == [0.0, 0.0, 0.0]


def test_accumulation_is_non_decreasing_with_model_prices():
    price_fn = bind_price_fn("power-law", 60_000.0, 1.0)
    cum = accumulate_dca_cum(10, 250.0, "weekly", price_fn)

    assert len(cum) == 11
    assert cum[0] == 0.0
    for earlier, later in zip(cum, cum[1:]):
        assert later >= earlier


@pytest.mark.parametrize("model", ["power-law", "saylor", "metcalfe"])
def test_more_frequent_buys_accumulate_more_btc(model):
    price_fn = bind_price_fn(model, 60_000.0, 1.0)
    weekly = accumulate_dca_cum(5, 100.0, "weekly", price_fn)[-1]
    monthly = accumulate_dca_cum(5, 100.0, "monthly", price_fn)[-1]
    quarterly = accumulate_dca_cum(5, 100.0, "quarterly", price_fn)[-1]
    assert weekly > monthly > quarterly


def test_dca_dollars_spent():
    assert dca_dollars_spent(100.0, "monthly", 3) == 3600.0
    assert dca_dollars_spent(100.0, "weekly", 0) == 0.0
    assert dca_dollars_spent(0.0, "weekly", 5) == 0.0


def test_hold_value_series_adds_dca_to_stack():
    values = hold_value_series(2.0, [0.0, 1.0, 1.5], lambda t: 10.0 * (t + 1))
    assert values == pytest.approx([20.0, 60.0, 105.0])
