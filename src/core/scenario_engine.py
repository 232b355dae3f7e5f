# src/core/scenario_engine.py
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import List, Optional

import pandas as pd

from src.core.dca import accumulate_dca_cum, hold_value_series
from src.core.home_purchase import compute_buy_series
from src.core.price_models import bind_price_fn
from src.core.rent import compute_rent_series
from src.core.scenario_models import (
    DcaDetails,
    FinalYearSummary,
    ScenarioInput,
    ScenarioOutput,
    ScenarioSummary,
    StrategyName,
)

logger = logging.getLogger(__name__)


def _best_strategy(hold: float, buy: float, rent: float) -> StrategyName:
    """Exact-equality pick of the winner; ties go hold, then buy, then rent."""
    best = max(hold, buy, rent)
    if hold == best:
        return "hold"
    if buy == best:
        return "buy"
    return "rent"


def run_scenario(inp: ScenarioInput, start_year: Optional[int] = None) -> ScenarioOutput:
    """
    Project net worth for the hold, buy and rent strategies.

    Parameters
    ----------
    inp:
        Full set of assumptions for this run.
    start_year:
        Calendar year of index 0 in ``years_labels``; defaults to the
        current year.

    The DCA accumulation is computed once and shared by all three
    strategies. Nothing is cached: identical inputs give identical outputs.
    """
    years = max(0, int(inp.years))
    if years != inp.years:
        inp = replace(inp, years=years)

    if start_year is None:
        start_year = date.today().year

    logger.debug(
        "Running scenario: %d years, model=%s, confidence=%.2f, timing=%s",
        years,
        inp.model,
        inp.model_confidence,
        inp.purchase_timing,
    )

    price_fn = bind_price_fn(inp.model, inp.btc_price, inp.model_confidence)
    dca_cum = accumulate_dca_cum(years, inp.dca_amount, inp.dca_period, price_fn)

    hold = hold_value_series(inp.btc_amount, dca_cum, price_fn)
    rent, rent_details = compute_rent_series(inp, price_fn, dca_cum)
    buy, buy_details = compute_buy_series(inp, price_fn, dca_cum)

    opportunity = [h - max(h, b, r) for h, b, r in zip(hold, buy, rent)]

    final_idx = years
    best_strategy = _best_strategy(hold[final_idx], buy[final_idx], rent[final_idx])
    final_year = FinalYearSummary(
        hold_all=hold[final_idx],
        buy_house=buy[final_idx],
        rent_forever=rent[final_idx],
        best_strategy=best_strategy,
        opportunity_cost=opportunity[final_idx],
    )

    # DCA summary
    total_dca_invested = max(0.0, inp.dca_amount) * inp.periods_per_year * years
    total_invested = inp.btc_amount * inp.btc_price + total_dca_invested
    final_btc_qty = inp.btc_amount + dca_cum[final_idx]
    average_cost = total_invested / final_btc_qty if final_btc_qty > 0 else inp.btc_price

    return ScenarioOutput(
        years_labels=[start_year + i for i in range(years + 1)],
        hold_all_value=hold,
        buy_house_value=buy,
        rent_forever_value=rent,
        opportunity_cost_series=opportunity,
        summary=ScenarioSummary(
            final_year=final_year,
            buy_house_details=buy_details,
            rent_details=rent_details,
            dca_details=DcaDetails(
                total_invested=total_invested,
                btc_accumulated=dca_cum[final_idx],
                average_cost=average_cost,
            ),
        ),
        btc_price_path=[price_fn(i) for i in range(years + 1)],
    )


def scenario_to_dataframe(result: ScenarioOutput) -> pd.DataFrame:
    """Tidy one-row-per-year table of a scenario run for display."""
    if not result.years_labels:
        return pd.DataFrame()

    records: List[dict] = []
    for i, year in enumerate(result.years_labels):
        records.append(
            {
                "Year": year,
                "BTC price (USD)": (
                    result.btc_price_path[i] if result.btc_price_path else None
                ),
                "Hold all BTC (USD)": result.hold_all_value[i],
                "Buy a house (USD)": result.buy_house_value[i],
                "Rent forever (USD)": result.rent_forever_value[i],
                "Opportunity cost (USD)": result.opportunity_cost_series[i],
            }
        )
    return pd.DataFrame.from_records(records)
