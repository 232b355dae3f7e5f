# src/core/rent.py
from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from src.core.scenario_models import RentDetails, ScenarioInput


def annual_rent_cost(year_index: int, monthly_rent: float, growth: float) -> float:
    """Rent paid during year ``year_index`` (0-based), after annual growth."""
    return monthly_rent * (1.0 + growth) ** year_index * 12


def total_rent_paid(years: int, monthly_rent: float, annual_growth: float) -> float:
    return sum(annual_rent_cost(y, monthly_rent, annual_growth) for y in range(years))


def compute_rent_series(
    inp: ScenarioInput,
    price_fn: Callable[[float], float],
    dca_cum: Sequence[float],
) -> Tuple[List[float], RentDetails]:
    """
    Net worth when renting forever and keeping every BTC.

    Year 0 is the plain BTC value. Each later year adds that year's rent,
    renters insurance and, on moving years, a moving cost to a running total
    that is subtracted from the BTC value.
    """
    series: List[float] = []
    rent_paid = 0.0
    moving_costs = 0.0
    insurance_paid = 0.0

    for i in range(len(dca_cum)):
        if i > 0:
            rent_paid += annual_rent_cost(i - 1, inp.monthly_rent, inp.rent_growth_rate)
            insurance_paid += inp.renters_insurance_annual
            if inp.moving_frequency_years > 0 and i % inp.moving_frequency_years == 0:
                moving_costs += inp.moving_cost_per_move

        btc_value = (inp.btc_amount + dca_cum[i]) * price_fn(i)
        series.append(btc_value - (rent_paid + insurance_paid + moving_costs))

    details = RentDetails(
        total_rent_paid=rent_paid,
        total_moving_costs=moving_costs,
        total_insurance_paid=insurance_paid,
    )
    return series, details
