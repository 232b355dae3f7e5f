# src/core/dca.py
from __future__ import annotations

from typing import Callable, List, Sequence

from src.core.scenario_models import PERIODS_PER_YEAR, DcaPeriod


def periods_per_year(period: str | DcaPeriod) -> int:
    """52 / 12 / 4 purchases a year for weekly / monthly / quarterly."""
    return PERIODS_PER_YEAR[DcaPeriod(period)]


def accumulate_dca_cum(
    years: int,
    dca_amount_usd: float,
    period: str | DcaPeriod,
    price_fn: Callable[[float], float],
) -> List[float]:
    """
    Cumulative BTC bought by dollar-cost averaging, at the end of each year.

    Entry 0 is always 0. Purchases in year ``y`` happen at evenly spaced
    fractional times ``(y - 1) + (p + 1) / per_year``; a non-positive price
    skips that purchase.
    """
    per_year = periods_per_year(period)
    cumulative: List[float] = []
    total_btc = 0.0

    for y in range(years + 1):
        if y > 0 and dca_amount_usd > 0:
            for p in range(per_year):
                price = price_fn((y - 1) + (p + 1) / per_year)
                if price > 0:
                    total_btc += dca_amount_usd / price
        cumulative.append(total_btc)

    return cumulative


def dca_dollars_spent(
    dca_amount_usd: float, period: str | DcaPeriod, through_year: int
) -> float:
    """USD spent on DCA purchases during years 1..through_year."""
    if dca_amount_usd <= 0 or through_year <= 0:
        return 0.0
    return through_year * periods_per_year(period) * dca_amount_usd


def hold_value_series(
    btc_amount: float,
    dca_cum: Sequence[float],
    price_fn: Callable[[float], float],
) -> List[float]:
    """USD value of the initial stack plus DCA purchases at each year end."""
    return [(btc_amount + dca_cum[i]) * price_fn(i) for i in range(len(dca_cum))]
