# src/core/home_purchase.py
"""
Buy-a-house strategy

Before the purchase year the strategy is identical to holding BTC. In the
purchase year BTC worth the down payment and closing costs is sold at that
year's price. If the after-tax proceeds fall short, everything is sold and
the gap is treated as external cash. From then on net worth is

    home equity + remaining BTC value - cumulative non-recoverable costs

where non-recoverable costs are property tax, insurance, HOA, maintenance,
mortgage interest and the one-time purchase costs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from src.config import settings
from src.core.dca import dca_dollars_spent, hold_value_series
from src.core.mortgage import amortize_by_year, monthly_payment
from src.core.scenario_models import BuyHouseDetails, ScenarioInput

logger = logging.getLogger(__name__)


@dataclass
class PurchaseEconomics:
    """Cash flows of the purchase year."""

    purchase_year: int
    home_price: float
    btc_price: float
    required_cash: float
    closing_costs: float
    btc_held: float
    avg_cost_basis: float
    btc_to_sell: float
    tax_owed: float
    proceeds: float
    external_cash_needed: float

    @property
    def btc_remaining(self) -> float:
        return self.btc_held - self.btc_to_sell

    @property
    def one_time_costs(self) -> float:
        return self.closing_costs + self.tax_owed + self.external_cash_needed


def home_value_at(inp: ScenarioInput, years_from_now: float) -> float:
    return max(0.0, inp.home_price) * (1.0 + inp.appreciation_rate) ** years_from_now


def average_cost_basis(inp: ScenarioInput, btc_held: float, through_year: int) -> float:
    """Weighted USD cost per BTC of the stack plus DCA buys through a year."""
    if btc_held <= 0:
        return inp.btc_price
    dollars_spent = inp.btc_amount * inp.btc_price + dca_dollars_spent(
        inp.dca_amount, inp.dca_period, through_year
    )
    return dollars_spent / btc_held


def compute_purchase_economics(
    inp: ScenarioInput,
    price_fn: Callable[[float], float],
    dca_cum: Sequence[float],
) -> PurchaseEconomics:
    """
    Size the BTC sale that funds the down payment and closing costs.

    The sale is sized at the purchase-year price, then capital-gains tax on
    the sold coins is taken out of the proceeds. Whenever after-tax proceeds
    fall short of the cash required (any taxable gain does this) the whole
    holding is sold and the gap becomes ``external_cash_needed``.
    """
    p_year = inp.purchase_year
    price_p = price_fn(p_year)
    home_price_p = home_value_at(inp, p_year)
    closing_costs = home_price_p * inp.closing_costs_pct
    required_cash = max(0.0, home_price_p * inp.down_pct + closing_costs)

    btc_held = max(0.0, inp.btc_amount + dca_cum[p_year])
    avg_cost = average_cost_basis(inp, btc_held, p_year)
    gain_per_btc = max(0.0, price_p - avg_cost)
    tax_rate = max(0.0, min(1.0, inp.cap_gains_tax_rate))

    divisor = max(price_p, settings.MIN_PRICE_DIVISOR_USD)
    btc_to_sell = min(btc_held, required_cash / divisor)
    tax_owed = gain_per_btc * btc_to_sell * tax_rate
    # btc_to_sell * price_p, kept exact when the sale is not capped
    sale_value = min(btc_held * price_p, required_cash * (price_p / divisor))
    proceeds = sale_value - tax_owed

    external_cash_needed = 0.0
    if proceeds < required_cash:
        btc_to_sell = btc_held
        external_cash_needed = required_cash - proceeds
        logger.info(
            "BTC stack covers %.0f of %.0f required at purchase; "
            "%.0f injected as external cash",
            proceeds,
            required_cash,
            external_cash_needed,
        )

    return PurchaseEconomics(
        purchase_year=p_year,
        home_price=home_price_p,
        btc_price=price_p,
        required_cash=required_cash,
        closing_costs=closing_costs,
        btc_held=btc_held,
        avg_cost_basis=avg_cost,
        btc_to_sell=btc_to_sell,
        tax_owed=tax_owed,
        proceeds=proceeds,
        external_cash_needed=external_cash_needed,
    )


def _loan_year_values(
    balances: List[float], interests: List[float], principal: float, loan_year: int
) -> Tuple[float, float]:
    """
    Mortgage balance and interest charged in ``loan_year`` (0 = purchase year).

    The balance is the snapshot after ``loan_year + 1`` years of payments,
    held at the last snapshot past the amortisation window. Interest lags
    one year: the purchase year carries none and loan year k is charged the
    interest of snapshot k - 1. With no snapshots the full principal stays
    outstanding.
    """
    if not balances:
        return principal, 0.0
    balance = balances[min(loan_year, len(balances) - 1)]
    interest = 0.0
    if 0 < loan_year <= len(interests):
        interest = interests[loan_year - 1]
    return balance, interest


def compute_buy_series(
    inp: ScenarioInput,
    price_fn: Callable[[float], float],
    dca_cum: Sequence[float],
) -> Tuple[List[float], BuyHouseDetails]:
    years = len(dca_cum) - 1
    p_year = inp.purchase_year
    hold_values = hold_value_series(inp.btc_amount, dca_cum, price_fn)

    if p_year > years:
        logger.info(
            "Purchase year %d is beyond the %d-year horizon; buy tracks hold",
            p_year,
            years,
        )
        details = BuyHouseDetails(
            home_equity=0.0,
            remaining_btc=inp.btc_amount + dca_cum[years],
            btc_sold_for_down=0.0,
            total_non_recoverable_costs=0.0,
            monthly_payment=0.0,
            purchase_year=p_year,
        )
        return hold_values, details

    purchase = compute_purchase_economics(inp, price_fn, dca_cum)

    principal = max(0.0, purchase.home_price * (1.0 - inp.down_pct))
    payment = monthly_payment(principal, inp.mortgage_rate, inp.term)
    total_months = min(inp.term * 12, max(0, (years - p_year) * 12))
    balances, interests = amortize_by_year(
        principal, inp.mortgage_rate / 12.0, payment, total_months
    )

    logger.debug(
        "Purchase in year %d: home %.0f, BTC %.2f @ %.0f, sold %.6f, tax %.0f, "
        "principal %.0f, payment %.2f",
        p_year,
        purchase.home_price,
        purchase.btc_held,
        purchase.btc_price,
        purchase.btc_to_sell,
        purchase.tax_owed,
        principal,
        payment,
    )

    series: List[float] = []
    cumulative_costs = 0.0
    equity = 0.0

    for y in range(years + 1):
        if y < p_year:
            series.append(hold_values[y])
            continue

        loan_year = y - p_year
        home_val = home_value_at(inp, y)
        balance, interest = _loan_year_values(balances, interests, principal, loan_year)
        equity = max(0.0, home_val - balance)

        yearly_costs = (
            inp.property_tax_rate * home_val
            + inp.insurance_annual
            + inp.hoa_monthly * 12
            + inp.maintenance_rate * home_val
            + interest
        )
        if y == p_year:
            yearly_costs += purchase.one_time_costs
        cumulative_costs += yearly_costs

        btc_units = inp.btc_amount + dca_cum[y] - purchase.btc_to_sell
        series.append(equity + btc_units * price_fn(y) - cumulative_costs)

    details = BuyHouseDetails(
        home_equity=equity,
        remaining_btc=purchase.btc_remaining,
        btc_sold_for_down=purchase.btc_to_sell,
        total_non_recoverable_costs=cumulative_costs,
        monthly_payment=payment,
        purchase_year=p_year,
        tax_owed=purchase.tax_owed,
        external_cash_needed=purchase.external_cash_needed,
    )
    return series, details
