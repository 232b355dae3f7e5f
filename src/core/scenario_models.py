# src/core/scenario_models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Literal

StrategyName = Literal["hold", "buy", "rent"]


class PriceModelKey(str, Enum):
    """Closed set of BTC price projection models."""

    POWER_LAW = "power-law"
    SAYLOR = "saylor"
    LOG_REGRESSION = "log-regression"
    STOCK_TO_FLOW = "stock-to-flow"
    METCALFE = "metcalfe"


class DcaPeriod(str, Enum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


class PurchaseTiming(str, Enum):
    NOW = "now"
    YEAR_1 = "year-1"
    YEAR_2 = "year-2"
    YEAR_3 = "year-3"
    YEAR_5 = "year-5"


PERIODS_PER_YEAR: Dict[DcaPeriod, int] = {
    DcaPeriod.WEEKLY: 52,
    DcaPeriod.MONTHLY: 12,
    DcaPeriod.QUARTERLY: 4,
}

PURCHASE_YEAR_INDEX: Dict[PurchaseTiming, int] = {
    PurchaseTiming.NOW: 0,
    PurchaseTiming.YEAR_1: 1,
    PurchaseTiming.YEAR_2: 2,
    PurchaseTiming.YEAR_3: 3,
    PurchaseTiming.YEAR_5: 5,
}


@dataclass(frozen=True)
class ScenarioInput:
    """
    Flat, immutable set of assumptions for one projection run.

    Rates are decimals (0.06 = 6%), money is USD, BTC amounts are whole-coin
    units. The engine clamps out-of-range numbers instead of raising, so a
    half-edited form still produces a (degenerate) projection.
    """

    # Horizon
    years: int

    # Bitcoin
    btc_price: float
    btc_amount: float
    model: PriceModelKey
    model_confidence: float  # 0.5–1.5, exponent on model growth
    dca_amount: float  # USD per period
    dca_period: DcaPeriod
    cap_gains_tax_rate: float  # 0–0.5

    # Home
    home_price: float
    down_pct: float  # 0–1
    mortgage_rate: float  # annual
    term: int  # years
    property_tax_rate: float
    insurance_annual: float
    hoa_monthly: float
    appreciation_rate: float
    maintenance_rate: float
    closing_costs_pct: float

    # Rent
    monthly_rent: float
    rent_growth_rate: float
    renters_insurance_annual: float
    moving_frequency_years: int  # 0 disables moves
    moving_cost_per_move: float

    # Timing
    purchase_timing: PurchaseTiming = PurchaseTiming.NOW

    @property
    def purchase_year(self) -> int:
        return PURCHASE_YEAR_INDEX[PurchaseTiming(self.purchase_timing)]

    @property
    def periods_per_year(self) -> int:
        return PERIODS_PER_YEAR[DcaPeriod(self.dca_period)]


@dataclass
class BuyHouseDetails:
    home_equity: float
    remaining_btc: float
    btc_sold_for_down: float
    total_non_recoverable_costs: float
    monthly_payment: float

    purchase_year: int = 0
    tax_owed: float = 0.0
    external_cash_needed: float = 0.0


@dataclass
class RentDetails:
    total_rent_paid: float
    total_moving_costs: float
    total_insurance_paid: float


@dataclass
class DcaDetails:
    total_invested: float
    btc_accumulated: float
    average_cost: float


@dataclass
class FinalYearSummary:
    hold_all: float
    buy_house: float
    rent_forever: float
    best_strategy: StrategyName
    opportunity_cost: float  # <= 0, zero when holding wins


@dataclass
class ScenarioSummary:
    final_year: FinalYearSummary
    buy_house_details: BuyHouseDetails
    rent_details: RentDetails
    dca_details: DcaDetails


@dataclass
class ScenarioOutput:
    """
    Year-by-year net worth for each strategy. Index 0 is the present and
    every series has ``years + 1`` entries.
    """

    years_labels: List[int]
    hold_all_value: List[float]
    buy_house_value: List[float]
    rent_forever_value: List[float]
    opportunity_cost_series: List[float]
    summary: ScenarioSummary
    btc_price_path: List[float] = field(default_factory=list)
