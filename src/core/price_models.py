# src/core/price_models.py
"""
BTC price projection models

Every model maps years-from-now to a growth multiplier on today's price.
Confidence is applied as an exponent on that multiplier:

    price = current_price * multiplier(t) ** confidence

so confidence = 1 leaves the curve unchanged, < 1 dampens it and > 1
amplifies it. All multipliers equal 1 at t = 0, which pins every model to
the current price today.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, List

from src.config import settings
from src.core.scenario_models import PriceModelKey

PriceFn = Callable[[float], float]

# Keys used by older saved inputs
MODEL_ALIASES: Dict[str, PriceModelKey] = {
    "log-reg": PriceModelKey.LOG_REGRESSION,
    "s2f": PriceModelKey.STOCK_TO_FLOW,
}


@dataclass(frozen=True)
class PriceModel:
    key: PriceModelKey
    name: str
    description: str
    source: str
    multiplier: Callable[[float], float]


def _power_law(t: float) -> float:
    age = settings.POWER_LAW_NETWORK_AGE_YEARS
    return ((age + t) / age) ** settings.POWER_LAW_EXPONENT


def _saylor(t: float) -> float:
    return settings.SAYLOR_ANNUAL_MULTIPLIER**t


def _log_regression(t: float) -> float:
    return 1.0 + math.log1p(t) * settings.LOG_REGRESSION_SLOPE


def _stock_to_flow(t: float) -> float:
    # S2F ratio doubles every halving; price follows with a fixed elasticity
    s2f_ratio_growth = 2.0 ** (t / settings.HALVING_INTERVAL_YEARS)
    return s2f_ratio_growth**settings.S2F_PRICE_ELASTICITY


def _metcalfe(t: float) -> float:
    user_growth = (1.0 + settings.METCALFE_USER_GROWTH) ** t
    return user_growth**2 * settings.METCALFE_VALUE_DAMPENER**t


MODELS: Dict[PriceModelKey, PriceModel] = {
    PriceModelKey.POWER_LAW: PriceModel(
        key=PriceModelKey.POWER_LAW,
        name="Power Law",
        description="Price ~ (network age)^n, rescaled to today's price.",
        source="Inspired by the Santostasi power-law model.",
        multiplier=_power_law,
    ),
    PriceModelKey.SAYLOR: PriceModel(
        key=PriceModelKey.SAYLOR,
        name="Saylor (moderate)",
        description="Steady 25% compounding per year.",
        source="Moderate case of the Saylor long-range outlook.",
        multiplier=_saylor,
    ),
    PriceModelKey.LOG_REGRESSION: PriceModel(
        key=PriceModelKey.LOG_REGRESSION,
        name="Log Regression",
        description="Logarithmic growth with diminishing returns.",
        source="Inspired by rainbow / log regression bands.",
        multiplier=_log_regression,
    ),
    PriceModelKey.STOCK_TO_FLOW: PriceModel(
        key=PriceModelKey.STOCK_TO_FLOW,
        name="Stock-to-Flow",
        description="Price tracks a S2F ratio that doubles every halving.",
        source="PlanB-inspired S2F, smoothed between halvings.",
        multiplier=_stock_to_flow,
    ),
    PriceModelKey.METCALFE: PriceModel(
        key=PriceModelKey.METCALFE,
        name="Metcalfe's Law",
        description="Value ~ users^2 with ~20%/yr adoption, lightly dampened.",
        source="Classic network-effect valuation.",
        multiplier=_metcalfe,
    ),
}


def resolve_model_key(model: str | PriceModelKey) -> PriceModelKey:
    """Map a model key or legacy alias onto PriceModelKey."""
    if isinstance(model, PriceModelKey):
        return model
    if model in MODEL_ALIASES:
        return MODEL_ALIASES[model]
    return PriceModelKey(model)


def get_model(model: str | PriceModelKey) -> PriceModel:
    return MODELS[resolve_model_key(model)]


def available_models() -> List[PriceModel]:
    return list(MODELS.values())


def clamp_confidence(confidence: float) -> float:
    return max(
        settings.MODEL_CONFIDENCE_MIN, min(settings.MODEL_CONFIDENCE_MAX, confidence)
    )


def price_at(
    model: str | PriceModelKey,
    years_from_now: float,
    current_price: float,
    confidence: float = 1.0,
) -> float:
    """
    Projected BTC price ``years_from_now`` years ahead (fractional allowed).

    Negative times are treated as today; a non-positive current price
    projects to 0.0.
    """
    if current_price <= 0:
        return 0.0
    t = max(0.0, float(years_from_now))
    raw = MODELS[resolve_model_key(model)].multiplier(t)
    return current_price * raw ** clamp_confidence(confidence)


def bind_price_fn(
    model: str | PriceModelKey, current_price: float, confidence: float = 1.0
) -> PriceFn:
    """Return ``t -> price`` bound to one model, price and confidence."""
    key = resolve_model_key(model)

    def _price(t: float) -> float:
        return price_at(key, t, current_price, confidence)

    return _price
