# src/core/scenario_config.py
from __future__ import annotations

import re
from dataclasses import fields
from typing import Any, Dict, Mapping

from src.config import settings
from src.core.price_models import resolve_model_key
from src.core.scenario_models import DcaPeriod, PurchaseTiming, ScenarioInput

_INT_FIELDS = {"years", "term", "moving_frequency_years"}


class ScenarioInputError(ValueError):
    """Raised when a scenario input record is structurally invalid."""


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def default_input_values() -> Dict[str, Any]:
    """Default value for every ScenarioInput field, taken from settings."""
    return {
        "years": settings.DEFAULT_TIMEFRAME_YEARS,
        "btc_price": settings.DEFAULT_BTC_PRICE_USD,
        "btc_amount": settings.DEFAULT_BTC_AMOUNT,
        "model": settings.DEFAULT_PRICE_MODEL,
        "model_confidence": settings.DEFAULT_MODEL_CONFIDENCE,
        "dca_amount": settings.DEFAULT_DCA_AMOUNT_USD,
        "dca_period": settings.DEFAULT_DCA_PERIOD,
        "cap_gains_tax_rate": settings.DEFAULT_CAP_GAINS_TAX_RATE,
        "home_price": settings.DEFAULT_HOME_PRICE_USD,
        "down_pct": settings.DEFAULT_DOWN_PCT,
        "mortgage_rate": settings.DEFAULT_MORTGAGE_RATE,
        "term": settings.DEFAULT_MORTGAGE_TERM_YEARS,
        "property_tax_rate": settings.DEFAULT_PROPERTY_TAX_RATE,
        "insurance_annual": settings.DEFAULT_HOME_INSURANCE_ANNUAL_USD,
        "hoa_monthly": settings.DEFAULT_HOA_MONTHLY_USD,
        "appreciation_rate": settings.DEFAULT_APPRECIATION_RATE,
        "maintenance_rate": settings.DEFAULT_MAINTENANCE_RATE,
        "closing_costs_pct": settings.DEFAULT_CLOSING_COSTS_PCT,
        "monthly_rent": settings.DEFAULT_MONTHLY_RENT_USD,
        "rent_growth_rate": settings.DEFAULT_RENT_GROWTH_RATE,
        "renters_insurance_annual": settings.DEFAULT_RENTERS_INSURANCE_ANNUAL_USD,
        "moving_frequency_years": settings.DEFAULT_MOVING_FREQUENCY_YEARS,
        "moving_cost_per_move": settings.DEFAULT_MOVING_COST_PER_MOVE_USD,
        "purchase_timing": settings.DEFAULT_PURCHASE_TIMING,
    }


def scenario_input_from_mapping(data: Mapping[str, Any]) -> ScenarioInput:
    """
    Build a ScenarioInput from a flat mapping (snake_case or camelCase keys).

    Every field is required. Missing fields, unknown enum values and
    non-numeric numbers raise ScenarioInputError naming the offending keys.
    Numeric ranges are not checked here; the engine clamps them.
    """
    values = {_snake_case(key): value for key, value in data.items()}

    missing = [f.name for f in fields(ScenarioInput) if f.name not in values]
    if missing:
        raise ScenarioInputError(
            f"Scenario input missing required fields: {', '.join(missing)}"
        )

    kwargs: Dict[str, Any] = {}
    for f in fields(ScenarioInput):
        raw = values[f.name]
        try:
            if f.name == "model":
                kwargs[f.name] = resolve_model_key(raw)
            elif f.name == "dca_period":
                kwargs[f.name] = DcaPeriod(raw)
            elif f.name == "purchase_timing":
                kwargs[f.name] = PurchaseTiming(raw)
            elif f.name in _INT_FIELDS:
                kwargs[f.name] = int(raw)
            else:
                kwargs[f.name] = float(raw)
        except (TypeError, ValueError) as exc:
            raise ScenarioInputError(
                f"Invalid value for {f.name!r}: {raw!r}"
            ) from exc

    return ScenarioInput(**kwargs)


def build_default_input(**overrides: Any) -> ScenarioInput:
    """
    Factory for a ScenarioInput from the centralised defaults in settings.py,
    with keyword overrides for any field.
    """
    unknown = set(overrides) - {f.name for f in fields(ScenarioInput)}
    if unknown:
        raise ScenarioInputError(
            f"Unknown scenario input fields: {', '.join(sorted(unknown))}"
        )
    values = default_input_values()
    values.update(overrides)
    return scenario_input_from_mapping(values)
