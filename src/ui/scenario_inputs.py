# src/ui/scenario_inputs.py
from __future__ import annotations

import streamlit as st

from src.config import settings
from src.core.price_models import available_models
from src.core.scenario_config import build_default_input
from src.core.scenario_models import DcaPeriod, PurchaseTiming, ScenarioInput

_TIMING_LABELS = {
    PurchaseTiming.NOW: "Now",
    PurchaseTiming.YEAR_1: "In 1 year",
    PurchaseTiming.YEAR_2: "In 2 years",
    PurchaseTiming.YEAR_3: "In 3 years",
    PurchaseTiming.YEAR_5: "In 5 years",
}


def _pct_input(label: str, default: float, max_pct: float, step: float, **kwargs) -> float:
    """Percent number input that returns a decimal fraction."""
    value = st.number_input(
        label,
        min_value=0.0,
        max_value=max_pct,
        value=round(default * 100, 3),
        step=step,
        format="%.2f",
        **kwargs,
    )
    return value / 100.0


def render_scenario_inputs(btc_price: float) -> ScenarioInput:
    """Render the sidebar controls and return the assumptions for this run.

    Parameters
    ----------
    btc_price
        Current BTC price (live or static) used as the default price input.
    """

    st.sidebar.header("Bitcoin")
    btc_price = st.sidebar.number_input(
        "BTC price (USD)",
        min_value=0.0,
        value=float(btc_price),
        step=1000.0,
        format="%.0f",
    )
    btc_amount = st.sidebar.number_input(
        "BTC held today",
        min_value=0.0,
        value=settings.DEFAULT_BTC_AMOUNT,
        step=0.01,
        format="%.4f",
    )
    models = available_models()
    model = st.sidebar.selectbox(
        "Price model",
        options=models,
        format_func=lambda m: m.name,
        help="Projection curve used for the BTC price.",
    )
    st.sidebar.caption(f"{model.description} {model.source}")
    model_confidence = st.sidebar.slider(
        "Model confidence",
        min_value=settings.MODEL_CONFIDENCE_MIN,
        max_value=settings.MODEL_CONFIDENCE_MAX,
        value=settings.DEFAULT_MODEL_CONFIDENCE,
        step=0.05,
        help="Below 1 dampens the model's growth, above 1 amplifies it.",
    )
    col_dca, col_period = st.sidebar.columns(2)
    with col_dca:
        dca_amount = st.number_input(
            "DCA (USD)", min_value=0.0, value=settings.DEFAULT_DCA_AMOUNT_USD, step=50.0
        )
    with col_period:
        dca_period = st.selectbox(
            "Every",
            options=list(DcaPeriod),
            index=list(DcaPeriod).index(DcaPeriod(settings.DEFAULT_DCA_PERIOD)),
            format_func=lambda p: p.value,
        )
    cap_gains_tax_rate = _pct_input(
        "Capital-gains tax (%)",
        settings.DEFAULT_CAP_GAINS_TAX_RATE,
        settings.CAP_GAINS_TAX_RATE_MAX * 100,
        1.0,
    )

    with st.sidebar.expander("Home", expanded=False):
        home_price = st.number_input(
            "Home price (USD)",
            min_value=0.0,
            value=settings.DEFAULT_HOME_PRICE_USD,
            step=10000.0,
            format="%.0f",
        )
        down_pct = _pct_input("Down payment (%)", settings.DEFAULT_DOWN_PCT, 100.0, 1.0)
        mortgage_rate = _pct_input(
            "Mortgage rate (%)", settings.DEFAULT_MORTGAGE_RATE, 20.0, 0.125
        )
        term = st.selectbox("Term (years)", options=[15, 20, 30], index=2)
        property_tax_rate = _pct_input(
            "Property tax (%/yr)", settings.DEFAULT_PROPERTY_TAX_RATE, 5.0, 0.1
        )
        insurance_annual = st.number_input(
            "Home insurance (USD/yr)",
            min_value=0.0,
            value=settings.DEFAULT_HOME_INSURANCE_ANNUAL_USD,
            step=100.0,
        )
        hoa_monthly = st.number_input(
            "HOA (USD/month)",
            min_value=0.0,
            value=settings.DEFAULT_HOA_MONTHLY_USD,
            step=25.0,
        )
        appreciation_rate = _pct_input(
            "Appreciation (%/yr)", settings.DEFAULT_APPRECIATION_RATE, 15.0, 0.5
        )
        maintenance_rate = _pct_input(
            "Maintenance (%/yr)", settings.DEFAULT_MAINTENANCE_RATE, 5.0, 0.1
        )
        closing_costs_pct = _pct_input(
            "Closing costs (%)", settings.DEFAULT_CLOSING_COSTS_PCT, 10.0, 0.5
        )

    with st.sidebar.expander("Rent", expanded=False):
        monthly_rent = st.number_input(
            "Monthly rent (USD)",
            min_value=0.0,
            value=settings.DEFAULT_MONTHLY_RENT_USD,
            step=50.0,
        )
        rent_growth_rate = _pct_input(
            "Rent growth (%/yr)", settings.DEFAULT_RENT_GROWTH_RATE, 15.0, 0.5
        )
        renters_insurance_annual = st.number_input(
            "Renters insurance (USD/yr)",
            min_value=0.0,
            value=settings.DEFAULT_RENTERS_INSURANCE_ANNUAL_USD,
            step=50.0,
        )
        moving_frequency_years = st.number_input(
            "Move every N years (0 = never)",
            min_value=0,
            max_value=20,
            value=settings.DEFAULT_MOVING_FREQUENCY_YEARS,
            step=1,
        )
        moving_cost_per_move = st.number_input(
            "Cost per move (USD)",
            min_value=0.0,
            value=settings.DEFAULT_MOVING_COST_PER_MOVE_USD,
            step=250.0,
        )

    st.sidebar.header("Timeline")
    years = st.sidebar.slider(
        "Projection horizon (years)",
        min_value=1,
        max_value=settings.MAX_TIMEFRAME_YEARS,
        value=settings.DEFAULT_TIMEFRAME_YEARS,
    )
    purchase_timing = st.sidebar.radio(
        "Buy the house",
        options=list(PurchaseTiming),
        format_func=lambda t: _TIMING_LABELS[t],
        horizontal=True,
    )

    return build_default_input(
        years=years,
        btc_price=btc_price,
        btc_amount=btc_amount,
        model=model.key,
        model_confidence=model_confidence,
        dca_amount=dca_amount,
        dca_period=dca_period,
        cap_gains_tax_rate=cap_gains_tax_rate,
        home_price=home_price,
        down_pct=down_pct,
        mortgage_rate=mortgage_rate,
        term=term,
        property_tax_rate=property_tax_rate,
        insurance_annual=insurance_annual,
        hoa_monthly=hoa_monthly,
        appreciation_rate=appreciation_rate,
        maintenance_rate=maintenance_rate,
        closing_costs_pct=closing_costs_pct,
        monthly_rent=monthly_rent,
        rent_growth_rate=rent_growth_rate,
        renters_insurance_annual=renters_insurance_annual,
        moving_frequency_years=moving_frequency_years,
        moving_cost_per_move=moving_cost_per_move,
        purchase_timing=purchase_timing,
    )
