# src/ui/layout.py
from __future__ import annotations

import streamlit as st

from src.config import settings
from src.core.live_data import get_btc_price_or_default
from src.core.scenario_engine import run_scenario, scenario_to_dataframe
from src.core.scenario_models import ScenarioInput, ScenarioOutput
from src.ui.charts import render_chart_controls, render_projection_chart
from src.ui.pdf_export import build_pdf_report
from src.ui.scenario_inputs import render_scenario_inputs


@st.cache_data(
    ttl=settings.LIVE_DATA_CACHE_TTL_S,
    show_spinner="Loading BTC price...",
)
def load_btc_price() -> tuple[float, bool]:
    """
    Returns:
      - BTC price used as the default price input
      - bool flag: True if live loaded successfully, else False (static)
    """
    return get_btc_price_or_default()


def _fmt_usd(x: float) -> str:
    sign = "-" if x < 0 else ""
    return f"{sign}${abs(x):,.0f}"


def kpi_values(result: ScenarioOutput) -> list[tuple[str, float]]:
    """
    Final-year KPI cards: the three strategies plus the opportunity cost,
    i.e. the gap between the worst and the best strategy (never positive).
    """
    final = result.summary.final_year
    values = (final.hold_all, final.buy_house, final.rent_forever)
    return [
        (settings.STRATEGY_LABELS["hold"], final.hold_all),
        (settings.STRATEGY_LABELS["buy"], final.buy_house),
        (settings.STRATEGY_LABELS["rent"], final.rent_forever),
        ("Opportunity cost", min(values) - max(values)),
    ]


def _render_kpis(result: ScenarioOutput) -> None:
    final = result.summary.final_year
    winner = settings.STRATEGY_LABELS[final.best_strategy]

    for col, (label, value) in zip(st.columns(4), kpi_values(result)):
        col.metric(label, _fmt_usd(value))

    st.caption(
        f"**Best strategy in {result.years_labels[-1]}:** {winner} · "
        f"opportunity cost of holding: {_fmt_usd(final.opportunity_cost)}"
    )


def _render_details(result: ScenarioOutput) -> None:
    buy = result.summary.buy_house_details
    rent = result.summary.rent_details
    dca = result.summary.dca_details

    col_buy, col_rent, col_dca = st.columns(3)
    with col_buy:
        st.markdown("**Buy a house**")
        st.markdown(
            f"- Monthly payment: {_fmt_usd(buy.monthly_payment)}\n"
            f"- BTC sold for down payment: {buy.btc_sold_for_down:,.4f}\n"
            f"- BTC remaining: {buy.remaining_btc:,.4f}\n"
            f"- Capital-gains tax: {_fmt_usd(buy.tax_owed)}\n"
            f"- External cash needed: {_fmt_usd(buy.external_cash_needed)}\n"
            f"- Home equity: {_fmt_usd(buy.home_equity)}\n"
            f"- Non-recoverable costs: {_fmt_usd(buy.total_non_recoverable_costs)}"
        )
    with col_rent:
        st.markdown("**Rent forever**")
        st.markdown(
            f"- Rent paid: {_fmt_usd(rent.total_rent_paid)}\n"
            f"- Moving costs: {_fmt_usd(rent.total_moving_costs)}\n"
            f"- Renters insurance: {_fmt_usd(rent.total_insurance_paid)}"
        )
    with col_dca:
        st.markdown("**Dollar-cost averaging**")
        st.markdown(
            f"- Total invested: {_fmt_usd(dca.total_invested)}\n"
            f"- BTC accumulated: {dca.btc_accumulated:,.4f}\n"
            f"- Average cost: {_fmt_usd(dca.average_cost)} / BTC"
        )


def render_dashboard() -> None:
    st.title("Bitcoin vs. Home: strategy projector")

    live_price, is_live = load_btc_price()
    if not is_live:
        st.warning(
            "Could not load the live BTC price, using the static default of "
            f"{_fmt_usd(settings.DEFAULT_BTC_PRICE_USD)} instead."
        )

    inp = render_scenario_inputs(live_price)
    result = run_scenario(inp)

    _render_kpis(result)

    df = scenario_to_dataframe(result)
    purchase_year = inp.purchase_year
    purchase_label = (
        result.years_labels[purchase_year]
        if 0 < purchase_year < len(result.years_labels)
        else None
    )
    view, visible = render_chart_controls()
    render_projection_chart(
        df, view=view, visible_series=visible, purchase_year_label=purchase_label
    )

    with st.expander("Strategy details", expanded=False):
        _render_details(result)

    with st.expander("Year-by-year table", expanded=False):
        st.dataframe(df, hide_index=True, use_container_width=True)

    _render_pdf_download(inp, result)


def _render_pdf_download(inp: ScenarioInput, result: ScenarioOutput) -> None:
    st.download_button(
        "Download PDF snapshot",
        data=build_pdf_report(inp, result),
        file_name="btc-vs-home-snapshot.pdf",
        mime="application/pdf",
    )
