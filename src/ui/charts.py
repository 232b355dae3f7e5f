# src/ui/charts.py
from __future__ import annotations

from typing import Iterable

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from src.config import settings

_SERIES_COLUMNS = {
    "hold": "Hold all BTC (USD)",
    "buy": "Buy a house (USD)",
    "rent": "Rent forever (USD)",
}
_OPPORTUNITY_COLUMN = "Opportunity cost (USD)"

_Y_AXIS = {
    "absolute": ("Net worth (USD)", "$,.0f", ""),
    "relative": ("Difference vs. holding BTC (USD)", "$,.0f", ""),
    "percentage": ("Change from year 0 (%)", ",.0f", "%"),
}


def apply_chart_view(df: pd.DataFrame, view: str = "absolute") -> pd.DataFrame:
    """
    Re-express the strategy columns for one chart view.

    - absolute: dollar values as projected
    - relative: each strategy minus holding BTC, so hold sits at 0
    - percentage: change from each strategy's own year-0 value; a zero
      starting value is treated as 1

    The opportunity cost column is always left in dollars.
    """
    if view not in settings.CHART_VIEW_MODES:
        raise ValueError(f"Unknown chart view: {view!r}")

    out = df.copy()
    if view == "relative":
        hold = df[_SERIES_COLUMNS["hold"]]
        for column in _SERIES_COLUMNS.values():
            out[column] = df[column] - hold
    elif view == "percentage" and not df.empty:
        for column in _SERIES_COLUMNS.values():
            base = df[column].iloc[0] or 1.0
            out[column] = (df[column] - base) / base * 100.0
    return out


def build_projection_figure(
    df: pd.DataFrame,
    view: str = "absolute",
    visible_series: Iterable[str] | None = None,
    purchase_year_label: int | None = None,
) -> go.Figure:
    """
    Build the net-worth projection chart for the three strategies.

    Expected df columns (see scenario_to_dataframe):
    - Year
    - Hold all BTC (USD), Buy a house (USD), Rent forever (USD)
    - Opportunity cost (USD)

    ``visible_series`` picks from settings.CHART_SERIES; all are drawn when
    it is None.
    """
    required = ["Year", *_SERIES_COLUMNS.values(), _OPPORTUNITY_COLUMN]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"Projection chart missing columns: {missing}")

    visible = set(settings.CHART_SERIES if visible_series is None else visible_series)
    view_df = apply_chart_view(df, view)
    y_title, tickformat, ticksuffix = _Y_AXIS[view]
    value_fmt = "%{y:,.1f}%" if view == "percentage" else "$%{y:,.0f}"

    fig = go.Figure()
    plotted = []

    for key, column in _SERIES_COLUMNS.items():
        if key not in visible:
            continue
        plotted.append(column)
        fig.add_trace(
            go.Scatter(
                x=view_df["Year"],
                y=view_df[column],
                mode="lines+markers",
                name=settings.STRATEGY_LABELS[key],
                line=dict(color=settings.STRATEGY_COLORS[key]),
                hovertemplate=(
                    "<b>%{x}</b><br>"
                    + settings.STRATEGY_LABELS[key]
                    + ": "
                    + value_fmt
                    + "<extra></extra>"
                ),
            )
        )

    if "opportunity" in visible:
        plotted.append(_OPPORTUNITY_COLUMN)
        fig.add_trace(
            go.Scatter(
                x=view_df["Year"],
                y=view_df[_OPPORTUNITY_COLUMN],
                mode="lines",
                name="Opportunity cost of holding",
                line=dict(
                    color=settings.STRATEGY_COLORS["opportunity"],
                    dash=settings.LINE_STYLE_OPPORTUNITY,
                ),
                hovertemplate="<b>%{x}</b><br>Opportunity cost: $%{y:,.0f}<extra></extra>",
            )
        )

    if purchase_year_label is not None:
        fig.add_vline(
            x=purchase_year_label,
            line_dash="dash",
            line_color="grey",
            annotation_text="Home purchase",
            annotation_position="top left",
        )

    if plotted and not view_df.empty:
        y_min = float(view_df[plotted].min().min())
        y_max = float(view_df[plotted].max().max())
    else:
        y_min = y_max = 0.0
    pad = (y_max - y_min) * settings.LINE_Y_PAD_PCT or 1.0

    fig.update_layout(
        margin=dict(l=10, r=10, t=30, b=10),
        hovermode="x unified",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="left", x=0),
        yaxis=dict(
            title=y_title,
            tickformat=tickformat,
            ticksuffix=ticksuffix,
            range=[y_min - pad, y_max + pad],
        ),
        xaxis=dict(title="Year", dtick=1),
    )
    return fig


def render_chart_controls() -> tuple[str, list[str]]:
    """View-mode radio and per-series toggles; returns (view, visible keys)."""
    col_view, col_series = st.columns([1, 2])
    with col_view:
        view = st.radio(
            "Chart view",
            options=list(settings.CHART_VIEW_MODES),
            format_func=str.capitalize,
            index=settings.CHART_VIEW_MODES.index(settings.DEFAULT_CHART_VIEW),
            horizontal=True,
            help=(
                "Absolute shows dollar values. Relative compares every strategy "
                "against holding BTC (baseline at $0). Percentage shows each "
                "strategy's change from its year-0 value."
            ),
        )
    with col_series:
        st.caption("Show series")
        toggle_cols = st.columns(len(settings.CHART_SERIES))
        visible = [
            key
            for key, col in zip(settings.CHART_SERIES, toggle_cols)
            if col.checkbox(settings.CHART_SERIES_LABELS[key], value=True, key=f"show_{key}")
        ]
    return view, visible


def render_projection_chart(df: pd.DataFrame, **kwargs) -> None:
    st.plotly_chart(build_projection_figure(df, **kwargs), use_container_width=True)
