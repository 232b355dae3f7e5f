# src/ui/pdf_export.py
from __future__ import annotations

import io
from datetime import datetime, timezone

from reportlab.lib import colors  # type: ignore[import]
from reportlab.lib.pagesizes import A4  # type: ignore[import]
from reportlab.lib.styles import getSampleStyleSheet  # type: ignore[import]
from reportlab.pdfgen import canvas  # type: ignore[import]
from reportlab.platypus import (  # type: ignore[import]
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from src.config import settings
from src.core.price_models import get_model
from src.core.scenario_models import ScenarioInput, ScenarioOutput

Styles = getSampleStyleSheet()


def _format_currency(value) -> str:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return str(value)
    sign = "-" if numeric < 0 else ""
    return f"{sign}${abs(numeric):,.0f}"


def _format_percentage(value: float) -> str:
    return f"{value * 100:.1f}%"


def build_pdf_report(inp: ScenarioInput, result: ScenarioOutput) -> bytes:
    """Generate a PDF snapshot of one scenario run for sharing."""

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        title="Bitcoin vs. Home Snapshot",
        topMargin=60,
        bottomMargin=60,
    )
    story = []

    now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    header_text = "Bitcoin vs. Home: Strategy Snapshot"
    footer_text = f"Generated {now} • Version {settings.APP_VERSION}"

    model = get_model(inp.model)
    story.append(Paragraph("Bitcoin assumptions", Styles["Heading2"]))
    btc_table = Table(
        [
            ["BTC price today", _format_currency(inp.btc_price)],
            ["BTC held", f"{inp.btc_amount:,.4f} BTC"],
            ["Price model", model.name],
            ["Model confidence", f"{inp.model_confidence:.2f}"],
            ["DCA", f"{_format_currency(inp.dca_amount)} {inp.dca_period.value}"],
            ["Capital-gains tax", _format_percentage(inp.cap_gains_tax_rate)],
            ["Horizon", f"{inp.years} years"],
        ],
        hAlign="LEFT",
    )
    btc_table.setStyle(_table_style())
    story.append(btc_table)
    story.append(Spacer(1, 12))

    story.append(Paragraph("Housing assumptions", Styles["Heading2"]))
    home_table = Table(
        [
            ["Home price", _format_currency(inp.home_price)],
            ["Down payment", _format_percentage(inp.down_pct)],
            ["Mortgage", f"{_format_percentage(inp.mortgage_rate)} over {inp.term} years"],
            ["Purchase timing", inp.purchase_timing.value],
            ["Monthly rent", _format_currency(inp.monthly_rent)],
            ["Rent growth", _format_percentage(inp.rent_growth_rate)],
        ],
        hAlign="LEFT",
    )
    home_table.setStyle(_table_style())
    story.append(home_table)
    story.append(Spacer(1, 12))

    final = result.summary.final_year
    buy = result.summary.buy_house_details
    story.append(Paragraph("Final-year outcome", Styles["Heading2"]))
    story.append(
        Paragraph(
            f"Best strategy in {result.years_labels[-1]}: "
            f"{settings.STRATEGY_LABELS[final.best_strategy]}. "
            f"Opportunity cost of holding: {_format_currency(final.opportunity_cost)}.",
            Styles["Normal"],
        )
    )
    summary_table = Table(
        [
            ["Strategy", "Net worth"],
            [settings.STRATEGY_LABELS["hold"], _format_currency(final.hold_all)],
            [settings.STRATEGY_LABELS["buy"], _format_currency(final.buy_house)],
            [settings.STRATEGY_LABELS["rent"], _format_currency(final.rent_forever)],
            ["Monthly mortgage payment", _format_currency(buy.monthly_payment)],
            ["BTC sold at purchase", f"{buy.btc_sold_for_down:,.4f} BTC"],
            ["External cash needed", _format_currency(buy.external_cash_needed)],
        ],
        repeatRows=1,
        hAlign="LEFT",
    )
    summary_table.setStyle(_table_style(header=True))
    summary_table.setStyle(TableStyle([("ALIGN", (1, 1), (1, -1), "RIGHT")]))
    story.append(summary_table)
    story.append(Spacer(1, 12))

    story.append(Paragraph("Year by year", Styles["Heading2"]))
    yearly_rows = [["Year", "BTC price", "Hold", "Buy", "Rent"]]
    for i, year in enumerate(result.years_labels):
        yearly_rows.append(
            [
                str(year),
                _format_currency(result.btc_price_path[i]),
                _format_currency(result.hold_all_value[i]),
                _format_currency(result.buy_house_value[i]),
                _format_currency(result.rent_forever_value[i]),
            ]
        )
    yearly_table = Table(yearly_rows, repeatRows=1, hAlign="LEFT")
    yearly_table.setStyle(_table_style(header=True))
    yearly_table.setStyle(TableStyle([("ALIGN", (1, 1), (-1, -1), "RIGHT")]))
    story.append(yearly_table)

    doc.build(
        story,
        onFirstPage=lambda canv, doc: _draw_header_footer(
            canv, doc, header_text, footer_text
        ),
        onLaterPages=lambda canv, doc: _draw_header_footer(
            canv, doc, header_text, footer_text
        ),
        canvasmaker=NumberedCanvas,
    )
    buffer.seek(0)
    return buffer.read()


def _table_style(header: bool = False) -> TableStyle:
    style_commands = [
        ("BOX", (0, 0), (-1, -1), 0.25, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]
    if header:
        style_commands.extend(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
            ]
        )
    return TableStyle(style_commands)


def _draw_header_footer(canvas_obj, doc, header_text: str, footer_text: str) -> None:
    canvas_obj.saveState()
    _, height = A4
    canvas_obj.setFont("Helvetica-Bold", 12)
    canvas_obj.drawString(doc.leftMargin, height - 40, header_text)
    canvas_obj.setFont("Helvetica", 8)
    canvas_obj.drawString(doc.leftMargin, 40, footer_text)
    canvas_obj.restoreState()


class NumberedCanvas(canvas.Canvas):
    """Canvas that stamps "Page x of y" once the page count is known."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._saved_page_states = []

    def showPage(self):
        self._saved_page_states.append(dict(self.__dict__))
        self._startPage()

    def save(self):
        page_count = len(self._saved_page_states)
        for state in self._saved_page_states:
            self.__dict__.update(state)
            self.draw_page_number(page_count)
            super().showPage()
        super().save()

    def draw_page_number(self, page_count: int) -> None:
        self.setFont("Helvetica", 8)
        self.drawRightString(
            self._pagesize[0] - 40,
            40,
            f"Page {self._pageNumber} of {page_count}",
        )
