"""PDF report for a single analysis."""

from __future__ import annotations

import io
import logging
from datetime import datetime
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from plmcost.catalog.countries import Country
from plmcost.engine.narrative import format_currency
from plmcost.engine.result import CalculationResult
from plmcost.forms.state import FormState

logger = logging.getLogger(__name__)

REPORT_TITLE = "Inefficiency Cost Analysis"

CHART_SECTIONS = (
    ("bar", "Bar Chart Interpretation"),
    ("pie", "Pie Chart Interpretation"),
    ("radar", "Radar Chart Interpretation (Inefficiency Profile)"),
)


def _styles() -> dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()
    return {
        "date": ParagraphStyle(
            "ReportDate", parent=base["Normal"], fontSize=9,
            textColor=colors.grey, alignment=TA_RIGHT,
        ),
        "title": ParagraphStyle(
            "ReportTitle", parent=base["Heading1"], fontSize=22,
            alignment=TA_CENTER, spaceAfter=6,
        ),
        "subtitle": ParagraphStyle(
            "ReportSubtitle", parent=base["Normal"], fontSize=12,
            textColor=colors.grey, alignment=TA_CENTER, spaceAfter=18,
        ),
        "label": ParagraphStyle("TotalLabel", parent=base["Normal"], fontSize=14),
        "total": ParagraphStyle(
            "TotalValue", parent=base["Normal"], fontName="Helvetica-Bold",
            fontSize=24, leading=30, spaceAfter=12,
        ),
        "heading": ParagraphStyle(
            "SectionHeading", parent=base["Heading2"], fontSize=18,
            spaceBefore=12, spaceAfter=10,
        ),
        "body": ParagraphStyle(
            "Body", parent=base["Normal"], fontSize=11, leading=15, alignment=TA_JUSTIFY,
        ),
        "category": ParagraphStyle(
            "Category", parent=base["Normal"], fontName="Helvetica-Bold", fontSize=12,
        ),
        "cost": ParagraphStyle(
            "Cost", parent=base["Normal"], fontName="Helvetica-Bold", fontSize=12,
            textColor=colors.HexColor("#dc3545"), alignment=TA_RIGHT,
        ),
        "insight": ParagraphStyle(
            "Insight", parent=base["Normal"], fontSize=10, leading=15,
            textColor=colors.HexColor("#505050"), spaceAfter=12,
        ),
        "subheading": ParagraphStyle(
            "SubHeading", parent=base["Normal"], fontName="Helvetica-Bold",
            fontSize=12, spaceBefore=6, spaceAfter=4,
        ),
    }


def build_report_pdf(
    result: CalculationResult,
    form: FormState,
    country: Country,
    generated_at: Optional[datetime] = None,
) -> bytes:
    """Render the analysis as PDF bytes.

    Components with a zero cost are left out of the breakdown section.
    """
    generated_at = generated_at or datetime.now()
    styles = _styles()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer, pagesize=A4, title=REPORT_TITLE,
        leftMargin=0.8 * inch, rightMargin=0.8 * inch,
        topMargin=0.8 * inch, bottomMargin=0.8 * inch,
    )
    elements = []

    elements.append(
        Paragraph(f"Report Date: {generated_at.strftime('%m/%d/%Y %I:%M %p')}", styles["date"])
    )
    elements.append(Paragraph(REPORT_TITLE, styles["title"]))
    elements.append(
        Paragraph(
            escape(
                f"Results for {form.company_name} "
                f"(Company with {form.engineers} engineers)"
            ),
            styles["subtitle"],
        )
    )

    elements.append(Paragraph("Total Estimated Annual Loss:", styles["label"]))
    elements.append(Paragraph(escape(format_currency(result.total_cost, country)), styles["total"]))
    elements.append(
        Paragraph(
            f"<b>Executive Summary:</b> {escape(result.summary)}", styles["body"]
        )
    )
    elements.append(Spacer(1, 18))

    elements.append(Paragraph("Cost Breakdown and Insights", styles["heading"]))
    for item in result.cost_breakdown:
        if item.cost <= 0:
            continue
        row = Table(
            [[
                Paragraph(escape(item.category), styles["category"]),
                Paragraph(escape(format_currency(item.cost, country)), styles["cost"]),
            ]],
            colWidths=[doc.width - 1.6 * inch, 1.6 * inch],
        )
        row.setStyle(TableStyle([
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("LEFTPADDING", (0, 0), (-1, -1), 0),
            ("RIGHTPADDING", (0, 0), (-1, -1), 0),
        ]))
        elements.append(row)
        elements.append(
            Paragraph(
                f"<b>Consultant's Insight:</b> {escape(item.explanation)}",
                styles["insight"],
            )
        )

    elements.append(Paragraph("Visual Results Analysis", styles["heading"]))
    for chart_key, title in CHART_SECTIONS:
        elements.append(Paragraph(title, styles["subheading"]))
        text = getattr(result.chart_interpretations, chart_key)
        elements.append(Paragraph(escape(text), styles["body"]))

    doc.build(elements)
    pdf_data = buffer.getvalue()
    buffer.close()

    logger.info(f"PDF report built for {form.company_name} ({len(pdf_data)} bytes)")
    return pdf_data
