"""CSV export of the analysis history."""

from __future__ import annotations

import csv
import io
from typing import Iterable

from plmcost.catalog.industries import GENERAL_SECTOR_LABEL
from plmcost.engine.calculator import round_currency
from plmcost.forms.state import industry_label, info_location_label, sector_label
from plmcost.history.log import HistoryEntry
from plmcost.models.enums import OVERRIDABLE_METRICS

UTF8_BOM = "\ufeff"

HEADERS = [
    "Company Name",
    "Industry",
    "Sector",
    "Country",
    "No. of Engineers / Designers",
    "No. of Sites",
    "No. of Countries",
    "Info Location",
    "New Products / Revisions per Year",
    "No. of Reworks per Product",
    "Avg. Weeks of Delay per Product",
    "Total Annual Loss",
    "Collaboration Cost",
    "Rework Cost",
    "Delay Cost",
    "Silo Risk Cost",
    "Used Annual Salary",
    "Used Cost per Rework",
    "Used Annual Revenue per Product",
]


def _metric_cell(entry: HistoryEntry, metric_key: str) -> str:
    """Rounded metric value; catalog defaults are marked with a leading '*'."""
    for item in entry.result.cost_breakdown:
        if item.metric_key == metric_key:
            value = str(round_currency(item.metric_value))
            return value if item.is_metric_overridden else f"*{value}"
    return ""


def history_row(entry: HistoryEntry) -> list[str]:
    form = entry.form_data
    costs = [str(round_currency(item.cost)) for item in entry.result.cost_breakdown]
    return [
        form.company_name,
        industry_label(form),
        sector_label(form) or GENERAL_SECTOR_LABEL,
        entry.country.name,
        form.engineers,
        form.num_sites,
        form.num_countries,
        info_location_label(form.info_location),
        form.new_products,
        form.reworks,
        form.delays,
        str(round_currency(entry.result.total_cost)),
        *costs,
        *(_metric_cell(entry, key.value) for key in OVERRIDABLE_METRICS),
    ]


def export_history_csv(entries: Iterable[HistoryEntry]) -> str:
    """Render history as CSV text prefixed with a UTF-8 byte order mark."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(HEADERS)
    for entry in entries:
        writer.writerow(history_row(entry))
    return UTF8_BOM + buf.getvalue()
