"""Tests for the CSV history export and the PDF report."""

import csv
import io
from datetime import datetime

from plmcost.exporters import build_report_pdf, export_history_csv
from plmcost.exporters.csv_export import HEADERS, UTF8_BOM
from plmcost.forms.state import apply_field_change
from plmcost.history import HistoryLog, InMemoryStore
from plmcost.engine.calculator import calculate
from plmcost.engine.narrative import build_result
from plmcost.engine.resolver import resolve
from plmcost.models.enums import InfoLocation
from plmcost.providers.base import decorate


def _rows(text):
    assert text.startswith(UTF8_BOM)
    return list(csv.reader(io.StringIO(text[len(UTF8_BOM):])))


class TestCsvExport:
    def test_empty_history_has_header_only(self):
        rows = _rows(export_history_csv([]))
        assert rows == [HEADERS]
        assert len(HEADERS) == 19

    def test_row_values(self, filled_form, completed_result, usd):
        entry = HistoryLog(InMemoryStore()).record(filled_form, completed_result, usd)
        header, row = _rows(export_history_csv([entry]))
        record = dict(zip(header, row))
        assert record["Company Name"] == "Acme Machines"
        assert record["Industry"] == "Industrial Machinery"
        assert record["Sector"] == "General"
        assert record["Country"] == "United States (USD)"
        assert record["Info Location"] == "Corporate System"
        assert record["Total Annual Loss"] == "486538"
        assert record["Silo Risk Cost"] == "0"
        assert record["Used Annual Salary"] == "*70000"

    def test_overridden_metric_has_no_marker(
        self, filled_form, base_counts, usd, narrative_content
    ):
        resolved = resolve("general-discrete-manufacturing", "", "USD", {"reworkCost": 6000})
        components = calculate(resolved, base_counts, InfoLocation.CORPORATE)
        result = decorate(
            build_result(resolved, base_counts, components, InfoLocation.CORPORATE, usd),
            narrative_content,
        )
        entry = HistoryLog(InMemoryStore()).record(filled_form, result, usd, {"reworkCost": 6000})
        header, row = _rows(export_history_csv([entry]))
        record = dict(zip(header, row))
        assert record["Used Cost per Rework"] == "6000"
        assert record["Used Annual Revenue per Product"] == "*2000000"

    def test_commas_are_quoted(self, filled_form, completed_result, usd):
        form = apply_field_change(filled_form, "company_name", "Acme, Inc.")
        entry = HistoryLog(InMemoryStore()).record(form, completed_result, usd)
        text = export_history_csv([entry])
        assert '"Acme, Inc."' in text
        assert _rows(text)[1][0] == "Acme, Inc."


class TestPdfReport:
    def test_produces_pdf_bytes(self, filled_form, completed_result, usd):
        pdf = build_report_pdf(
            completed_result, filled_form, usd, generated_at=datetime(2024, 5, 1)
        )
        assert pdf.startswith(b"%PDF")
        assert len(pdf) > 1000

    def test_markup_characters_in_company_name(self, filled_form, completed_result, usd):
        form = apply_field_change(filled_form, "company_name", "R&D <Labs>")
        assert build_report_pdf(completed_result, form, usd).startswith(b"%PDF")
