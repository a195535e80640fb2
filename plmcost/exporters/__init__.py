from .csv_export import export_history_csv
from .pdf_report import build_report_pdf

__all__ = ["export_history_csv", "build_report_pdf"]
