# File: keyscout/report/__init__.py
"""keyscout.report: запись результатов (CSV) и отчётов (JSON и HTML)."""

from keyscout.report.csv_sink import CsvResultSink
from keyscout.report.html_report import render_html
from keyscout.report.json_report import render_json

__all__ = ["CsvResultSink", "render_json", "render_html"]
