# File: site_search/report/__init__.py
"""site_search.report: JSON и HTML отчёты об обходе, используемые CLI."""

from site_search.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from site_search.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
