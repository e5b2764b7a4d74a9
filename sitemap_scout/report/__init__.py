# File: sitemap_scout/report/__init__.py
"""sitemap_scout.report: Запись результатов обхода в JSON и HTML."""

from sitemap_scout.report.html_report import DEFAULT_TEMPLATE_DIR, render_html
from sitemap_scout.report.json_report import render_json

__all__ = ["render_json", "render_html", "DEFAULT_TEMPLATE_DIR"]
