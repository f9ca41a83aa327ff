"""seo_scout.report: Сохранение отчёта пакетного запуска (JSON и HTML)."""

from seo_scout.report.html_report import render_html
from seo_scout.report.json_report import render_json, report_filename

__all__ = ["render_json", "render_html", "report_filename"]
