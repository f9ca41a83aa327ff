# seo_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта SeoScout.

Сериализация объекта GlobalReport в файл.
"""
from pathlib import Path

from seo_scout.aggregator import GlobalReport


def report_filename(report: GlobalReport) -> str:
    """Имя файла отчёта: crawl-report-<timestamp>.json без ':' и '.'."""
    stamp = report.timestamp.replace(":", "-").replace(".", "-")
    return f"crawl-report-{stamp}.json"


def render_json(report: GlobalReport, output_path: Path | str) -> Path:
    """
    Сохраняет отчёт report в формате JSON.

    :param report: объект GlobalReport с ошибками по сайтам
    :param output_path: путь к *.json-файлу или каталог (тогда имя генерируется)
    :return: Path сохранённого файла

    Пример:
    ```python
    from seo_scout.report.json_report import render_json
    report_path = render_json(report, 'downloads')
    print(f"Error report generated: {report_path}")
    ```
    """
    output = Path(output_path)
    if output.suffix.lower() != ".json":
        output = output / report_filename(report)
    output.parent.mkdir(parents=True, exist_ok=True)

    # Запись в файл с отступами и Unicode
    output.write_text(report.json(pretty=True), encoding="utf-8")
    return output
