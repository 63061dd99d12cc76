# File: rank_spider/report/__init__.py
"""rank_spider.report: Вывод графа ссылок (текст и JSON), используемый CLI и тестами."""

from rank_spider.report.json_report import render_json
from rank_spider.report.text_report import GraphReporter

__all__ = ["GraphReporter", "render_json"]
