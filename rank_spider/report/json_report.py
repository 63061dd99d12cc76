# rank_spider/report/json_report.py

"""
Генерация JSON-отчёта для проекта RankSpider.

Сериализация графа ссылок LinkGraph в файл.
"""
import json
from pathlib import Path

from rank_spider.graph import LinkGraph


def render_json(graph: LinkGraph, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет граф graph в формате JSON по указанному пути.

    :param graph: граф ссылок после обхода
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from rank_spider.report.json_report import render_json
    report_path = render_json(graph, 'reports/graph.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    # Узлы в порядке создания, рёбра как пары [from, to]
    data = graph.to_dict()

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2 if pretty else None)

    return output
