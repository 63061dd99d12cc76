# File: rank_spider/report/text_report.py
"""rank_spider.report.text_report: Текстовый вывод структуры графа ссылок."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from rank_spider.graph import LinkGraph

__all__ = ["GraphReporter"]


class GraphReporter:
    """Печатает граф ссылок в конце обхода.

    Пример вывода::

        Graph Structure:
        http://example.com/
          -> [http://example.com/about]
          <- []
    """

    HEADER = "Graph Structure:"

    def __init__(self, graph: LinkGraph) -> None:
        self.graph = graph

    def render(self) -> str:
        body = self.graph.render()
        return f"{self.HEADER}\n{body}" if body else self.HEADER

    def print(self, stream: Optional[TextIO] = None) -> None:
        out = stream if stream is not None else sys.stdout
        out.write(self.render() + "\n")
        out.flush()
