# File: rank_spider/indexer.py
"""rank_spider.indexer: Сохранение проиндексированных страниц."""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from rank_spider.crawler.models import HTMLPage
from rank_spider.logger import get_logger

__all__ = ["FileIndexer", "NullIndexer"]

log = get_logger("indexer")


class FileIndexer:
    """Writes every indexed page to ``<output_dir>/P<n>.html``.

    ``n`` is the 1-based index number, zero-padded to as many digits as
    ``max_count`` has, so the files sort in crawl order.
    """

    def __init__(self, output_dir: Union[str, Path], max_count: int) -> None:
        self.output_dir = Path(output_dir)
        self.width = len(str(max(max_count, 1)))
        self.count = 0
        self.saved: List[Path] = []

    def index(self, page: HTMLPage) -> Path:
        self.count += 1
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"P{self.count:0{self.width}d}.html"
        path.write_text(page.content, encoding="utf-8")
        self.saved.append(path)
        log.debug("Saved %s as %s", page.url, path)
        return path


class NullIndexer:
    """Indexer used when no output directory is configured: only records URLs."""

    def __init__(self) -> None:
        self.indexed: List[str] = []

    def index(self, page: HTMLPage) -> None:
        self.indexed.append(page.url)
        log.debug("Indexed %s (not stored)", page.url)
