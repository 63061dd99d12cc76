# === FILE: rank_spider/crawler/crawler.py ===
"""
Crawl controller: breadth-first traversal that builds the link graph.

The controller owns the frontier, the visited set and the graph. Fetching,
link extraction and indexing are supplied by the caller as collaborators.
"""
from __future__ import annotations

import asyncio
import enum
from collections import Counter
from typing import Callable, Iterable, List, Optional, Protocol

from rank_spider.crawler.frontier import Frontier, VisitedSet
from rank_spider.crawler.link_extractor import is_html_resource
from rank_spider.crawler.models import AccessDenied, EmptyResource, HTMLPage, Link, NotHtml
from rank_spider.graph import LinkGraph, Node
from rank_spider.logger import get_logger

__all__ = ("CrawlController", "CrawlState", "Retriever", "Extractor", "Indexer")


class Retriever(Protocol):
    async def fetch(self, link: Link) -> HTMLPage: ...


class Extractor(Protocol):
    def extract_links(self, page: HTMLPage) -> List[Link]: ...


class Indexer(Protocol):
    def index(self, page: HTMLPage) -> object: ...


class CrawlState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    TERMINATED = "terminated"


class CrawlController:
    """Single-worker crawl loop with a page budget and optional pacing."""

    def __init__(
        self,
        retriever: Retriever,
        extractor: Extractor,
        indexer: Indexer,
        *,
        max_count: int,
        slow: bool = False,
        pause: float = 1.0,
        is_html: Callable[[Link], bool] = is_html_resource,
        graph: Optional[LinkGraph] = None,
    ) -> None:
        if max_count < 0:
            raise ValueError("max_count must be >= 0")
        self.retriever = retriever
        self.extractor = extractor
        self.indexer = indexer
        self.max_count = max_count
        self.slow = slow
        self.pause = pause
        self.is_html = is_html
        self.graph = graph if graph is not None else LinkGraph()
        self.frontier = Frontier()
        self.visited = VisitedSet()
        self.count = 0
        self.state = CrawlState.IDLE
        self.stats: Counter[str] = Counter()
        self.logger = get_logger("crawler")

    async def run(self, seeds: Iterable[Link]) -> LinkGraph:
        """Crawl from *seeds* until the frontier drains or the budget is spent."""
        if self.state is not CrawlState.IDLE:
            raise RuntimeError(f"Controller already used (state: {self.state.value})")
        self.frontier.enqueue(seeds)
        if not self.frontier:
            self.logger.info("Exiting: No pages to visit.")
            self.state = CrawlState.TERMINATED
            return self.graph

        self.state = CrawlState.RUNNING
        self.logger.info("Crawl started: %d seed(s), budget %d page(s)", len(self.frontier), self.max_count)
        while self.frontier:
            if self.slow:
                await asyncio.sleep(self.pause)
            await self._step(self.frontier.dequeue())
            if self.count >= self.max_count:
                break

        self.state = CrawlState.COMPLETED
        self.logger.info(
            "Crawl finished: %d indexed, %d visited, %d left in frontier, graph %d nodes / %d edges",
            self.count, len(self.visited), len(self.frontier), len(self.graph), self.graph.edge_count,
        )
        if self.stats:
            self.logger.info("Skipped: %s", ", ".join(f"{k}={v}" for k, v in sorted(self.stats.items())))
        return self.graph

    async def _step(self, link: Link) -> None:
        self.logger.info("Trying: %s", link)
        if not self.visited.add(link):
            self.logger.debug("Already visited")
            self.stats["visited"] += 1
            return
        if not self.is_html(link):
            self.logger.info("Not HTML page: %s", link)
            self.stats["not_html"] += 1
            return
        if self.count >= self.max_count:
            self.logger.info("Page budget exhausted, not fetching %s", link)
            self.stats["budget"] += 1
            return

        try:
            page = await self.retriever.fetch(link)
        except AccessDenied as exc:
            self.logger.info("%s", exc)
            self.stats["denied"] += 1
            return
        except NotHtml:
            self.logger.info("Not HTML page: %s", link)
            self.stats["not_html"] += 1
            return
        except EmptyResource:
            page = HTMLPage.empty(link)
        if page.is_empty():
            self.logger.info("No page found: %s", link)
            self.stats["empty"] += 1
            return

        current: Optional[Node] = None
        if page.is_index_allowed():
            self.count += 1
            self.logger.info("Indexing(%d): %s", self.count, link)
            try:
                self.indexer.index(page)
            except Exception as exc:
                # a failed write does not undo the visit
                self.logger.warning("Indexing failed for %s: %s", link, exc)
                self.stats["index_failed"] += 1
            current = self.graph.get_or_create_node(link.url)

        if self.count < self.max_count:
            new_links = self.extractor.extract_links(page)
            self._add_to_graph(current, new_links)
            self.frontier.enqueue(new_links)

    def _add_to_graph(self, current: Optional[Node], links: Iterable[Link]) -> None:
        for link in links:
            if not self.is_html(link):
                continue
            target = self.graph.get_or_create_node(link.url)
            # non-indexable pages get no vertex, so no edges originate from them
            if current is not None:
                self.graph.add_edge(current.id, target.id)
