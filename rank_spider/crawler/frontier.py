# rank_spider/crawler/frontier.py
"""
Pending-work queue and dedup record of the crawl.
"""
from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Iterator, Set

from rank_spider.crawler.models import EmptyFrontier, Link


class Frontier:
    """FIFO queue of links awaiting a crawl attempt (breadth-first order)."""

    def __init__(self, links: Iterable[Link] = ()) -> None:
        self._queue: Deque[Link] = deque(links)

    def enqueue(self, links: Iterable[Link]) -> None:
        """Append *links* to the tail, keeping their order."""
        self._queue.extend(links)

    def dequeue(self) -> Link:
        """Remove and return the head link."""
        try:
            return self._queue.popleft()
        except IndexError:
            raise EmptyFrontier("No links left to visit") from None

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)

    def __iter__(self) -> Iterator[Link]:
        return iter(self._queue)


class VisitedSet:
    """Links already dequeued, keyed by canonical URL. Never shrinks."""

    def __init__(self) -> None:
        self._urls: Set[str] = set()

    def add(self, link: Link) -> bool:
        """Return True if *link* was newly inserted, False if already present."""
        if link.url in self._urls:
            return False
        self._urls.add(link.url)
        return True

    def __contains__(self, link: object) -> bool:
        url = link.url if isinstance(link, Link) else link
        return url in self._urls

    def __len__(self) -> int:
        return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)
