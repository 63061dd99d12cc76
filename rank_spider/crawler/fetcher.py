# rank_spider/crawler/fetcher.py
"""
Retriever module: fetches HTML pages over HTTP with robots enforcement,
retry/backoff and Crawl-delay pacing.
"""
from __future__ import annotations

import asyncio
import random
import time
from typing import Dict, Optional, Sequence
from urllib.parse import urlunparse, urlparse

from aiohttp import ClientError, ClientSession
from rank_spider.config import SpiderConfig
from rank_spider.crawler.models import AccessDenied, HTMLPage, Link
from rank_spider.crawler.robots import RobotsTxtRules, parse_robots_meta
from rank_spider.logger import get_logger

RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)
HTML_MIME_TYPES: frozenset[str] = frozenset(("text/html", "application/xhtml+xml"))


class PageRetriever:
    """Fetches pages for the crawl controller.

    When ``config.obey_robots`` is set, robots.txt is loaded once per host
    and a page's robots META tag is honoured:

    * ``noindex``  – the page is returned with ``index_allowed=False``;
    * ``nofollow`` – the page is returned with ``follow_allowed=False``;
    * both (or ``none``) – :class:`AccessDenied` is raised.
    """

    def __init__(self, session: ClientSession, config: SpiderConfig) -> None:
        self.session = session
        self.config = config
        self.logger = get_logger("fetcher")
        self._robots: Dict[str, Optional[RobotsTxtRules]] = {}
        self._last_request_ts = 0.0

    async def fetch(self, link: Link) -> HTMLPage:
        """
        Fetch *link* and return an HTMLPage.

        Raises AccessDenied when robots directives forbid the page. Any
        retrieval failure yields an empty page.
        """
        rules: Optional[RobotsTxtRules] = None
        if self.config.obey_robots:
            rules = await self._robots_for(link)
            if rules is not None and not rules.can_fetch(self.config.user_agent, link.request_path):
                raise AccessDenied(link, "robots.txt")

        delay = rules.crawl_delay(self.config.user_agent) if rules else None
        text = await self._get_text(link, delay)
        if text is None:
            return HTMLPage.empty(link)

        page = HTMLPage(link, text)
        if self.config.obey_robots:
            meta = parse_robots_meta(text, self.config.user_agent)
            if not meta.index and not meta.follow:
                raise AccessDenied(link, "robots META tag")
            page.index_allowed = meta.index
            page.follow_allowed = meta.follow
        return page

    async def _get_text(self, link: Link, crawl_delay: Optional[float]) -> Optional[str]:
        attempts = 0
        while True:
            await self._respect_delay(crawl_delay)
            try:
                async with self.session.get(link.url) as resp:
                    if resp.status in RETRY_STATUS:
                        raise ClientError(f"retryable status {resp.status}")
                    if resp.status != 200:
                        self.logger.debug("%s -> HTTP %s", link, resp.status)
                        return None
                    mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                    if mime not in HTML_MIME_TYPES:
                        self.logger.debug("%s -> %s, not HTML", link, mime or "no content type")
                        return None
                    return await resp.text(errors="replace")
            except asyncio.TimeoutError:
                # no retry on timeout
                self.logger.warning("Timeout fetching %s", link)
                return None
            except ClientError as exc:
                attempts += 1
                if attempts > self.config.retry_times:
                    self.logger.warning("Failed %s: %s", link, exc)
                    return None
                backoff = min(60, 2**attempts + random.random())
                self.logger.debug(
                    "Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, link, backoff
                )
                await asyncio.sleep(backoff)

    async def _respect_delay(self, crawl_delay: Optional[float]) -> None:
        if not crawl_delay:
            return
        wait = crawl_delay - (time.monotonic() - self._last_request_ts)
        if wait > 0:
            await asyncio.sleep(wait)
        self._last_request_ts = time.monotonic()

    async def _robots_for(self, link: Link) -> Optional[RobotsTxtRules]:
        parsed = urlparse(link.url)
        origin = f"{parsed.scheme}://{parsed.netloc}"
        if origin not in self._robots:
            self._robots[origin] = await self._load_robots(parsed.scheme, parsed.netloc)
        return self._robots[origin]

    async def _load_robots(self, scheme: str, netloc: str) -> Optional[RobotsTxtRules]:
        robots_url = urlunparse((scheme, netloc, "/robots.txt", "", "", ""))
        try:
            async with self.session.get(robots_url) as resp:
                if resp.status == 200:
                    return RobotsTxtRules(await resp.text(errors="replace"))
                # default allow all
                self.logger.debug("robots.txt %s -> HTTP %s", robots_url, resp.status)
                return None
        except (ClientError, asyncio.TimeoutError) as exc:
            self.logger.warning("Error loading robots.txt from %s: %s", robots_url, exc)
            return None
