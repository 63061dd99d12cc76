# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Dict, List, Optional, Union

import pytest
from aiohttp import web

from rank_spider.crawler.models import HTMLPage, Link

SITE = "http://site.test"


def url(path: str) -> str:
    """Canonical URL of *path* on the stub site."""
    return Link.from_url(path, base=SITE + "/").url


class StubRetriever:
    """Serves canned pages; unknown URLs come back empty."""

    def __init__(self, pages: Dict[str, Union[HTMLPage, Exception]]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, link: Link) -> HTMLPage:
        self.calls.append(link.url)
        result = self.pages.get(link.url)
        if result is None:
            return HTMLPage.empty(link)
        if isinstance(result, Exception):
            raise result
        return result


class StubExtractor:
    """Returns the links listed for each page URL, in order."""

    def __init__(self, links: Dict[str, List[str]]) -> None:
        self.links = links

    def extract_links(self, page: HTMLPage) -> List[Link]:
        return [Link.from_url(u, source=page.url) for u in self.links.get(page.url, [])]


class RecordingIndexer:
    def __init__(self) -> None:
        self.indexed: List[str] = []

    def index(self, page: HTMLPage) -> None:
        self.indexed.append(page.url)


def make_page(path: str, content: str = "<html><body>page</body></html>", *,
              index: bool = True, follow: bool = True) -> HTMLPage:
    return HTMLPage(Link(url(path)), content, index_allowed=index, follow_allowed=follow)


@pytest.fixture()
def indexer() -> RecordingIndexer:
    return RecordingIndexer()


async def serve_app(app: web.Application) -> AsyncIterator[str]:
    """Start *app* on an ephemeral port, yield its base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()
    host, port = runner.addresses[0][:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        await runner.cleanup()


def html_response(text: str) -> web.Response:
    return web.Response(text=text, content_type="text/html")


def robots_response(text: Optional[str] = None) -> web.Response:
    return web.Response(text=text or "User-agent: *\nDisallow:", content_type="text/plain")
