# rank_spider/crawler/link_extractor.py
"""
Link extraction and HTML-resource filtering for RankSpider.
"""
from __future__ import annotations

import posixpath
from typing import List

from bs4 import BeautifulSoup
from bs4.element import Tag
from rank_spider.crawler.models import HTMLPage, Link

HTML_EXTENSIONS: frozenset[str] = frozenset((
    "html", "htm", "shtml", "xhtml",
    "php", "asp", "aspx", "jsp", "cgi", "pl",
))


def is_html_resource(link: Link) -> bool:
    """
    Guess from the URL alone whether *link* points to an HTML page.

    Directory paths and file names without an extension count as HTML.
    """
    if not link.url.startswith(("http://", "https://")):
        return False
    name = posixpath.basename(link.path)
    if not name:
        return True
    _, dot, ext = name.rpartition(".")
    return not dot or ext.lower() in HTML_EXTENSIONS


class SiteLinkExtractor:
    """Extracts ``<a href>`` links in document order, optionally staying on one host."""

    def __init__(self, same_host: bool = True) -> None:
        self.same_host = same_host

    def extract_links(self, page: HTMLPage) -> List[Link]:
        """
        Return the canonical links of *page*.

        Ignores mailto:, javascript: and non-HTTP(S) targets. Returns
        nothing when the page forbids following its links.
        """
        if not page.follow_allowed or page.is_empty():
            return []
        soup = BeautifulSoup(page.content, "html.parser")
        base = page.url
        base_tag = soup.find("base", href=True)
        if isinstance(base_tag, Tag) and isinstance(base_tag.get("href"), str):
            base = Link.from_url(str(base_tag["href"]), base=page.url).url
        host = page.link.host
        links: List[Link] = []
        for tag in soup.find_all("a", href=True):
            if not isinstance(tag, Tag):
                continue
            href = tag.get("href")
            if not isinstance(href, str):
                continue
            raw = href.strip()
            if not raw or raw.startswith(("mailto:", "javascript:", "tel:")):
                continue
            link = Link.from_url(raw, base=base, source=page.url)
            if not link.url.startswith(("http://", "https://")):
                continue
            if self.same_host and link.host != host:
                continue
            links.append(link)
        return links
