# rank_spider/crawler/models.py
"""
Data models and crawl error taxonomy for the RankSpider crawler.
"""
from __future__ import annotations

import posixpath
import re
import string
from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import ParseResult, parse_qsl, quote, urldefrag, urlencode, urljoin, urlparse, urlunparse

_DEFAULT_PORTS = {"http": 80, "https": 443}
_ESCAPE_RE = re.compile(r"%([0-9A-Fa-f]{2})")
_UNRESERVED = frozenset(string.ascii_letters + string.digits + "-._~")


def _normalize_escapes(path: str) -> str:
    """Decode escaped unreserved characters; uppercase every other escape."""

    def repl(match: re.Match[str]) -> str:
        char = chr(int(match.group(1), 16))
        return char if char in _UNRESERVED else "%" + match.group(1).upper()

    return _ESCAPE_RE.sub(repl, path)


def _netloc(parsed: ParseResult, scheme: str) -> str:
    host = (parsed.hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"
    try:
        port = parsed.port
    except ValueError:
        # unparsable port: keep the authority as written
        netloc = parsed.netloc.rpartition("@")[2].lower()
    else:
        netloc = host if port is None or _DEFAULT_PORTS.get(scheme) == port else f"{host}:{port}"
    if parsed.username is not None:
        userinfo = parsed.username
        if parsed.password is not None:
            userinfo = f"{userinfo}:{parsed.password}"
        netloc = f"{userinfo}@{netloc}"
    return netloc


def canonicalize_url(url: str, base: Optional[str] = None) -> str:
    """
    Return the canonical string form of *url*.

    Joins against *base*, lowercases scheme and host, drops default ports
    and the fragment, resolves dot segments and sorts query parameters.
    Escapes of reserved characters such as ``%2F`` are kept.
    """
    if base:
        url = urljoin(base, url)
    url, _ = urldefrag(url.strip())
    parsed = urlparse(url)
    scheme = parsed.scheme.lower()
    netloc = _netloc(parsed, scheme)

    path = _normalize_escapes(parsed.path or "/")
    norm = posixpath.normpath(path)
    if path.endswith("/") and not norm.endswith("/"):
        norm += "/"
    # normpath keeps a leading "//"
    norm = "/" + norm.lstrip("/")
    norm = quote(norm, safe="/:@!$&'()*+,;=~-._%")

    qs = parse_qsl(parsed.query, keep_blank_values=True)
    qs.sort()
    query = urlencode(qs, doseq=True)
    return urlunparse((scheme, netloc, norm, parsed.params, query, ""))


@dataclass(frozen=True, slots=True)
class Link:
    """A URL reference identified by its canonical string."""

    url: str
    source: Optional[str] = field(default=None, compare=False, hash=False)

    @classmethod
    def from_url(cls, raw: str, base: Optional[str] = None, source: Optional[str] = None) -> Link:
        return cls(canonicalize_url(raw, base), source)

    @property
    def host(self) -> str:
        return urlparse(self.url).netloc

    @property
    def path(self) -> str:
        return urlparse(self.url).path or "/"

    @property
    def request_path(self) -> str:
        """Path plus query string, the part robots.txt rules are matched against."""
        parsed = urlparse(self.url)
        path = parsed.path or "/"
        return f"{path}?{parsed.query}" if parsed.query else path

    def __str__(self) -> str:
        return self.url


@dataclass(slots=True)
class HTMLPage:
    """A fetched resource together with the robots permissions found in it."""

    link: Link
    content: str = ""
    index_allowed: bool = True
    follow_allowed: bool = True

    @classmethod
    def empty(cls, link: Link) -> HTMLPage:
        return cls(link, "")

    @property
    def url(self) -> str:
        return self.link.url

    def is_empty(self) -> bool:
        return not self.content.strip()

    def is_index_allowed(self) -> bool:
        return self.index_allowed


class CrawlError(Exception):
    """Base class for per-link crawl conditions."""


class AccessDenied(CrawlError):
    """robots.txt or a robots META tag disallows access to a link."""

    def __init__(self, link: Link, reason: str = "robots.txt") -> None:
        super().__init__(f"Access to {link} denied by {reason}")
        self.link = link
        self.reason = reason


class EmptyResource(CrawlError):
    """The retrieval produced no usable content."""


class NotHtml(CrawlError):
    """The link does not point to an HTML resource."""


class EmptyFrontier(CrawlError):
    """Dequeue was attempted on an empty frontier."""
