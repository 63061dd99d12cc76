# rank_spider/__init__.py
"""
RankSpider package initializer.
Defines package version and exposes the crawl core and CLI.
"""
__version__ = "0.1.0"

from rank_spider.crawler.crawler import CrawlController, CrawlState
from rank_spider.crawler.models import Link
from rank_spider.graph import LinkGraph

# Expose CLI entry point
from .cli import cli  # экспорт для pytest

__all__ = ["CrawlController", "CrawlState", "Link", "LinkGraph", "cli", "__version__"]
