# File: rank_spider/engine.py
"""rank_spider.engine: Сборка компонентов паука и запуск обхода."""

from __future__ import annotations

import asyncio
from typing import Optional, TextIO

from aiohttp import ClientSession, ClientTimeout

from rank_spider.config import SpiderConfig
from rank_spider.crawler.crawler import CrawlController
from rank_spider.crawler.fetcher import PageRetriever
from rank_spider.crawler.link_extractor import SiteLinkExtractor
from rank_spider.crawler.models import Link
from rank_spider.graph import LinkGraph
from rank_spider.indexer import FileIndexer, NullIndexer
from rank_spider.logger import logger
from rank_spider.report.text_report import GraphReporter

__all__ = ["build_controller", "start_crawl", "run_crawl"]


def build_controller(config: SpiderConfig, session: ClientSession) -> CrawlController:
    """Создаёт CrawlController с сетевым ретривером, экстрактором и индексатором из конфига."""
    indexer = (
        FileIndexer(config.output_dir, config.max_count)
        if config.output_dir is not None
        else NullIndexer()
    )
    return CrawlController(
        PageRetriever(session, config),
        SiteLinkExtractor(same_host=True),
        indexer,
        max_count=config.max_count,
        slow=config.slow,
        pause=config.pause,
    )


async def start_crawl(config: SpiderConfig) -> LinkGraph:
    """Запускает обход с config.start_url и возвращает построенный граф ссылок."""
    logger.info("Starting crawl: %s", config.start_url)
    timeout = ClientTimeout(total=config.timeout)
    async with ClientSession(
        timeout=timeout,
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    ) as session:
        controller = build_controller(config, session)
        return await controller.run([Link.from_url(str(config.start_url))])


def run_crawl(config: SpiderConfig, stream: Optional[TextIO] = None) -> LinkGraph:
    """Синхронная обёртка: обход, затем печать структуры графа в stream (stdout)."""
    try:
        graph = asyncio.run(start_crawl(config))
    except Exception as exc:
        logger.error("Crawl failed: %s", exc)
        raise
    GraphReporter(graph).print(stream)
    return graph
