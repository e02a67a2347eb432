# File: site_search/engine.py
"""site_search.engine: запуск обхода для CLI и тестов."""

from __future__ import annotations

from typing import Optional

from site_search.aggregator import CrawlReport, aggregate_results
from site_search.config import CrawlerConfig
from site_search.crawler.crawler import AsyncCrawler
from site_search.crawler.fetcher import Fetcher, HttpFetcher
from site_search.crawler.registry import VisitedRegistry
from site_search.logger import logger
from site_search.storage.page_store import FilePageStore, PageStore

__all__ = ["start_crawl"]


async def _run(
    cfg: CrawlerConfig,
    fetcher: Fetcher,
    store: PageStore,
    registry: Optional[VisitedRegistry],
) -> CrawlReport:
    crawler = AsyncCrawler(cfg, fetcher, store, registry)
    pages = await crawler.run()
    return aggregate_results(cfg.seed, cfg.max_depth, pages, crawler.failures, crawler.duration)


async def start_crawl(
    cfg: CrawlerConfig,
    fetcher: Optional[Fetcher] = None,
    store: Optional[PageStore] = None,
    registry: Optional[VisitedRegistry] = None,
) -> CrawlReport:
    """
    Обходит сайт согласно cfg и возвращает CrawlReport.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация обхода.
    fetcher, store, registry
        Подменяемые зависимости; по умолчанию HTTP-загрузчик, файловое
        хранилище в ``cfg.pages_dir`` и новый реестр.
    """
    store = store if store is not None else FilePageStore(cfg.pages_dir)
    if fetcher is not None:
        return await _run(cfg, fetcher, store, registry)

    logger.debug("Using HTTP fetcher (timeout %.1fs, UA %s)", cfg.timeout, cfg.user_agent)
    async with HttpFetcher(cfg) as http:
        return await _run(cfg, http, store, registry)
