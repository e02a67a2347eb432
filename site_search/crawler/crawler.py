# === FILE: site_search/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from contextlib import nullcontext
from typing import List, Optional

from site_search.config import CrawlerConfig
from site_search.crawler.fetcher import FetchError, Fetcher
from site_search.crawler.models import CrawledPage, PageData
from site_search.crawler.normalizer import resolve
from site_search.crawler.registry import VisitedRegistry
from site_search.storage.page_store import PageStore, PageStoreError, PersistedPage

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """
    Depth-bounded recursive crawler.

    Every in-scope link found on a page becomes its own concurrent sub-crawl;
    a call returns only after its whole subtree has finished. The registry
    guarantees that each page (modulo a trailing slash) is fetched by at most
    one branch at a time.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        fetcher: Fetcher,
        store: PageStore,
        registry: Optional[VisitedRegistry] = None,
    ) -> None:
        self.config = config
        self.seed_url: str = config.seed
        self.fetcher = fetcher
        self.store = store
        self.registry = registry if registry is not None else VisitedRegistry()
        self.pages: List[CrawledPage] = []
        self.failures: List[str] = []
        self.logger = logging.getLogger("SiteSearch")
        self.duration: float = 0.0
        self._fetch_slots: Optional[asyncio.Semaphore] = (
            asyncio.Semaphore(config.max_concurrency) if config.max_concurrency else None
        )

    async def run(self) -> List[CrawledPage]:
        """Crawl from the seed URL down to ``max_depth`` and return the fetched pages."""
        self.logger.info("Crawl started: %s (depth %d)", self.seed_url, self.config.max_depth)
        start = time.monotonic()
        await self.crawl(self.seed_url, self.config.max_depth)
        self.duration = time.monotonic() - start
        self.logger.info(
            "Crawl finished: %d pages in %.2f s, %d failed loads",
            len(self.pages), self.duration, len(self.failures),
        )
        return self.pages

    async def crawl(self, url: str, depth: int) -> None:
        if depth < 0:
            return
        if not self.registry.try_claim(url):
            return

        try:
            page = await self._fetch(url)
        except FetchError as exc:
            self._forget(url)
            self.logger.warning("failed to load %s: %s", url, exc.reason)
            return
        except Exception as exc:
            self._forget(url)
            self.logger.warning("failed to load %s: unexpected %s: %s", url, type(exc).__name__, exc)
            return

        page_id = self.registry.mark_done(url)
        saved = await self._persist(url, page, depth, page_id)
        self.pages.append(CrawledPage(page_id, url, depth, saved))
        self.logger.info("first time done with %s at depth %d", url, depth)

        children = [child for child in (resolve(link, url, self.seed_url) for link in page.links) if child]
        if not children:
            return
        self.logger.debug("[%s] waiting for %d children", url, len(children))
        results = await asyncio.gather(
            *(self.crawl(child, depth - 1) for child in children), return_exceptions=True
        )
        for child, result in zip(children, results):
            if isinstance(result, Exception):
                self.logger.error("sub-crawl of %s aborted: %r", child, result)

    def _forget(self, url: str) -> None:
        self.registry.mark_failed(url)
        self.failures.append(url)

    async def _fetch(self, url: str) -> PageData:
        async with self._fetch_slots or nullcontext():
            return await self.fetcher.fetch(url)

    async def _persist(self, url: str, page: PageData, depth: int, page_id: int) -> bool:
        record = PersistedPage(url=url, depth=depth, text=page.content)
        try:
            await asyncio.to_thread(self.store.save, record, page_id)
        except PageStoreError as exc:
            self.logger.error("failed to save %s: %s", url, exc)
            return False
        except Exception as exc:
            self.logger.error("failed to save %s: unexpected %s: %s", url, type(exc).__name__, exc)
            return False
        return True
