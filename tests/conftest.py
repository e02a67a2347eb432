# File: tests/conftest.py
import asyncio
import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

import pytest

from site_search.config import CrawlerConfig
from site_search.crawler.fetcher import FetchError
from site_search.crawler.link_extractor import extract_links
from site_search.crawler.models import PageData
from site_search.logger import LOGGER_NAME
from site_search.storage.page_store import PageStoreError, PersistedPage


def html_page(*links: str, text: str = "") -> str:
    """Build a tiny HTML body with one anchor per link."""
    anchors = "".join(f'<a href="{link}">{link}</a>' for link in links)
    return f"<html><body><p>{text}</p>{anchors}</body></html>"


class FakeFetcher:
    """
    In-memory web site for crawler tests.

    *site* maps URL → HTML body; unknown URLs fail like a 404. *delays* adds a
    per-URL sleep, *failures* makes a URL fail that many times before working.
    """

    def __init__(
        self,
        site: Dict[str, str],
        delays: Optional[Dict[str, float]] = None,
        failures: Optional[Dict[str, int]] = None,
    ) -> None:
        self.site = site
        self.delays = delays or {}
        self.failures = dict(failures or {})
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, url: str) -> PageData:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(url, 0))
            if self.failures.get(url, 0) > 0:
                self.failures[url] -= 1
                raise FetchError(url, "simulated transport failure")
            if url not in self.site:
                raise FetchError(url, "resp status code not OK 404", 404)
            body = self.site[url]
            return PageData(url, body, extract_links(body))
        finally:
            self.in_flight -= 1

    def count(self, *urls: str) -> int:
        return sum(self.calls.count(u) for u in urls)


class MemoryPageStore:
    """PageStore double keeping pages in a dict; URLs in *broken* fail to save."""

    def __init__(self, broken: Iterable[str] = ()) -> None:
        self.pages: Dict[int, PersistedPage] = {}
        self.broken = set(broken)

    def save(self, page: PersistedPage, page_id: int) -> int:
        if page.url in self.broken:
            raise PageStoreError(f"disk full while saving {page.url}")
        assert page_id not in self.pages, "page ids must be unique"
        self.pages[page_id] = page
        return page_id

    def load(self, page_id: int) -> PersistedPage:
        try:
            return self.pages[page_id]
        except KeyError as exc:
            raise PageStoreError(f"no page {page_id}") from exc

    def ids(self) -> List[int]:
        return sorted(self.pages)


@pytest.fixture(autouse=True)
def reset_project_logger():
    """CLI tests reconfigure the project logger; restore propagation for caplog."""
    yield
    lg = logging.getLogger(LOGGER_NAME)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)


@pytest.fixture()
def pages_dir(tmp_path: Path) -> Path:
    path = tmp_path / "pages"
    path.mkdir()
    return path


@pytest.fixture()
def make_config(pages_dir: Path) -> Callable[..., CrawlerConfig]:
    """Factory for a valid CrawlerConfig rooted at *seed*."""

    def _make(seed: str, depth: int = 1, **overrides) -> CrawlerConfig:
        return CrawlerConfig(seed_url=seed, max_depth=depth, pages_dir=pages_dir, **overrides)

    return _make


@pytest.fixture()
def memory_store() -> MemoryPageStore:
    return MemoryPageStore()
