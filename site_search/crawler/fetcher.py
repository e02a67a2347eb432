# site_search/crawler/fetcher.py
"""
Fetcher module: the capability the crawler needs from the network, and the
aiohttp-backed implementation of it.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Protocol, runtime_checkable

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_search.config import CrawlerConfig
from site_search.crawler.link_extractor import extract_links
from site_search.crawler.models import PageData

__all__ = ("Fetcher", "FetchError", "HttpFetcher")


class FetchError(Exception):
    """Raised when a page could not be retrieved (bad status or transport failure)."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


@runtime_checkable
class Fetcher(Protocol):
    """Anything that can turn a URL into a :class:`PageData`."""

    async def fetch(self, url: str) -> PageData:
        """Return the page body and its raw links, or raise :class:`FetchError`."""
        ...


class HttpFetcher:
    """Fetches pages over HTTP with a shared aiohttp session."""

    def __init__(self, config: CrawlerConfig) -> None:
        self.config = config
        self.session: Optional[ClientSession] = None

    async def __aenter__(self) -> HttpFetcher:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()
        self.session = None

    async def fetch(self, url: str) -> PageData:
        """
        GET *url* and extract its links.

        Anything but HTTP 200 is a failure, as are client errors and timeouts.
        """
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url) as resp:
                if resp.status != 200:
                    raise FetchError(url, f"resp status code not OK {resp.status}", resp.status)
                text = await resp.text(errors="replace")
        except (ClientError, asyncio.TimeoutError) as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
        return PageData(url, text, extract_links(text))
