"""site_search.crawler: обход сайта и реестр посещённых URL."""

from site_search.crawler.crawler import AsyncCrawler
from site_search.crawler.fetcher import FetchError, Fetcher, HttpFetcher
from site_search.crawler.models import CrawledPage, PageData
from site_search.crawler.registry import VisitedRegistry

__all__ = [
    "AsyncCrawler",
    "CrawledPage",
    "FetchError",
    "Fetcher",
    "HttpFetcher",
    "PageData",
    "VisitedRegistry",
]
