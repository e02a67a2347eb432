# site_search/crawler/models.py
"""
Data models for the SiteSearch crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class PageData:
    """A fetched page: its URL, body text and the raw links found in the body."""

    url: str
    content: str
    links: List[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class CrawledPage:
    """Bookkeeping record for a page the crawler fetched successfully."""

    page_id: int
    url: str
    depth: int
    saved: bool = True
