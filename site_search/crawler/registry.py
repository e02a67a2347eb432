# site_search/crawler/registry.py
"""
Visited registry: the shared record of which URLs are being fetched or are
already done.

Every method takes the same lock and none of them does I/O, so the registry can
be shared by any number of crawl tasks (or threads) at once.
"""
from __future__ import annotations

import enum
import threading
from typing import Dict, List, Optional, Union

__all__ = ("VisitedRegistry", "VisitStatus", "LOADING", "url_variants")


class VisitStatus(enum.Enum):
    LOADING = "loading"


LOADING = VisitStatus.LOADING

_Entry = Union[VisitStatus, str]


def url_variants(url: str) -> tuple[str, ...]:
    """The spellings that count as the same page: exact, with and without trailing slash."""
    return (url, url + "/", url.removesuffix("/"))


class VisitedRegistry:
    """URL → status map plus the page-id counter, guarded by one lock."""

    def __init__(self) -> None:
        self._entries: Dict[str, _Entry] = {}
        self._next_id = 0
        self._lock = threading.Lock()

    def try_claim(self, url: str) -> bool:
        """
        Reserve *url* for fetching.

        Returns False, changing nothing, if any spelling of *url* is loading or
        done; otherwise marks *url* as loading and returns True.
        """
        with self._lock:
            if any(v in self._entries for v in url_variants(url)):
                return False
            self._entries[url] = LOADING
            return True

    def mark_done(self, url: str, canonical_url: Optional[str] = None) -> int:
        """Record *url* as fetched and hand out the next page id."""
        with self._lock:
            self._entries[url] = canonical_url or url
            page_id = self._next_id
            self._next_id += 1
            return page_id

    def mark_failed(self, url: str) -> None:
        """Forget *url* so that a later discovery may try it again."""
        with self._lock:
            self._entries.pop(url, None)

    def status(self, url: str) -> Optional[_Entry]:
        with self._lock:
            return self._entries.get(url)

    def is_claimed(self, url: str) -> bool:
        with self._lock:
            return any(v in self._entries for v in url_variants(url))

    def done_urls(self) -> List[str]:
        with self._lock:
            return [url for url, entry in self._entries.items() if entry is not LOADING]

    def snapshot(self) -> Dict[str, str]:
        """Copy of the map with statuses rendered as strings."""
        with self._lock:
            return {
                url: entry.value if isinstance(entry, VisitStatus) else entry
                for url, entry in self._entries.items()
            }

    @property
    def pages_done(self) -> int:
        with self._lock:
            return self._next_id

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
