# site_search/crawler/link_extractor.py
"""
Textual link extraction for SiteSearch.

No markup parser is involved: the body is scanned left to right for the
anchor marker and the quoted value right after it is taken as the link.
"""
from __future__ import annotations

from typing import Iterator, List

ANCHOR_MARKER = "a href"
_QUOTES = ('"', "'")


def iter_links(html: str) -> Iterator[str]:
    """Yield raw ``href`` values in document order."""
    pos = 0
    while True:
        marker = html.find(ANCHOR_MARKER, pos)
        if marker == -1:
            return
        start = -1
        quote = ""
        for candidate in _QUOTES:
            idx = html.find(candidate, marker + len(ANCHOR_MARKER))
            if idx != -1 and (start == -1 or idx < start):
                start, quote = idx, candidate
        if start == -1:
            return
        end = html.find(quote, start + 1)
        if end == -1:
            return
        yield html[start + 1 : end]
        pos = end + 1


def extract_links(html: str) -> List[str]:
    """Return all raw links of *html* as a list (duplicates kept)."""
    return list(iter_links(html))
