# site_search/crawler/normalizer.py
"""
Resolution of discovered links into absolute, in-scope page URLs.
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urljoin

from site_search.logger import logger

__all__ = ("resolve", "is_in_scope")


def is_in_scope(url: str, seed_url: str) -> bool:
    """Return True if *url* lives under the seed URL prefix."""
    return url.startswith(seed_url)


def resolve(raw_link: str, base_url: str, seed_url: str) -> Optional[str]:
    """
    Resolve *raw_link* found on the page at *base_url*.

    Returns the absolute URL without its fragment, or None when the link is
    empty, a same-page anchor, malformed, or outside the seed prefix.
    Trailing slashes are left alone; the visited registry treats
    ``/a`` and ``/a/`` as the same page.
    """
    link = raw_link.strip()
    if not link or link.startswith("#"):
        return None

    try:
        absolute = urljoin(base_url, link)
    except ValueError as exc:
        logger.debug("Malformed link %r on %s: %s", raw_link, base_url, exc)
        return None

    if not is_in_scope(absolute, seed_url):
        logger.debug("Out of scope: %s", absolute)
        return None

    absolute, _, _ = absolute.partition("#")
    return absolute
