# === FILE: site_search/parser/html_parser.py ===
"""HTML helpers for the indexer.

The crawler never parses markup (it scans for anchors textually); the indexer
does, so that words glued to tags (``<p>Hello``) and the contents of scripts
and stylesheets do not leak into the index.
"""
from __future__ import annotations

from collections.abc import Sequence

from bs4 import BeautifulSoup

__all__: Sequence[str] = ("extract_text",)

_INVISIBLE = ["script", "style", "noscript", "template"]


def extract_text(html: str) -> str:
    """Visible text of *html*, whitespace-separated (scripts, styles and templates dropped)."""
    soup = BeautifulSoup(html, "html.parser")
    for element in soup(_INVISIBLE):
        element.decompose()
    return " ".join(soup.stripped_strings)
