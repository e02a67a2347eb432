# File: site_search/indexer.py
"""site_search.indexer: построение инвертированного индекса слово → url → частота.

The index is a plain nested mapping and is saved as JSON::

    {
      "word1": {"url1": 3, "url2": 1},
      "word2": {"url1": 2}
    }
"""

from __future__ import annotations

import json
import re
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, Iterator, Union

from site_search.logger import logger
from site_search.parser.html_parser import extract_text
from site_search.storage.page_store import FilePageStore, PersistedPage

__all__ = ["Index", "tokenize", "index_pages", "build_index", "save_index", "load_index"]

Index = Dict[str, Dict[str, int]]

MIN_WORD_LENGTH = 4
_NON_ALPHA = re.compile(r"[^a-zA-Z]")


def tokenize(text: str) -> Iterator[str]:
    """Yield lower-cased words of at least four ASCII letters; other tokens are skipped."""
    for word in text.split():
        if len(word) < MIN_WORD_LENGTH or _NON_ALPHA.search(word):
            continue
        yield word.lower()


def index_pages(pages: Iterable[PersistedPage]) -> Index:
    """Count every word of every page under the page URL."""
    counts: Dict[str, Dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for page in pages:
        for word in tokenize(extract_text(page.text)):
            counts[word][page.url] += 1
    return {word: dict(urls) for word, urls in counts.items()}


def build_index(pages_dir: Union[str, Path]) -> Index:
    """Build the index from every page saved in *pages_dir*."""
    store = FilePageStore(pages_dir)
    index = index_pages(store)
    logger.info("Indexed %d pages from %s: %d unique words", len(store.ids()), pages_dir, len(index))
    return index


def save_index(index: Index, path: Union[str, Path]) -> Path:
    """Write *index* as indented JSON; the file name must end with ``json``."""
    p = Path(path)
    if not str(p).endswith("json"):
        raise ValueError(f"{p} does not end with json")
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(index, f, ensure_ascii=False, indent=2, sort_keys=True)
    return p


def load_index(path: Union[str, Path]) -> Index:
    """Read an index previously written by :func:`save_index`."""
    p = Path(path)
    if not str(p).endswith("json"):
        raise ValueError(f"{p} does not end with json")
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Верхний уровень индекса должен быть mapping, получено {type(data).__name__}")
    return data
