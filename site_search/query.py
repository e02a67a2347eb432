# File: site_search/query.py
"""site_search.query: boolean queries over the word index.

Grammar (queries are lower-cased first)::

    query   ::= andseq [or andseq]...
    andseq  ::= term [[and] term]...
    term    ::= word | -word

Precedence from highest to lowest is ``-`` (not), ``and``, ``or``; words
shorter than three letters are ignored. A page's score for an AND sequence is
the smallest frequency of its words on that page; OR sequences add up.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Mapping

__all__ = [
    "Rank",
    "QuerySyntaxError",
    "contains_illegal",
    "parse_query",
    "evaluate_and",
    "evaluate_query",
    "search",
]

MIN_TERM_LENGTH = 3
_ILLEGAL = re.compile(r"[^a-zA-Z\s-]")

IndexT = Mapping[str, Mapping[str, int]]


class QuerySyntaxError(ValueError):
    """The query string is not well formed."""


@dataclass(slots=True, frozen=True)
class Rank:
    url: str
    score: int


def contains_illegal(line: str) -> bool:
    """True if *line* holds anything but ASCII letters, whitespace and dashes."""
    return _ILLEGAL.search(line) is not None


def parse_query(line: str) -> List[List[str]]:
    """Split *line* into OR-ed lists of AND-ed terms."""
    if contains_illegal(line):
        raise QuerySyntaxError("illegal characters. use only whitespace, alphabet, and dash")

    segments = line.split(" or ")
    or_count = line.split().count("or")
    if or_count + 1 != len(segments):
        raise QuerySyntaxError("misplaced 'or'")

    query: List[List[str]] = []
    for segment in segments:
        words = segment.split()
        and_count = words.count("and")
        if and_count + 1 != len(segment.split(" and ")):
            raise QuerySyntaxError("misplaced 'and'")
        terms = [w for w in words if w != "and"]
        if not terms:
            raise QuerySyntaxError("empty search term")
        query.append(terms)
    return query


def evaluate_and(terms: List[str], index: IndexT) -> Dict[str, int]:
    """Score the pages matching every include term and no ``-`` term."""
    include: List[str] = []
    excluded: set[str] = set()
    for term in terms:
        if term.startswith("-"):
            word = term[1:]
            if len(word) < MIN_TERM_LENGTH:
                continue
            excluded.update(index.get(word, {}))
            continue
        if len(term) < MIN_TERM_LENGTH:
            continue
        if term not in index:
            return {}
        include.append(term)

    if not include:
        return {}

    candidates = set(index[include[0]])
    for word in include[1:]:
        candidates &= set(index[word])
    candidates -= excluded

    return {url: min(index[word][url] for word in include) for url in candidates}


def evaluate_query(query: List[List[str]], index: IndexT) -> List[Rank]:
    """Sum the AND-sequence scores per page and rank the pages best first."""
    totals: Dict[str, int] = {}
    for terms in query:
        for url, score in evaluate_and(terms, index).items():
            totals[url] = totals.get(url, 0) + score
    ranks = [Rank(url, score) for url, score in totals.items()]
    ranks.sort(key=lambda r: (-r.score, r.url))
    return ranks


def search(line: str, index: IndexT) -> List[Rank]:
    """Lower-case, parse and evaluate a raw query string."""
    return evaluate_query(parse_query(line.lower()), index)
