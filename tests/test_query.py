# File: tests/test_query.py
import pytest

from site_search.query import (
    QuerySyntaxError,
    Rank,
    contains_illegal,
    evaluate_and,
    evaluate_query,
    parse_query,
    search,
)

INDEX = {
    "linux": {"https://x/a": 3, "https://x/b": 1, "https://x/c": 2},
    "kernel": {"https://x/a": 1, "https://x/b": 4},
    "windows": {"https://x/c": 5},
    "shell": {"https://x/c": 1, "https://x/d": 7},
}


@pytest.mark.parametrize(
    "line,expected",
    [
        ("linux", [["linux"]]),
        ("linux kernel", [["linux", "kernel"]]),
        ("linux and kernel", [["linux", "kernel"]]),
        ("linux or shell", [["linux"], ["shell"]]),
        ("-windows linux and kernel or shell", [["-windows", "linux", "kernel"], ["shell"]]),
    ],
)
def test_parse_valid(line, expected):
    assert parse_query(line) == expected


@pytest.mark.parametrize(
    "line",
    ["or linux", "linux or", "linux or or shell", "and linux", "linux and", "linux and and kernel", "", "   "],
)
def test_parse_invalid(line):
    with pytest.raises(QuerySyntaxError):
        parse_query(line)


@pytest.mark.parametrize("line,illegal", [("linux -windows", False), ("c++", True), ("what?", True), ("naïve", True)])
def test_contains_illegal(line, illegal):
    assert contains_illegal(line) is illegal


def test_illegal_characters_are_syntax_errors():
    with pytest.raises(QuerySyntaxError, match="illegal"):
        parse_query("linux & kernel")


def test_and_uses_minimum_frequency():
    assert evaluate_and(["linux", "kernel"], INDEX) == {"https://x/a": 1, "https://x/b": 1}


def test_and_with_unknown_word_matches_nothing():
    assert evaluate_and(["linux", "plan"], INDEX) == {}


def test_not_excludes_pages():
    assert evaluate_and(["linux", "-windows"], INDEX) == {"https://x/a": 3, "https://x/b": 1}


def test_short_words_ignored():
    assert evaluate_and(["linux", "os", "-ab"], INDEX) == {"https://x/a": 3, "https://x/b": 1, "https://x/c": 2}


def test_only_negations_match_nothing():
    assert evaluate_and(["-windows"], INDEX) == {}


def test_or_sums_scores_and_sorts():
    ranks = evaluate_query([["linux"], ["shell"]], INDEX)
    assert ranks == [
        Rank("https://x/d", 7),
        Rank("https://x/a", 3),
        Rank("https://x/c", 3),
        Rank("https://x/b", 1),
    ]


def test_search_lowercases():
    assert search("LINUX AND Kernel", INDEX) == [Rank("https://x/a", 1), Rank("https://x/b", 1)]


def test_search_no_results():
    assert search("nothing", INDEX) == []
