# File: tests/test_normalizer.py
import pytest

from site_search.crawler.normalizer import is_in_scope, resolve

SEED = "https://seed.example/"


@pytest.mark.parametrize("raw", ["", "   ", "#", "#section2"])
def test_empty_and_anchor_links_rejected(raw):
    assert resolve(raw, "https://seed.example/page/", SEED) is None


@pytest.mark.parametrize(
    "raw,base,expected",
    [
        ("child?x=1#frag", "https://seed.example/page/", "https://seed.example/page/child?x=1"),
        ("child", "https://seed.example/page", "https://seed.example/child"),
        ("../up", "https://seed.example/a/b/", "https://seed.example/a/up"),
        ("/root", "https://seed.example/a/b/", "https://seed.example/root"),
        ("//seed.example/proto", "https://seed.example/", "https://seed.example/proto"),
        ("https://seed.example/abs#x", "https://seed.example/", "https://seed.example/abs"),
        ("sub/", "https://seed.example/dir/", "https://seed.example/dir/sub/"),
    ],
)
def test_resolution(raw, base, expected):
    assert resolve(raw, base, SEED) == expected


def test_trailing_slash_kept_as_written():
    assert resolve("/docs", SEED, SEED) == "https://seed.example/docs"
    assert resolve("/docs/", SEED, SEED) == "https://seed.example/docs/"


@pytest.mark.parametrize(
    "raw",
    [
        "https://other.example/",
        "//other.example/x",
        "http://seed.example/insecure",
        "mailto:someone@seed.example",
    ],
)
def test_out_of_scope_rejected(raw):
    assert resolve(raw, SEED, SEED) is None


def test_scope_is_a_string_prefix():
    seed = "https://seed.example/docs/"
    assert resolve("/other-site/x", seed, seed) is None
    assert resolve("/docs/x", seed, seed) == "https://seed.example/docs/x"


def test_malformed_link_rejected():
    assert resolve("http://[::1", SEED, SEED) is None


def test_is_in_scope():
    assert is_in_scope("https://seed.example/a", SEED)
    assert not is_in_scope("https://seed.example.evil/a", "https://seed.example/")
