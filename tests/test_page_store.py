# File: tests/test_page_store.py
import pytest

from site_search.storage.page_store import FilePageStore, PageStoreError, PersistedPage

DUMMY = PersistedPage(
    url="https://dummywebsite.com",
    depth=2,
    text="ypïw-]\tA Âb:c(\tR1Ô0C\n\t\t\n\t\t\n\t\t",
)


def test_save_then_load_preserves_page(pages_dir):
    store = FilePageStore(pages_dir)
    path = store.save(DUMMY, 7)

    assert path == pages_dir / "7"
    assert store.load(7) == DUMMY
    assert store.load("7") == DUMMY


def test_file_layout(pages_dir):
    FilePageStore(pages_dir).save(PersistedPage("https://x/", 1, "<p>hi</p>"), 0)
    assert (pages_dir / "0").read_text(encoding="utf-8") == "https://x/\n1\n<p>hi</p>"


def test_empty_text_round_trip(pages_dir):
    store = FilePageStore(pages_dir)
    store.save(PersistedPage("https://x/empty", 0, ""), 3)
    assert store.load(3).text == ""


def test_ids_sorted_numeric_only(pages_dir):
    store = FilePageStore(pages_dir)
    for page_id in (10, 2, 1):
        store.save(PersistedPage(f"https://x/{page_id}", 0, ""), page_id)
    (pages_dir / "notes.txt").write_text("ignored", encoding="utf-8")

    assert store.ids() == [1, 2, 10]
    assert [p.url for p in store] == ["https://x/1", "https://x/2", "https://x/10"]


def test_missing_directory(tmp_path):
    store = FilePageStore(tmp_path / "nope")
    with pytest.raises(PageStoreError, match="does not exist"):
        store.save(DUMMY, 0)
    with pytest.raises(PageStoreError):
        store.load(0)


def test_missing_page(pages_dir):
    with pytest.raises(PageStoreError):
        FilePageStore(pages_dir).load(42)


def test_bad_depth_line(pages_dir):
    (pages_dir / "5").write_text("https://x/\nnot-a-number\nbody", encoding="utf-8")
    with pytest.raises(PageStoreError, match="bad depth"):
        FilePageStore(pages_dir).load(5)


def test_page_store_error_is_os_error():
    assert issubclass(PageStoreError, OSError)
