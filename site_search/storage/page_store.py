# File: site_search/storage/page_store.py
"""site_search.storage.page_store: durable storage of crawled pages.

Each page lives in its own file named after its page id::

    <url>\\n
    <depth>\\n
    <text, verbatim>
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Protocol, Sequence, Union

from site_search.logger import logger

__all__: Sequence[str] = ("PersistedPage", "PageStore", "PageStoreError", "FilePageStore")


class PageStoreError(OSError):
    """A page could not be written or read back."""


@dataclass(slots=True, frozen=True)
class PersistedPage:
    """A crawled page as it is stored: URL, crawl depth and text."""

    url: str
    depth: int
    text: str


class PageStore(Protocol):
    def save(self, page: PersistedPage, page_id: int) -> object: ...

    def load(self, page_id: int) -> PersistedPage: ...

    def ids(self) -> List[int]: ...


class FilePageStore:
    """Stores pages as plain files inside one directory."""

    def __init__(self, directory: Union[str, Path]) -> None:
        self.directory = Path(directory)

    def path_for(self, page_id: int) -> Path:
        return self.directory / str(page_id)

    def save(self, page: PersistedPage, page_id: int) -> Path:
        """Write *page* under *page_id*; distinct ids never touch the same file."""
        if not self.directory.is_dir():
            raise PageStoreError(f"dir {self.directory} does not exist")
        path = self.path_for(page_id)
        try:
            with path.open("w", encoding="utf-8", newline="") as fh:
                fh.write(f"{page.url}\n{page.depth}\n")
                fh.write(page.text)
        except OSError as exc:
            raise PageStoreError(f"failed to save {page.url} to {path}: {exc}") from exc
        logger.debug("Saved %s as %s", page.url, path)
        return path

    def load(self, page_id: Union[int, str]) -> PersistedPage:
        """Read back the page stored under *page_id*."""
        if not self.directory.is_dir():
            raise PageStoreError(f"dir {self.directory} does not exist")
        path = self.path_for(int(page_id))
        try:
            with path.open("r", encoding="utf-8", newline="") as fh:
                raw = fh.read()
        except OSError as exc:
            raise PageStoreError(f"failed to load {path}: {exc}") from exc

        parts = raw.split("\n", 2)
        if len(parts) < 2:
            raise PageStoreError(f"{path} is missing the url/depth header")
        url, depth_line = parts[0], parts[1]
        try:
            depth = int(depth_line)
        except ValueError as exc:
            raise PageStoreError(f"{path}: bad depth line {depth_line!r}") from exc
        text = parts[2] if len(parts) == 3 else ""
        return PersistedPage(url=url, depth=depth, text=text)

    def ids(self) -> List[int]:
        """Ids of all stored pages in ascending order; other files are ignored."""
        if not self.directory.is_dir():
            raise PageStoreError(f"dir {self.directory} does not exist")
        return sorted(int(p.name) for p in self.directory.iterdir() if p.is_file() and p.name.isdigit())

    def __iter__(self):
        for page_id in self.ids():
            yield self.load(page_id)
