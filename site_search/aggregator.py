# File: site_search/aggregator.py
"""site_search.aggregator: сводный отчёт по результатам обхода."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Iterable, List, TypedDict

from site_search.crawler.models import CrawledPage


class PageInfo(TypedDict):
    """Информация о загруженной странице."""

    id: int
    url: str
    depth: int
    saved: bool


@dataclass(slots=True)
class CrawlReport:
    """Итог обхода: параметры запуска, загруженные страницы и неудачные URL."""

    seed_url: str
    max_depth: int
    duration: float = 0.0
    pages: List[PageInfo] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["total_pages"] = self.total_pages
        return data

    def json(self, *, pretty: bool = False) -> str:
        """JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(
    seed_url: str,
    max_depth: int,
    pages: Iterable[CrawledPage],
    failed: Iterable[str] = (),
    duration: float = 0.0,
) -> CrawlReport:
    """Собирает CrawlReport; страницы упорядочены по id, неудачные URL без повторов."""
    report = CrawlReport(seed_url=seed_url, max_depth=max_depth, duration=round(duration, 3))
    report.pages = [
        {"id": p.page_id, "url": p.url, "depth": p.depth, "saved": p.saved}
        for p in sorted(pages, key=lambda p: p.page_id)
    ]
    report.failed = sorted(set(failed))
    return report
