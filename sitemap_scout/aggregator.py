# File: sitemap_scout/aggregator.py
"""sitemap_scout.aggregator: Модуль агрегатора результатов обхода sitemap."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from sitemap_scout.crawler.models import SEORecord


@dataclass(slots=True)
class ScrapeReport:
    """Результаты обхода: SEO-записи страниц и статистика обеих фаз."""

    seed_url: str
    records: List[SEORecord] = field(default_factory=list)
    discovered: int = 0
    failed_sitemaps: List[str] = field(default_factory=list)
    failed_pages: List[str] = field(default_factory=list)
    duration: float = 0.0
    timed_out: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Возвращает представление отчёта, пригодное для JSON и шаблонов."""
        return {
            "seed_url": self.seed_url,
            "summary": {
                "discovered": self.discovered,
                "scraped": len(self.records),
                "failed_sitemaps": len(self.failed_sitemaps),
                "failed_pages": len(self.failed_pages),
                "duration": round(self.duration, 3),
                "timed_out": self.timed_out,
            },
            "records": [r.to_dict() for r in self.records],
            "failed_sitemaps": list(self.failed_sitemaps),
            "failed_pages": list(self.failed_pages),
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление ScrapeReport."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(
    seed_url: str,
    records: Iterable[SEORecord],
    *,
    discovered: int = 0,
    failed_sitemaps: Optional[Iterable[str]] = None,
    failed_pages: Optional[Iterable[str]] = None,
    duration: float = 0.0,
    timed_out: bool = False,
) -> ScrapeReport:
    """Собирает ScrapeReport; записи сортируются по URL для стабильного вывода."""
    return ScrapeReport(
        seed_url=seed_url,
        records=sorted(records, key=lambda r: r.url),
        discovered=discovered,
        failed_sitemaps=sorted(failed_sitemaps or []),
        failed_pages=sorted(failed_pages or []),
        duration=duration,
        timed_out=timed_out,
    )


__all__ = ["ScrapeReport", "aggregate_results"]
