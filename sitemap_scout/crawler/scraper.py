"""
Scrape phase: fetch every discovered page under a fixed concurrency cap.

A task holds a token from ``asyncio.Semaphore(concurrency)`` only for the
duration of its fetch; parsing happens after the token is returned.
"""
from __future__ import annotations

import asyncio
from typing import Iterable, List, Optional

from sitemap_scout.crawler.fetcher import Fetcher
from sitemap_scout.crawler.models import SEORecord
from sitemap_scout.crawler.worklist import WorklistPhase
from sitemap_scout.logger import get_logger
from sitemap_scout.parser.html_parser import SEOParser

__all__ = ("BoundedScraper",)

logger = get_logger("scraper")


class BoundedScraper(WorklistPhase):
    """Fetch pages with at most *concurrency* requests in flight and parse each one."""

    name = "scrape"

    def __init__(
        self,
        fetcher: Fetcher,
        parser: SEOParser,
        concurrency: int,
        *,
        phase_timeout: Optional[float] = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        super().__init__(phase_timeout=phase_timeout)
        self.fetcher = fetcher
        self.parser = parser
        self.concurrency = concurrency
        self.results: List[SEORecord] = []
        self._tokens = asyncio.Semaphore(concurrency)

    async def scrape(self, urls: Iterable[str]) -> List[SEORecord]:
        """Return one record per successfully scraped URL (order not guaranteed)."""
        self.results = []
        self._tokens = asyncio.Semaphore(self.concurrency)
        await self.run(urls)
        logger.info(
            "Scrape done: %d record(s), %d failure(s)", len(self.results), len(self.failed)
        )
        return list(self.results)

    async def process(self, url: str) -> List[str]:
        logger.info("Requesting URL: %s", url)
        async with self._tokens:
            page = await self.fetcher.fetch(url)
        self.results.append(self.parser.parse(page))
        return []
