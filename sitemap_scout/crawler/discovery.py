"""
Discovery phase: walk the sitemap-index tree and collect leaf page URLs.

Fan-out is unbounded: every nested sitemap found is fetched by its own task
as soon as its batch reaches the phase loop. Sitemap trees are shallow and
narrow compared to the page count, which is bounded in the scrape phase.
"""
from __future__ import annotations

from typing import List, Optional, Set

from sitemap_scout.crawler.classifier import classify
from sitemap_scout.crawler.fetcher import Fetcher
from sitemap_scout.crawler.worklist import WorklistPhase
from sitemap_scout.logger import get_logger
from sitemap_scout.parser.sitemap_parser import extract_locs
from sitemap_scout.utils import normalize_url, remove_duplicates

__all__ = ("SitemapDiscovery",)

logger = get_logger("discovery")


class SitemapDiscovery(WorklistPhase):
    """Breadth-first expansion of a sitemap tree into a flat page list."""

    name = "discovery"

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        phase_timeout: Optional[float] = None,
        dedupe_pages: bool = False,
    ) -> None:
        super().__init__(phase_timeout=phase_timeout)
        self.fetcher = fetcher
        self.dedupe_pages = dedupe_pages
        self.pages: List[str] = []
        self.sitemaps: List[str] = []
        self._visited: Set[str] = set()

    async def discover(self, seed_url: str) -> List[str]:
        """Return every page URL reachable from *seed_url* (order not guaranteed)."""
        self.pages = []
        self.sitemaps = []
        self._visited = set()
        logger.info("Discovering pages from %s", seed_url)
        await self.run([seed_url])
        pages = remove_duplicates(self.pages) if self.dedupe_pages else list(self.pages)
        logger.info(
            "Discovery done: %d sitemap(s) fetched, %d page URL(s), %d failure(s)",
            len(self.sitemaps), len(pages), len(self.failed),
        )
        return pages

    def accept(self, url: str) -> bool:
        if not url:
            return False
        key = normalize_url(url)
        if key in self._visited:
            logger.debug("Skipping already visited sitemap %s", url)
            return False
        self._visited.add(key)
        return True

    async def process(self, url: str) -> List[str]:
        page = await self.fetcher.fetch(url)
        nested, pages = classify(extract_locs(page))
        self.sitemaps.append(url)
        self.pages.extend(pages)
        logger.debug("%s: %d nested sitemap(s), %d page(s)", url, len(nested), len(pages))
        return nested
