# File: sitemap_scout/engine.py
"""sitemap_scout.engine: Оркестрация двух фаз обхода (discovery -> scrape) и агрегация результатов."""

from __future__ import annotations

import asyncio
import time
from typing import List, Optional, Sequence

from aiohttp import ClientSession, TCPConnector

from sitemap_scout.aggregator import ScrapeReport, aggregate_results
from sitemap_scout.config import ScraperConfig, load_config
from sitemap_scout.crawler.discovery import SitemapDiscovery
from sitemap_scout.crawler.fetcher import DEFAULT_TIMEOUT, USER_AGENTS, Fetcher
from sitemap_scout.crawler.models import SEORecord
from sitemap_scout.crawler.scraper import BoundedScraper
from sitemap_scout.logger import logger
from sitemap_scout.parser.html_parser import DefaultParser, SEOParser

__all__ = ["Engine", "crawl_sitemap", "scrape_sitemap", "run_scan"]


async def crawl_sitemap(
    seed_url: str,
    parser: Optional[SEOParser] = None,
    concurrency: int = 10,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    phase_timeout: Optional[float] = None,
    dedupe_pages: bool = False,
    user_agents: Optional[Sequence[str]] = None,
) -> List[SEORecord]:
    """Находит все страницы sitemap-дерева и возвращает их SEO-записи.

    Ошибки отдельных URL логируются и не пробрасываются: при полном отказе
    сети результатом будет пустой список.
    """
    config = ScraperConfig(
        sitemap_url=seed_url,
        concurrency=concurrency,
        timeout=timeout,
        phase_timeout=phase_timeout,
        dedupe_pages=dedupe_pages,
        user_agents=list(user_agents or USER_AGENTS),
    )
    report = await Engine(config, parser=parser).run()
    return report.records


def scrape_sitemap(
    seed_url: str,
    parser: Optional[SEOParser] = None,
    concurrency: int = 10,
    **kwargs,
) -> List[SEORecord]:
    """Синхронная обёртка над :func:`crawl_sitemap`; возвращает управление после завершения обхода."""
    return asyncio.run(crawl_sitemap(seed_url, parser, concurrency, **kwargs))


class Engine:
    """Фасад для CLI и тестов: загрузка конфига, запуск обеих фаз и агрегация результатов."""

    @staticmethod
    def load_config(path: Optional[str]) -> ScraperConfig:
        """Загружает конфиг из YAML/JSON."""
        return load_config(path)

    def __init__(
        self,
        config: ScraperConfig,
        parser: Optional[SEOParser] = None,
        session: Optional[ClientSession] = None,
    ) -> None:
        """Инициализирует Engine; parser по умолчанию - DefaultParser."""
        self.config = config
        self.parser: SEOParser = parser if parser is not None else DefaultParser()
        self._session = session

    async def run(self) -> ScrapeReport:
        """Выполняет discovery и scrape в одной HTTP-сессии и возвращает отчёт."""
        if self._session is not None:
            return await self._run(self._session)
        # no pool cap: the semaphore bounds the scrape phase, discovery is unbounded
        async with ClientSession(connector=TCPConnector(limit=0)) as session:
            return await self._run(session)

    async def _run(self, session: ClientSession) -> ScrapeReport:
        seed = str(self.config.sitemap_url)
        logger.info("Starting crawl of %s (concurrency=%d)", seed, self.config.concurrency)
        start = time.monotonic()
        fetcher = Fetcher(session, timeout=self.config.timeout, user_agents=self.config.user_agents)

        discovery = SitemapDiscovery(
            fetcher,
            phase_timeout=self.config.phase_timeout,
            dedupe_pages=self.config.dedupe_pages,
        )
        pages = await discovery.discover(seed)

        scraper = BoundedScraper(
            fetcher,
            self.parser,
            self.config.concurrency,
            phase_timeout=self.config.phase_timeout,
        )
        records = await scraper.scrape(pages)

        duration = time.monotonic() - start
        logger.info(
            "Crawl finished: %d record(s) from %d page URL(s) in %.2f s",
            len(records), len(pages), duration,
        )
        return aggregate_results(
            seed,
            records,
            discovered=len(pages),
            failed_sitemaps=discovery.failed,
            failed_pages=scraper.failed,
            duration=duration,
            timed_out=discovery.timed_out or scraper.timed_out,
        )

    def start_scan(self) -> ScrapeReport:
        """Запускает обход синхронно и возвращает агрегированный отчёт."""
        return asyncio.run(self.run())


async def run_scan(config: ScraperConfig, parser: Optional[SEOParser] = None) -> ScrapeReport:
    """Точка входа для CLI: запускает Engine по конфигурации."""
    return await Engine(config, parser=parser).run()
