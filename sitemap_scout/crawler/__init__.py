"""sitemap_scout.crawler: Two-phase concurrent crawl over a sitemap tree."""

from sitemap_scout.crawler.classifier import classify, is_sitemap_url
from sitemap_scout.crawler.discovery import SitemapDiscovery
from sitemap_scout.crawler.fetcher import DEFAULT_TIMEOUT, USER_AGENTS, Fetcher
from sitemap_scout.crawler.models import FetchedPage, SEORecord
from sitemap_scout.crawler.scraper import BoundedScraper
from sitemap_scout.crawler.worklist import PendingCounter, WorklistPhase

__all__ = [
    "BoundedScraper",
    "DEFAULT_TIMEOUT",
    "FetchedPage",
    "Fetcher",
    "PendingCounter",
    "SEORecord",
    "SitemapDiscovery",
    "USER_AGENTS",
    "WorklistPhase",
    "classify",
    "is_sitemap_url",
]
