# sitemap_scout/__init__.py
"""
SitemapScout package initializer.
Defines package version and exposes the crawl entry points.
"""
__version__ = "0.1.0"

from sitemap_scout.crawler.models import SEORecord
from sitemap_scout.engine import Engine, crawl_sitemap, scrape_sitemap
from sitemap_scout.parser.html_parser import DefaultParser, SEOParser

__all__ = [
    "__version__",
    "DefaultParser",
    "Engine",
    "SEOParser",
    "SEORecord",
    "crawl_sitemap",
    "scrape_sitemap",
]
