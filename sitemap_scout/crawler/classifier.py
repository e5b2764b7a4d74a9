"""
Split discovered <loc> URLs into nested sitemaps and leaf pages.
"""
from __future__ import annotations

from typing import Iterable, List, Tuple

from sitemap_scout.logger import get_logger

__all__ = ("SITEMAP_MARKER", "is_sitemap_url", "classify")

SITEMAP_MARKER = "xml"

logger = get_logger("classifier")


def is_sitemap_url(url: str) -> bool:
    """
    Heuristic check: any URL containing the substring ``xml`` is a sitemap.

    This is not a content-type check, a page such as ``/blog/xml-tips`` lands
    in the sitemap bucket.
    """
    return SITEMAP_MARKER in url


def classify(urls: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Return ``(sitemap_urls, page_urls)``, keeping input order in both."""
    sitemaps: List[str] = []
    pages: List[str] = []
    for url in urls:
        if is_sitemap_url(url):
            logger.debug("Found sitemap %s", url)
            sitemaps.append(url)
        else:
            pages.append(url)
    return sitemaps, pages
