"""sitemap_scout.exceptions: Error taxonomy for a single crawl task."""

from __future__ import annotations

__all__ = ("ScoutError", "CrawlError", "FetchError", "ParseError", "ExtractionFailure")


class ScoutError(Exception):
    """Base class for all SitemapScout errors."""


class CrawlError(ScoutError):
    """A failure tied to one URL; handled inside the task that produced it."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"{url}: {reason}")


class FetchError(CrawlError):
    """Raised when an HTTP fetch fails due to timeout or network/transport errors."""


class ParseError(CrawlError):
    """Raised when a response body cannot be parsed as a document."""


class ExtractionFailure(CrawlError):
    """Raised when a sitemap body yields no document to read <loc> entries from."""
