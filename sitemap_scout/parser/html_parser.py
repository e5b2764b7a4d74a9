"""HTML parsing for SitemapScout: the pluggable SEO extraction capability.

A crawl run is configured with exactly one object implementing
:class:`SEOParser`. It receives every page fetched during the scrape phase
and turns it into an :class:`~sitemap_scout.crawler.models.SEORecord`, or
raises :class:`~sitemap_scout.exceptions.ParseError`.

:class:`DefaultParser` reads:

* title - text of the first ``<title>``;
* h1 - text of the first ``<h1>``;
* meta description - ``content`` of the first ``<meta name^="description">``.

Missing elements are not errors; the field is left as ``""``.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Protocol, runtime_checkable

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from sitemap_scout.crawler.models import FetchedPage, SEORecord
from sitemap_scout.exceptions import ParseError

__all__: Sequence[str] = ("SEOParser", "DefaultParser", "parse_html")

META_DESCRIPTION_SELECTOR = 'meta[name^="description"]'


@runtime_checkable
class SEOParser(Protocol):
    """Strategy turning a fetched page into an SEO record."""

    def parse(self, page: FetchedPage) -> SEORecord:
        ...


def parse_html(page: FetchedPage, features: str = "html.parser") -> BeautifulSoup:
    """Load *page* body into a BeautifulSoup tree or raise ParseError."""
    try:
        return BeautifulSoup(page.body, features, from_encoding=page.charset)
    except (ParserRejectedMarkup, ValueError, TypeError) as exc:
        raise ParseError(page.url, f"cannot parse document: {exc}") from exc


def _first_text(soup: BeautifulSoup, name: str) -> str:
    tag = soup.find(name)
    return " ".join(tag.get_text().split()) if isinstance(tag, Tag) else ""


def _meta_description(soup: BeautifulSoup) -> str:
    tag: Optional[Tag] = soup.select_one(META_DESCRIPTION_SELECTOR)
    if tag is None:
        return ""
    content = tag.get("content")
    if isinstance(content, list):
        content = " ".join(content)
    return (content or "").strip()


class DefaultParser:
    """Title / first H1 / meta description extractor built on BeautifulSoup."""

    def __init__(self, features: str = "html.parser") -> None:
        self.features = features

    def parse(self, page: FetchedPage) -> SEORecord:
        soup = parse_html(page, self.features)
        return SEORecord(
            url=page.url,
            title=_first_text(soup, "title"),
            h1=_first_text(soup, "h1"),
            meta_description=_meta_description(soup),
            status_code=page.status,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(features={self.features!r})"
