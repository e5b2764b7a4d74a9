# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Dict, List, Union

import pytest
from aiohttp import web

from sitemap_scout.crawler.models import FetchedPage
from sitemap_scout.exceptions import FetchError

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


def urlset(*urls: str) -> str:
    """Build a <urlset> sitemap document."""
    body = "".join(f"<url><loc>{u}</loc></url>" for u in urls)
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="{SITEMAP_NS}">{body}</urlset>'


def sitemap_index(*urls: str) -> str:
    """Build a <sitemapindex> document."""
    body = "".join(f"<sitemap><loc>{u}</loc></sitemap>" for u in urls)
    return f'<?xml version="1.0" encoding="UTF-8"?><sitemapindex xmlns="{SITEMAP_NS}">{body}</sitemapindex>'


def html_page(title: str = "", h1: str = "", description: str | None = None) -> str:
    head = f"<title>{title}</title>" if title else ""
    if description is not None:
        head += f'<meta name="description" content="{description}">'
    body = f"<h1>{h1}</h1>" if h1 else "<p>no heading</p>"
    return f"<html><head>{head}</head><body>{body}</body></html>"


class FakeFetcher:
    """
    In-memory stand-in for :class:`~sitemap_scout.crawler.fetcher.Fetcher`.

    ``pages`` maps URL -> markup string, FetchedPage or an exception to raise.
    Unknown URLs raise FetchError. Tracks how many fetches run concurrently.
    """

    def __init__(self, pages: Dict[str, Union[str, FetchedPage, Exception]], delay: float = 0.0):
        self.pages = pages
        self.delay = delay
        self.calls: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, url: str) -> FetchedPage:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            item = self.pages.get(url)
            if item is None:
                raise FetchError(url, "connection refused")
            if isinstance(item, Exception):
                raise item
            if isinstance(item, FetchedPage):
                return item
            return FetchedPage(
                url=url,
                status=200,
                body=item.encode("utf-8"),
                headers={"Content-Type": "text/html; charset=utf-8"},
                requested_url=url,
            )
        finally:
            self.in_flight -= 1


@pytest.fixture()
def make_fetcher():
    """Factory fixture returning FakeFetcher instances."""
    return FakeFetcher


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()
