"""
Data models for the SitemapScout crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict


@dataclass(slots=True)
class FetchedPage:
    """Transport result of one GET: final URL, status, headers and raw body."""

    url: str
    status: int
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)
    requested_url: str = ""

    @property
    def charset(self) -> str | None:
        ctype = self.headers.get("Content-Type", "")
        for part in ctype.split(";")[1:]:
            key, _, value = part.strip().partition("=")
            if key.lower() == "charset" and value:
                return value.strip('"').strip()
        return None

    def text(self) -> str:
        try:
            return self.body.decode(self.charset or "utf-8", errors="replace")
        except LookupError:
            # unknown charset in Content-Type
            return self.body.decode("utf-8", errors="replace")


@dataclass(frozen=True, slots=True)
class SEORecord:
    """SEO metadata extracted from one successfully scraped page."""

    url: str
    title: str
    h1: str
    meta_description: str
    status_code: int

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)
