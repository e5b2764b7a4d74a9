"""sitemap_scout.utils: Утилитарные функции для обработки URL."""

from __future__ import annotations

import posixpath
from typing import Collection, List, Sequence
from urllib.parse import parse_qsl, quote, unquote, urlencode, urlparse, urlunparse

from sitemap_scout.logger import logger

__all__: Sequence[str] = (
    "normalize_url",
    "is_valid_url",
    "remove_duplicates",
)


def normalize_url(url: str) -> str:
    """Нормализует URL для сравнения: регистр схемы и хоста, путь, сортировка query, без фрагмента."""
    parsed = urlparse(url.strip())
    scheme = parsed.scheme.lower()
    netloc = parsed.netloc.lower()
    path = unquote(parsed.path or "/")
    norm = posixpath.normpath(path)
    if path.endswith("/") and not norm.endswith("/"):
        norm += "/"
    if not norm.startswith("/"):
        norm = "/" + norm
    norm = quote(norm, safe="/")
    qs = parse_qsl(parsed.query, keep_blank_values=True)
    qs.sort()
    normalized = urlunparse((scheme, netloc, norm, "", urlencode(qs, doseq=True), ""))
    logger.debug("Normalized URL: %s -> %s", url, normalized)
    return normalized


def is_valid_url(url: str) -> bool:
    """Проверяет, что URL абсолютный и использует http(s)."""
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def remove_duplicates(urls: Collection[str]) -> List[str]:
    """Удаляет дубликаты из списка URL, сохраняя порядок."""
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique
