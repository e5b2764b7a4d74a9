# File: sitemap_scout/parser/sitemap_parser.py
"""sitemap_scout.parser.sitemap_parser: Извлечение URL из тегов <loc> sitemap и sitemap index."""

from __future__ import annotations

import gzip
from typing import List, Union

from lxml import etree

from sitemap_scout.crawler.models import FetchedPage
from sitemap_scout.exceptions import ExtractionFailure

_GZIP_MAGIC = b"\x1f\x8b"


def _maybe_decompress(body: bytes, url: str) -> bytes:
    """Распаковывает .xml.gz, если тело начинается с gzip-сигнатуры."""
    if not body.startswith(_GZIP_MAGIC):
        return body
    try:
        return gzip.decompress(body)
    except (OSError, EOFError) as exc:
        raise ExtractionFailure(url, f"broken gzip stream: {exc}") from exc


def parse_sitemap(xml_content: Union[str, bytes], url: str = "") -> List[str]:
    """Разбирает XML content sitemap и возвращает список URL из тегов <loc>.

    Args:
        xml_content: содержимое sitemap.xml (строка или байты, возможно gzip).
        url: адрес документа, используется только в сообщениях об ошибках.

    Returns:
        Список URL, найденных в <loc> тегах, в порядке документа.

    Raises:
        ExtractionFailure: тело пустое или не является XML/HTML-документом.

    Пример:
    ```python
    from sitemap_scout.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', 'rb') as f:
        urls = parse_sitemap(f.read())
    print(urls)
    ```
    """
    raw = xml_content.encode("utf-8") if isinstance(xml_content, str) else xml_content
    raw = _maybe_decompress(raw, url)
    if not raw.strip():
        raise ExtractionFailure(url, "empty document")

    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(raw, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise ExtractionFailure(url, f"not an XML document: {exc}") from exc
    if root is None:
        raise ExtractionFailure(url, "not an XML document")

    locs = root.iter("{*}loc")
    return [loc.text.strip() for loc in locs if loc.text and loc.text.strip()]


def extract_locs(page: FetchedPage) -> List[str]:
    """Возвращает вложенные URL (<loc>) из загруженного sitemap."""
    return parse_sitemap(page.body, url=page.url)
