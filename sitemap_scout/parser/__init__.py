"""sitemap_scout.parser: Адаптеры поверх lxml и BeautifulSoup."""

from sitemap_scout.parser.html_parser import DefaultParser, SEOParser, parse_html
from sitemap_scout.parser.sitemap_parser import extract_locs, parse_sitemap

__all__ = ["DefaultParser", "SEOParser", "parse_html", "extract_locs", "parse_sitemap"]
