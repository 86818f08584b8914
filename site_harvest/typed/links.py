"""
Relevant-link selection for typed scraping.
"""
from __future__ import annotations

import re
from typing import Dict, List, Pattern, Tuple

from bs4 import BeautifulSoup

from site_harvest.aggregator import dedupe
from site_harvest.crawler.extractor import document_base, resolve_attr
from site_harvest.typed import WebsiteType

_Rule = Tuple[Tuple[str, ...], Tuple[Pattern[str], ...]]

_RULES: Dict[WebsiteType, _Rule] = {
    WebsiteType.NEWS: (
        ("/article/", "/story/", "/news/"),
        (re.compile(r"\d{4}/\d{2}/\d{2}"),),
    ),
    WebsiteType.ECOMMERCE: (
        ("/product/", "/item/", "/p/"),
        (re.compile(r"product-detail"), re.compile(r"/dp/[A-Z0-9]+")),
    ),
    WebsiteType.WEATHER: (
        ("/weather/", "/forecast/"),
        (re.compile(r"current-weather"),),
    ),
}


def is_relevant(href: str, website_type: WebsiteType) -> bool:
    fragments, patterns = _RULES[website_type]
    return any(f in href for f in fragments) or any(p.search(href) for p in patterns)


def relevant_links(html: str, page_url: str, website_type: WebsiteType) -> List[str]:
    """Absolute ``<a href>`` targets of *html* matching *website_type*, first occurrence kept."""
    soup = BeautifulSoup(html, "html.parser")
    links = resolve_attr(soup, document_base(soup, page_url), "a", "href")
    return dedupe(href for href in links if is_relevant(href, website_type))
