# site_harvest/crawler/extractor.py
"""
Link, image and text extraction from loaded pages.
"""
from __future__ import annotations

from typing import List, Protocol
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_harvest.crawler.models import LoadedPage, PageContent
from site_harvest.errors import ExtractError
from site_harvest.logger import get_logger

__all__ = ("Extractor", "HtmlExtractor", "document_base", "resolve_attr")

_INVISIBLE = ("script", "style", "noscript", "template")

log = get_logger("extractor")


class Extractor(Protocol):
    def extract(self, page: LoadedPage) -> PageContent: ...


def document_base(soup: BeautifulSoup, page_url: str) -> str:
    """Base URL for relative references: ``<base href>`` if present, else the page URL."""
    base = soup.find("base", href=True)
    if isinstance(base, Tag):
        href = base.get("href")
        if isinstance(href, str) and href.strip():
            try:
                return urljoin(page_url, href.strip())
            except ValueError as exc:
                log.debug("Ignoring malformed <base href> %r on %s: %s", href, page_url, exc)
    return page_url


def resolve_attr(soup: BeautifulSoup, base: str, tag_name: str, attr: str) -> List[str]:
    """Resolve ``attr`` of every ``tag_name`` against *base*, in document order.

    A value ``urljoin`` cannot parse (e.g. ``http://[broken``) is skipped.
    """
    urls: List[str] = []
    for tag in soup.find_all(tag_name):
        if not isinstance(tag, Tag):
            continue
        value = tag.get(attr)
        if not isinstance(value, str):
            continue
        try:
            resolved = urljoin(base, value.strip())
        except ValueError as exc:
            log.debug("Skipping malformed %s=%r: %s", attr, value, exc)
            continue
        if resolved:
            urls.append(resolved)
    return urls


class HtmlExtractor:
    """
    Pull links, images and visible text out of a page's HTML.

    Links and images are absolute, in discovery order, duplicates kept;
    de-duplication is the aggregator's job.
    """

    def __init__(self, parser: str = "html.parser") -> None:
        self.parser = parser

    def extract(self, page: LoadedPage) -> PageContent:
        try:
            soup = BeautifulSoup(page.html, self.parser)
            base = document_base(soup, page.final_url or page.url)
            links = resolve_attr(soup, base, "a", "href")
            images = resolve_attr(soup, base, "img", "src")
            text = self._visible_text(soup)
        except Exception as exc:
            raise ExtractError(page.url, str(exc)) from exc
        return PageContent(
            links=tuple(links),
            images=tuple(images),
            text_content=text,
            html_content=page.html,
        )

    @staticmethod
    def _visible_text(soup: BeautifulSoup) -> str:
        for element in soup(list(_INVISIBLE)):
            element.decompose()
        root = soup.body if soup.body is not None else soup
        return root.get_text("\n", strip=True)
