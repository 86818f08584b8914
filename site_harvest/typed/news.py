"""
News article extraction.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from site_harvest.typed.dom import attr, document_title, first_match, hostname, meta_content

_DATE_SELECTORS = (
    'meta[property="article:published_time"]',
    'meta[name="publication-date"]',
    "time",
    ".date",
    "[datetime]",
)

_AUTHOR_SELECTORS = ('meta[name="author"]', ".author", ".byline", '[rel="author"]')


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def extract_date(soup: BeautifulSoup) -> str:
    """Publication date from the first matching selector, else the current UTC time."""
    tag = first_match(soup, _DATE_SELECTORS)
    if tag is None:
        return _now_iso()
    return attr(tag, "content") or attr(tag, "datetime") or tag.get_text()


def _main_image(soup: BeautifulSoup, url: str) -> Optional[str]:
    og_image = meta_content(soup, "og:image")
    if og_image:
        return og_image
    img = soup.select_one("article img, .main-content img")
    src = attr(img, "src")
    return urljoin(url, src) if src else None


def _author(soup: BeautifulSoup) -> str:
    tag = first_match(soup, _AUTHOR_SELECTORS)
    if tag is None:
        return "Unknown Author"
    return attr(tag, "content") or tag.get_text(strip=True)


def extract_article(soup: BeautifulSoup, url: str) -> Dict[str, Any]:
    paragraph = soup.find("p")
    html_tag = soup.find("html")
    return {
        "title": meta_content(soup, "title") or document_title(soup),
        "description": meta_content(soup, "description")
        or (paragraph.get_text()[:200] if paragraph is not None else None),
        "url": url,
        "source": hostname(url),
        "image": _main_image(soup, url),
        "author": _author(soup),
        "category": meta_content(soup, "category") or "general",
        "language": attr(html_tag, "lang") or "en",
        "country": "us",
        "published_at": extract_date(soup),
    }


__all__ = ["extract_article", "extract_date"]
