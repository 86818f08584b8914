"""
Small BeautifulSoup helpers shared by the typed extractors.
"""
from __future__ import annotations

from typing import Optional, Sequence
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4.element import Tag


def meta_content(soup: BeautifulSoup, name: str) -> Optional[str]:
    """``content`` of ``meta[name=…]``, ``meta[property=…]`` or ``meta[property=og:…]``."""
    tag = soup.select_one(
        f'meta[name="{name}"], meta[property="{name}"], meta[property="og:{name}"]'
    )
    if isinstance(tag, Tag):
        value = tag.get("content")
        if isinstance(value, str):
            return value
    return None


def attr(tag: Optional[Tag], name: str) -> Optional[str]:
    if tag is None:
        return None
    value = tag.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value


def text_of(tag: Optional[Tag]) -> Optional[str]:
    if tag is None:
        return None
    return tag.get_text(" ", strip=True)


def select_text(soup: BeautifulSoup, selector: str) -> Optional[str]:
    """Trimmed text of the first element matching *selector*, or None."""
    return text_of(soup.select_one(selector))


def first_match(soup: BeautifulSoup, selectors: Sequence[str]) -> Optional[Tag]:
    """First element matched by the earliest selector in *selectors* that matches anything."""
    for selector in selectors:
        tag = soup.select_one(selector)
        if tag is not None:
            return tag
    return None


def document_title(soup: BeautifulSoup) -> str:
    return soup.title.get_text(strip=True) if soup.title else ""


def hostname(url: str) -> str:
    return urlparse(url).hostname or ""
