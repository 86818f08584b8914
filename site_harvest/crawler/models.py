# site_harvest/crawler/models.py
"""
Data models for the SiteHarvest crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True, slots=True)
class LoadedPage:
    """A page as returned by a fetcher: requested URL, URL after redirects, HTML."""

    url: str
    final_url: str
    html: str


@dataclass(frozen=True, slots=True)
class PageContent:
    """Raw extractor output for one page, links and images in discovery order."""

    links: Tuple[str, ...]
    images: Tuple[str, ...]
    text_content: str
    html_content: str


@dataclass(frozen=True, slots=True)
class PageRecord:
    """One successfully crawled page."""

    url: str
    links: Tuple[str, ...]
    images: Tuple[str, ...]
    text_content: str
    html_content: str

    @classmethod
    def from_content(cls, url: str, content: PageContent) -> PageRecord:
        return cls(
            url=url,
            links=tuple(content.links),
            images=tuple(content.images),
            text_content=content.text_content,
            html_content=content.html_content,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the key names used in the output files."""
        return {
            "url": self.url,
            "links": list(self.links),
            "images": list(self.images),
            "textContent": self.text_content,
            "htmlContent": self.html_content,
        }
