"""
Typed-site scraper: collect relevant links from one page, then read a page of them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from bs4 import BeautifulSoup

from site_harvest.config import ScrapeConfig
from site_harvest.crawler.fetcher import PageFetcher
from site_harvest.crawler.models import LoadedPage
from site_harvest.errors import ExtractError, FetchError
from site_harvest.logger import get_logger
from site_harvest.typed import WebsiteType
from site_harvest.typed.ecommerce import extract_product
from site_harvest.typed.links import relevant_links
from site_harvest.typed.news import extract_article
from site_harvest.typed.weather import extract_weather

__all__ = ("TypedResult", "TypedScraper", "EXTRACTORS", "extract_item")

ItemExtractor = Callable[[BeautifulSoup, str], Dict[str, Any]]

EXTRACTORS: Dict[WebsiteType, ItemExtractor] = {
    WebsiteType.NEWS: extract_article,
    WebsiteType.ECOMMERCE: extract_product,
    WebsiteType.WEATHER: extract_weather,
}

_WAIT_UNTIL = ("domcontentloaded",)


def extract_item(page: LoadedPage, website_type: WebsiteType) -> Dict[str, Any]:
    """Run the extractor for *website_type* over a loaded page."""
    try:
        soup = BeautifulSoup(page.html, "html.parser")
        return EXTRACTORS[website_type](soup, page.final_url or page.url)
    except Exception as exc:
        raise ExtractError(page.url, str(exc)) from exc


@dataclass(slots=True)
class TypedResult:
    website_type: WebsiteType
    limit: int
    offset: int
    total: int
    data: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "websiteType": self.website_type.value,
            "pagination": {
                "limit": self.limit,
                "offset": self.offset,
                "count": len(self.data),
                "total": self.total,
            },
            "data": list(self.data),
        }


class TypedScraper:
    """Reads news / e-commerce / weather records through one fetcher."""

    def __init__(self, fetcher: PageFetcher) -> None:
        self.fetcher = fetcher
        self.logger = get_logger("typed")

    async def scrape(self, config: ScrapeConfig) -> TypedResult:
        """A failure on the seed page propagates; failures on items are logged and skipped."""
        website_type = config.website_type
        self.logger.info("Scraping %s website: %s", website_type.value, config.url)
        seed = await self.fetcher.load(
            config.url, wait_until=_WAIT_UNTIL, timeout=float(config.time_limit)
        )
        links = relevant_links(seed.html, seed.final_url or seed.url, website_type)
        window = links[config.offset : config.offset + config.limit]
        self.logger.info("Found %d relevant links, reading %d", len(links), len(window))

        result = TypedResult(
            website_type=website_type,
            limit=config.limit,
            offset=config.offset,
            total=len(links),
        )
        for link in window:
            try:
                page = await self.fetcher.load(
                    link, wait_until=_WAIT_UNTIL, timeout=config.item_timeout
                )
                result.data.append(extract_item(page, website_type))
            except (FetchError, ExtractError) as exc:
                self.logger.error("Error scraping %s page %s: %s", website_type.value, link, exc)
        return result
