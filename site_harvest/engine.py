# File: site_harvest/engine.py
"""site_harvest.engine: Orchestration layer для запуска обхода и типизированного парсинга."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from site_harvest.aggregator import CrawlReport, aggregate_results, filter_results
from site_harvest.config import BrowserOptions, CrawlConfig, ScrapeConfig
from site_harvest.crawler.crawler import SiteCrawler
from site_harvest.crawler.fetcher import PageFetcher, create_fetcher
from site_harvest.logger import get_logger
from site_harvest.report.json_report import render_crawl, render_filtered, render_scrape
from site_harvest.typed.scraper import TypedScraper

__all__ = ["CrawlOutputs", "start_crawl", "start_scrape", "save_crawl", "save_scrape"]

logger = get_logger("engine")

FetcherFactory = Callable[[BrowserOptions], PageFetcher]


@dataclass(frozen=True, slots=True)
class CrawlOutputs:
    raw: Path
    filtered: Optional[Path]


async def start_crawl(
    config: CrawlConfig, *, fetcher_factory: FetcherFactory = create_fetcher
) -> CrawlReport:
    """
    Запускает обход сайта и возвращает CrawlReport.

    Ошибка запуска браузера (BrowserLaunchError) не перехватывается: без
    браузера не загрузить ни одной страницы.
    """
    async with fetcher_factory(config) as fetcher:
        crawler = SiteCrawler.from_config(fetcher, config)
        context = crawler.new_context(config.seed_url, config.time_limit)
        await crawler.run(context)
    return aggregate_results(context)


async def start_scrape(
    config: ScrapeConfig, *, fetcher_factory: FetcherFactory = create_fetcher
) -> Dict[str, Any]:
    """Запускает типизированный парсинг и возвращает итоговый JSON-объект."""
    async with fetcher_factory(config) as fetcher:
        result = await TypedScraper(fetcher).scrape(config)
    return result.to_dict()


def save_crawl(report: CrawlReport, config: CrawlConfig) -> CrawlOutputs:
    """Сохраняет сырые записи и результат фильтрации в config.output_dir."""
    raw = render_crawl(report.pages, config.seed_url, config.output_dir)
    logger.info("Data saved as %s", raw)
    if not report.pages:
        logger.warning("No pages were scraped; filtered output skipped")
        return CrawlOutputs(raw=raw, filtered=None)
    filtered_records = filter_results(report.pages, first_only=not config.filter_all)
    filtered = render_filtered(filtered_records, config.seed_url, config.output_dir)
    logger.info("Filtered data saved as %s", filtered)
    return CrawlOutputs(raw=raw, filtered=filtered)


def save_scrape(result: Dict[str, Any], config: ScrapeConfig) -> Path:
    path = render_scrape(result, config.output_dir)
    logger.info("Data saved to %s", path)
    return path
