# === FILE: site_harvest/crawler/crawler.py ===
"""
Depth-first site crawler under a crawl-wide time budget.

Traversal is pre-order over the internal link graph: a page is recorded,
then each of its in-scope links is followed (with its whole subtree) before
the next sibling. Recursion is replaced by a stack of link iterators, so the
path length of a site does not touch Python's recursion limit.
"""
from __future__ import annotations

import time
from typing import Iterator, List, Optional, Sequence

from site_harvest.config import CrawlConfig
from site_harvest.crawler.context import CrawlContext
from site_harvest.crawler.deadline import Clock, Deadline
from site_harvest.crawler.extractor import Extractor, HtmlExtractor
from site_harvest.crawler.fetcher import PageFetcher
from site_harvest.crawler.models import PageRecord
from site_harvest.errors import ExtractError, FetchError
from site_harvest.logger import get_logger

__all__ = ("SiteCrawler",)


class SiteCrawler:
    """Visits every in-scope URL at most once, one fetch at a time."""

    def __init__(
        self,
        fetcher: PageFetcher,
        extractor: Optional[Extractor] = None,
        *,
        page_timeout: float = 60.0,
        wait_until: Sequence[str] = ("domcontentloaded", "networkidle"),
        wait_for_selector: Optional[str] = "body",
        clock: Clock = time.monotonic,
    ) -> None:
        self.fetcher = fetcher
        self.extractor = extractor or HtmlExtractor()
        self.page_timeout = page_timeout
        self.wait_until = tuple(wait_until)
        self.wait_for_selector = wait_for_selector
        self.clock = clock
        self.logger = get_logger("crawler")

    @classmethod
    def from_config(
        cls, fetcher: PageFetcher, config: CrawlConfig, extractor: Optional[Extractor] = None
    ) -> SiteCrawler:
        return cls(
            fetcher,
            extractor,
            page_timeout=config.page_timeout,
            wait_until=config.wait_until,
            wait_for_selector=config.wait_for_selector,
        )

    def new_context(self, seed_url: str, time_limit: float) -> CrawlContext:
        return CrawlContext(scope=seed_url, deadline=Deadline(time_limit, clock=self.clock))

    async def crawl(self, seed_url: str, time_limit: float) -> List[PageRecord]:
        """Crawl from *seed_url* for at most *time_limit* seconds; records in visit order."""
        context = self.new_context(seed_url, time_limit)
        await self.run(context)
        return context.results

    async def run(self, context: CrawlContext) -> CrawlContext:
        self.logger.info(
            "Старт обхода: %s (лимит %.0f с)", context.scope, context.deadline.budget
        )
        stack: List[Iterator[str]] = []
        links = await self._visit(context, context.scope)
        if links:
            stack.append(iter(links))

        while stack:
            link = next(stack[-1], None)
            if link is None:
                stack.pop()
                continue
            # an expired budget stops every pending sibling, not just this level
            if self._out_of_time(context):
                break
            if not context.in_scope(link):
                continue
            children = await self._visit(context, link)
            if children:
                stack.append(iter(children))

        elapsed = context.deadline.elapsed()
        self.logger.info(
            "Завершено: %d страниц за %.2f с (ошибок: %d)",
            len(context.results),
            elapsed,
            len(context.failed),
        )
        return context

    async def _visit(self, context: CrawlContext, url: str) -> Optional[Sequence[str]]:
        """Fetch and record *url*; return its links, or None if nothing to descend into."""
        if context.visited.has_visited(url):
            return None
        if self._out_of_time(context):
            return None
        # marked before the fetch so a page linking to itself is not re-entered
        context.visited.mark_visited(url)
        try:
            page = await self.fetcher.load(
                url,
                wait_until=self.wait_until,
                timeout=self.page_timeout,
                wait_for_selector=self.wait_for_selector,
            )
            content = self.extractor.extract(page)
        except (FetchError, ExtractError) as exc:
            context.failed.append(url)
            self.logger.warning("Failed %s: %s", url, exc)
            return None
        record = PageRecord.from_content(url, content)
        context.record(record)
        self.logger.debug("Scraped %s (%d links)", url, len(record.links))
        return record.links

    def _out_of_time(self, context: CrawlContext) -> bool:
        if not context.deadline.expired():
            return False
        if not context.deadline_hit:
            context.deadline_hit = True
            self.logger.info(
                "Time limit of %.0f seconds reached. Stopping crawl.", context.deadline.budget
            )
        return True
