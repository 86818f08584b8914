# site_harvest/crawler/context.py
"""
Per-crawl state threaded through every traversal step.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from site_harvest.crawler.deadline import Deadline
from site_harvest.crawler.models import PageRecord
from site_harvest.crawler.tracker import VisitTracker


@dataclass(slots=True)
class CrawlContext:
    """Owns the visited set, the result list and the deadline of one crawl.

    ``scope`` is the seed URL string exactly as given; a discovered link is
    followed only when it starts with it.
    """

    scope: str
    deadline: Deadline
    visited: VisitTracker = field(default_factory=VisitTracker)
    results: List[PageRecord] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    deadline_hit: bool = False

    def in_scope(self, link: str) -> bool:
        return link.startswith(self.scope)

    def record(self, page: PageRecord) -> None:
        self.results.append(page)
