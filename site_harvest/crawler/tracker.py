# site_harvest/crawler/tracker.py
"""
Visited-URL bookkeeping: every URL is traversed at most once per crawl.
"""
from __future__ import annotations

from typing import Iterator, List, Set


class VisitTracker:
    """Grow-only set of URLs already visited.

    URLs are compared as plain strings; no normalization happens here.
    The traversal runs on a single task, so check-then-mark needs no lock.
    """

    def __init__(self) -> None:
        self._seen: Set[str] = set()
        self._order: List[str] = []

    def has_visited(self, url: str) -> bool:
        return url in self._seen

    def mark_visited(self, url: str) -> None:
        """Record *url*; calling it again for the same URL is a no-op."""
        if url in self._seen:
            return
        self._seen.add(url)
        self._order.append(url)

    def __contains__(self, url: object) -> bool:
        return url in self._seen

    def __len__(self) -> int:
        return len(self._seen)

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)
