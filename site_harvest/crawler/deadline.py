# site_harvest/crawler/deadline.py
"""
Crawl-wide wall-clock budget, checked cooperatively between fetches.
"""
from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], float]


class Deadline:
    """Absolute instant ``start + budget`` on a monotonic clock.

    Expiry is only observed at checkpoints; an in-flight fetch is never
    interrupted by it.
    """

    __slots__ = ("budget", "started_at", "expires_at", "_clock")

    def __init__(self, budget: float, *, clock: Clock = time.monotonic) -> None:
        if budget < 0:
            raise ValueError("budget must be >= 0")
        self._clock = clock
        self.budget = float(budget)
        self.started_at = clock()
        self.expires_at = self.started_at + self.budget

    def remaining(self) -> float:
        """Seconds left, never negative."""
        return max(0.0, self.expires_at - self._clock())

    def elapsed(self) -> float:
        return self._clock() - self.started_at

    def expired(self) -> bool:
        return self._clock() >= self.expires_at

    def __repr__(self) -> str:
        return f"Deadline(budget={self.budget:.1f}s, remaining={self.remaining():.1f}s)"
