# File: site_harvest/errors.py
"""site_harvest.errors: Exception hierarchy shared by the crawler, CLI and API."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "HarvestError",
    "InvalidInput",
    "FetchError",
    "ExtractError",
    "BrowserLaunchError",
]


class HarvestError(Exception):
    """Base class for all SiteHarvest errors."""


class InvalidInput(HarvestError, ValueError):
    """Rejected user input (URL, time limit, website type, pagination)."""


class FetchError(HarvestError):
    """A single page could not be loaded (navigation error or per-page timeout)."""

    def __init__(self, url: str, reason: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"failed to load {url}: {reason}")
        self.url = url
        self.reason = reason
        self.__cause__ = cause


class ExtractError(HarvestError):
    """Data could not be extracted from a loaded page."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"failed to extract {url}: {reason}")
        self.url = url
        self.reason = reason


class BrowserLaunchError(HarvestError):
    """The browser (or HTTP session) could not be started; fatal for the run."""
