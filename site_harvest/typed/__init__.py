"""
site_harvest.typed: typed-site scraping (news, e-commerce and weather pages).
"""
from __future__ import annotations

from enum import Enum

__all__ = ["WebsiteType"]


class WebsiteType(str, Enum):
    """Kinds of sites the typed scraper knows how to read."""

    NEWS = "news"
    ECOMMERCE = "ecommerce"
    WEATHER = "weather"

    @classmethod
    def choices(cls) -> list[str]:
        return [member.value for member in cls]
