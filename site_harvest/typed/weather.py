"""
Weather page extraction.
"""
from __future__ import annotations

from typing import Any, Dict

from bs4 import BeautifulSoup

from site_harvest.typed.dom import hostname, select_text

SELECTORS: Dict[str, str] = {
    "temperature": ".temperature, .temp, [data-temp]",
    "condition": ".condition, .weather-condition, [data-condition]",
    "location": ".location, .city-name, [data-location]",
    "humidity": ".humidity, .humidity-level, [data-humidity]",
    "wind": ".wind, .wind-speed, [data-wind]",
}


def extract_weather(soup: BeautifulSoup, url: str) -> Dict[str, Any]:
    data: Dict[str, Any] = {field: select_text(soup, selector) for field, selector in SELECTORS.items()}
    data["source"] = hostname(url)
    data["url"] = url
    return data
