"""
E-commerce product extraction.
"""
from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from site_harvest.typed.dom import (
    attr,
    document_title,
    first_match,
    hostname,
    meta_content,
    select_text,
)

_PRICE_SELECTORS = ("[data-price]", ".price", ".product-price", '[itemprop="price"]', ".sale-price")
_NOT_PRICE = re.compile(r"[^0-9.]")


def _price(soup: BeautifulSoup) -> Optional[str]:
    tag = first_match(soup, _PRICE_SELECTORS)
    if tag is None:
        return None
    raw = attr(tag, "data-price") or attr(tag, "content") or tag.get_text()
    return _NOT_PRICE.sub("", raw)


def _images(soup: BeautifulSoup) -> List[Optional[str]]:
    images = []
    for img in soup.select(".product-image img, .gallery img, [data-image]"):
        src = attr(img, "data-src") or attr(img, "src")
        if src:
            images.append(src)
    return images or [meta_content(soup, "og:image")]


def _variants(soup: BeautifulSoup) -> List[Dict[str, Optional[str]]]:
    return [
        {
            "name": attr(tag, "data-variant-name") or tag.get_text(strip=True),
            "value": attr(tag, "data-variant-value"),
            "price": attr(tag, "data-variant-price"),
        }
        for tag in soup.select("[data-variant], .variant-option, .product-variant")
    ]


def extract_product(soup: BeautifulSoup, url: str) -> Dict[str, Any]:
    return {
        "title": meta_content(soup, "title") or document_title(soup),
        "description": meta_content(soup, "description") or select_text(soup, ".product-description"),
        "url": url,
        "store": hostname(url),
        "price": _price(soup),
        "currency": attr(soup.select_one('[itemprop="priceCurrency"]'), "content") or "USD",
        "images": _images(soup),
        "brand": meta_content(soup, "brand") or select_text(soup, '[itemprop="brand"]'),
        "sku": select_text(soup, '[itemprop="sku"]'),
        "availability": attr(soup.select_one('[itemprop="availability"]'), "content") or "in stock",
        "variants": _variants(soup),
        "category": select_text(soup, '[itemprop="category"]') or select_text(soup, ".breadcrumb"),
        "rating": select_text(soup, '[itemprop="ratingValue"]'),
        "reviewCount": select_text(soup, '[itemprop="reviewCount"]'),
    }
