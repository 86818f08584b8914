# File: site_harvest/report/__init__.py
"""site_harvest.report: Запись результатов (JSON и HTML), используемая CLI и API."""

from __future__ import annotations

from site_harvest.report.html_report import page_rows, render_html
from site_harvest.report.json_report import (
    crawl_file_name,
    filtered_file_name,
    render_crawl,
    render_filtered,
    render_scrape,
    scrape_file_name,
    write_json,
)

__all__ = [
    "crawl_file_name",
    "filtered_file_name",
    "page_rows",
    "render_crawl",
    "render_filtered",
    "render_html",
    "render_scrape",
    "scrape_file_name",
    "write_json",
]
