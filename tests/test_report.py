import json

import pytest

from site_harvest.aggregator import CrawlReport
from site_harvest.crawler.models import PageRecord
from site_harvest.report import (
    crawl_file_name,
    filtered_file_name,
    page_rows,
    render_crawl,
    render_filtered,
    render_html,
    render_scrape,
    scrape_file_name,
)


@pytest.mark.parametrize(
    "seed,expected",
    [
        ("https://example.com", "example.com.json"),
        ("http://example.com/blog/", "example.com_blog_.json"),
        ("https://example.com/a/b?q=1", "example.com_a_b?q=1.json"),
    ],
)
def test_crawl_file_name(seed, expected):
    assert crawl_file_name(seed) == expected
    assert filtered_file_name(seed) == "filtered_" + expected


def test_scrape_file_name():
    assert scrape_file_name("ecommerce", 20, 10) == "scraped_ecommerce_20_10.json"


def test_render_crawl_and_filtered(tmp_path):
    records = [
        PageRecord(url="https://example.com", links=("https://example.com/ü",), images=(), text_content="t", html_content="h"),
    ]
    raw = render_crawl(records, "https://example.com", tmp_path / "nested")
    assert raw == tmp_path / "nested" / "example.com.json"
    text = raw.read_text(encoding="utf-8")
    assert "ü" in text
    assert json.loads(text)[0]["links"] == ["https://example.com/ü"]

    single = render_filtered(records, "https://example.com", tmp_path)
    assert json.loads(single.read_text(encoding="utf-8"))["url"] == "https://example.com"


def test_render_scrape(tmp_path):
    result = {"websiteType": "weather", "pagination": {"limit": 3, "offset": 0, "count": 0, "total": 0}, "data": []}
    path = render_scrape(result, tmp_path)
    assert path.name == "scraped_weather_0_3.json"
    assert json.loads(path.read_text(encoding="utf-8")) == result


def test_render_html_escapes_content(tmp_path):
    report = CrawlReport(
        seed_url="https://example.com/?a=<b>",
        pages=[PageRecord(url="https://example.com/", links=(), images=(), text_content="", html_content="")],
        failed=["https://example.com/broken"],
        visited=2,
        elapsed=1.234,
        deadline_hit=True,
    )
    out = render_html(report, tmp_path / "report.html")
    html = out.read_text(encoding="utf-8")
    assert "&lt;b&gt;" in html
    assert "time limit reached" in html
    assert "https://example.com/broken" in html


def test_page_rows_counts_in_scope_links():
    report = CrawlReport(
        seed_url="https://example.com/docs",
        pages=[
            PageRecord(
                url="https://example.com/docs",
                links=(
                    "https://example.com/docs/a",
                    "https://example.com/docs/a",
                    "https://example.com/blog",
                    "https://other.test/",
                ),
                images=("https://example.com/logo.png",),
                text_content="hello",
                html_content="",
            )
        ],
    )
    assert page_rows(report) == [
        {"url": "https://example.com/docs", "links": 4, "internal": 1, "images": 1, "text_chars": 5}
    ]
