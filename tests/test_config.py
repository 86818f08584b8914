# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from site_harvest.config import (
    DEFAULT_BROWSER_ARGS,
    CrawlConfig,
    ScrapeConfig,
    build_config,
    load_config,
    read_config_file,
)
from site_harvest.errors import InvalidInput
from site_harvest.typed import WebsiteType


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,expect_exc",
    [
        ("seed_url: http://example.com\ntime_limit: 30", None),
        (json.dumps({"seed_url": "http://example.com", "time_limit": 30}), None),
        ("{}", ValidationError),
        ("not: a: mapping", ValueError),
        ("- just\n- a list", TypeError),
    ],
)
def test_load_config_variants(tmp_path, content, expect_exc):
    suffix = ".json" if content.strip().startswith("{") else ".yaml"
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, CrawlConfig)
        assert cfg.seed_url == "http://example.com"
        assert cfg.time_limit == 30


def test_load_config_default_missing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_config(None)


def test_read_config_file_default(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "configs").mkdir()
    (tmp_path / "configs" / "default.yaml").write_text("headless: false\n", encoding="utf-8")
    assert read_config_file(None) == {"headless": False}


def test_unsupported_suffix(tmp_path):
    with pytest.raises(ValueError):
        read_config_file(write_file(tmp_path, "seed_url = 1", ".toml"))


def test_crawl_config_defaults():
    cfg = CrawlConfig(seed_url="https://example.com/blog/", time_limit=5)
    # the seed is kept verbatim: it is the crawl's scope prefix
    assert cfg.seed_url == "https://example.com/blog/"
    assert cfg.page_timeout == 60.0
    assert cfg.wait_until == ["domcontentloaded", "networkidle"]
    assert cfg.wait_for_selector == "body"
    assert cfg.fetcher == "browser"
    assert cfg.browser_args == list(DEFAULT_BROWSER_ARGS)
    assert cfg.filter_all is False
    # no override: the browser keeps its own User-Agent
    assert cfg.user_agent is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"seed_url": "ftp://example.com", "time_limit": 5},
        {"seed_url": "example.com", "time_limit": 5},
        {"seed_url": "", "time_limit": 5},
        {"seed_url": "https://example.com", "time_limit": 0},
        {"seed_url": "https://example.com", "time_limit": -3},
        {"seed_url": "https://example.com", "time_limit": 5, "wait_until": ["sometime"]},
        {"seed_url": "https://example.com", "time_limit": 5, "unknown": 1},
    ],
)
def test_crawl_config_rejects_bad_input(overrides):
    with pytest.raises(ValidationError):
        CrawlConfig(**overrides)


def test_scrape_config_website_type_case_insensitive():
    cfg = ScrapeConfig(url="https://shop.test", website_type=" ECommerce ", time_limit=10)
    assert cfg.website_type is WebsiteType.ECOMMERCE
    assert (cfg.limit, cfg.offset, cfg.item_timeout) == (100, 0, 30.0)


def test_scrape_config_rejects_unknown_type():
    with pytest.raises(ValidationError):
        ScrapeConfig(url="https://shop.test", website_type="blog", time_limit=10)


def test_build_config_merges_and_filters_settings():
    settings = {"fetcher": "http", "page_timeout": 5, "limit": 3, "time_limit": 99}
    cfg = build_config(CrawlConfig, settings, seed_url="https://example.com", time_limit=7, headless=None)
    assert cfg.fetcher == "http"
    assert cfg.page_timeout == 5
    assert cfg.time_limit == 7
    assert cfg.headless is True

    scrape = build_config(ScrapeConfig, settings, url="https://example.com", website_type="news")
    assert scrape.limit == 3
    assert scrape.time_limit == 99


def test_build_config_raises_invalid_input():
    with pytest.raises(InvalidInput) as excinfo:
        build_config(CrawlConfig, {}, seed_url="nope", time_limit=0)
    message = str(excinfo.value)
    assert "seed_url" in message
    assert "time_limit" in message
