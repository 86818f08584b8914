# File: tests/conftest.py
from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Union

import pytest

from site_harvest.crawler.models import LoadedPage
from site_harvest.errors import FetchError


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def page_html(links: Sequence[str] = (), images: Sequence[str] = (), text: str = "") -> str:
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in links)
    imgs = "".join(f'<img src="{src}">' for src in images)
    return f"<html><body><p>{text}</p>{anchors}{imgs}</body></html>"


PageSpec = Union[Sequence[str], str, Exception]


class StubFetcher:
    """
    In-memory PageFetcher over a fixed link graph.

    ``pages`` maps URL → list of hrefs, raw HTML string, or an exception to
    raise. Unknown URLs fail with FetchError. Every load advances ``clock`` by
    ``cost`` seconds, so deadlines can be driven deterministically.
    """

    def __init__(
        self,
        pages: Mapping[str, PageSpec],
        *,
        clock: Optional[FakeClock] = None,
        cost: float = 0.0,
    ) -> None:
        self.pages = dict(pages)
        self.clock = clock
        self.cost = cost
        self.calls: List[str] = []
        self.entered = False
        self.closed = False

    async def __aenter__(self) -> StubFetcher:
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.closed = True

    @property
    def counts(self) -> Counter:
        return Counter(self.calls)

    async def load(self, url, *, wait_until=("domcontentloaded",), timeout=60.0, wait_for_selector=None):
        self.calls.append(url)
        if self.clock is not None:
            self.clock.advance(self.cost)
        spec = self.pages.get(url)
        if spec is None:
            raise FetchError(url, "HTTP 404")
        if isinstance(spec, Exception):
            raise spec
        html = spec if isinstance(spec, str) else page_html(spec)
        return LoadedPage(url=url, final_url=url, html=html)


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def html_page():
    return page_html


@pytest.fixture()
def stub_fetcher_factory():
    """Return a factory building StubFetcher instances, usable as ``fetcher_factory``."""

    def factory(pages: Mapping[str, PageSpec], **kwargs) -> StubFetcher:
        return StubFetcher(pages, **kwargs)

    return factory


@pytest.fixture()
def config_file(tmp_path) -> Path:
    """
    Write a YAML config with shared browser options.
    """
    path = tmp_path / "harvest.yaml"
    path.write_text(
        f"fetcher: http\npage_timeout: 5\nuser_agent: TestAgent/1.0\noutput_dir: {tmp_path / 'out'}\n",
        encoding="utf-8",
    )
    return path
