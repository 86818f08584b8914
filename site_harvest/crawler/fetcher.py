# site_harvest/crawler/fetcher.py
"""
Fetcher module: loads pages either through a headless browser (one reused tab)
or through a plain HTTP session. Both raise FetchError on failure.
"""
from __future__ import annotations

import asyncio
from typing import Optional, Protocol, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from site_harvest.config import BrowserOptions
from site_harvest.crawler.models import LoadedPage
from site_harvest.errors import BrowserLaunchError, FetchError
from site_harvest.logger import get_logger

__all__ = ("PageFetcher", "BrowserFetcher", "HttpFetcher", "create_fetcher", "DEFAULT_HTTP_AGENT")

DEFAULT_HTTP_AGENT = "SiteHarvest/1.0"

_LOAD_STATES = ("load", "domcontentloaded", "networkidle")

log = get_logger("fetcher")


class PageFetcher(Protocol):
    async def load(
        self,
        url: str,
        *,
        wait_until: Sequence[str] = ("domcontentloaded",),
        timeout: float = 60.0,
        wait_for_selector: Optional[str] = None,
    ) -> LoadedPage: ...

    async def __aenter__(self) -> "PageFetcher": ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...


class BrowserFetcher:
    """Chromium via playwright; a single tab is reused for every load."""

    def __init__(
        self,
        *,
        headless: bool = True,
        args: Sequence[str] = (),
        user_data_dir: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.headless = headless
        self.args = list(args)
        self.user_data_dir = user_data_dir
        self.user_agent = user_agent
        self._playwright = None
        self._browser = None
        self._context = None
        self.page = None

    async def __aenter__(self) -> BrowserFetcher:
        try:
            self._playwright = await async_playwright().start()
            chromium = self._playwright.chromium
            if self.user_data_dir:
                self._context = await chromium.launch_persistent_context(
                    self.user_data_dir,
                    headless=self.headless,
                    args=self.args,
                    user_agent=self.user_agent,
                )
                pages = self._context.pages
                self.page = pages[0] if pages else await self._context.new_page()
            else:
                self._browser = await chromium.launch(headless=self.headless, args=self.args)
                self._context = await self._browser.new_context(user_agent=self.user_agent)
                self.page = await self._context.new_page()
        except PlaywrightError as exc:
            await self.close()
            raise BrowserLaunchError(f"browser failed to start: {exc}") from exc
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def load(
        self,
        url: str,
        *,
        wait_until: Sequence[str] = ("domcontentloaded",),
        timeout: float = 60.0,
        wait_for_selector: Optional[str] = None,
    ) -> LoadedPage:
        """Navigate the shared tab to *url* and wait for every requested condition."""
        if self.page is None:
            raise RuntimeError("Browser not started")
        try:
            return await asyncio.wait_for(
                self._navigate(url, list(wait_until) or ["load"], timeout, wait_for_selector),
                timeout=timeout,
            )
        except (PlaywrightTimeoutError, asyncio.TimeoutError) as exc:
            raise FetchError(url, f"timed out after {timeout:g}s", cause=exc) from exc
        except PlaywrightError as exc:
            reason = str(exc).splitlines()[0] if str(exc) else type(exc).__name__
            raise FetchError(url, reason, cause=exc) from exc

    async def _navigate(
        self, url: str, wait_until: list[str], timeout: float, wait_for_selector: Optional[str]
    ) -> LoadedPage:
        ms = timeout * 1000
        first, *rest = wait_until
        await self.page.goto(url, wait_until=first, timeout=ms)
        for state in rest:
            if state in _LOAD_STATES:
                await self.page.wait_for_load_state(state, timeout=ms)
        if wait_for_selector:
            await self.page.wait_for_selector(wait_for_selector, timeout=ms)
        html = await self.page.content()
        return LoadedPage(url=url, final_url=self.page.url, html=html)

    async def close(self) -> None:
        if self._context is not None:
            try:
                await self._context.close()
            except PlaywrightError as exc:
                log.warning("Error closing browser context: %s", exc)
        if self._browser is not None:
            try:
                await self._browser.close()
            except PlaywrightError as exc:
                log.warning("Error closing browser: %s", exc)
        if self._playwright is not None:
            await self._playwright.stop()
        self.page = self._context = self._browser = self._playwright = None


class HttpFetcher:
    """Plain HTTP GET through one aiohttp session; no JavaScript is executed."""

    def __init__(self, *, user_agent: Optional[str] = None, session: Optional[ClientSession] = None) -> None:
        self.user_agent = user_agent or DEFAULT_HTTP_AGENT
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> HttpFetcher:
        if self.session is None:
            self.session = ClientSession(
                headers={"User-Agent": self.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def load(
        self,
        url: str,
        *,
        wait_until: Sequence[str] = ("domcontentloaded",),
        timeout: float = 60.0,
        wait_for_selector: Optional[str] = None,
    ) -> LoadedPage:
        """GET *url*; wait conditions do not apply to static HTML and are ignored."""
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
                if resp.status >= 400:
                    raise FetchError(url, f"HTTP {resp.status}")
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if "html" not in mime:
                    raise FetchError(url, f"unsupported content type {mime or 'unknown'}")
                text = await resp.text(errors="replace")
                return LoadedPage(url=url, final_url=str(resp.url), html=text)
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"timed out after {timeout:g}s", cause=exc) from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__, cause=exc) from exc


def create_fetcher(options: BrowserOptions) -> PageFetcher:
    """Build the fetcher selected by ``options.fetcher`` (not yet entered)."""
    if options.fetcher == "http":
        return HttpFetcher(user_agent=options.user_agent)
    return BrowserFetcher(
        headless=options.headless,
        args=options.browser_args,
        user_data_dir=options.user_data_dir,
        user_agent=options.user_agent,
    )
