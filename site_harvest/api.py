"""HTTP API: POST /scrape, POST /crawl, GET /health."""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from site_harvest.config import CrawlConfig, ScrapeConfig, build_config
from site_harvest.crawler.fetcher import create_fetcher
from site_harvest.engine import FetcherFactory, start_crawl, start_scrape
from site_harvest.errors import InvalidInput
from site_harvest.logger import get_logger
from site_harvest.typed import WebsiteType

DEFAULT_LIMIT = 100

logger = get_logger("api")


class ScrapeRequest(BaseModel):
    url: Optional[str] = None
    websiteType: Optional[str] = None
    timeLimit: Optional[Union[int, str]] = None
    limit: Union[int, str] = DEFAULT_LIMIT
    offset: Union[int, str] = 0


class CrawlRequest(BaseModel):
    url: Optional[str] = None
    timeLimit: Optional[Union[int, str]] = None


def _error(status: int, error: str, details: Any = None) -> JSONResponse:
    body: Dict[str, Any] = {"error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status, content=body)


def _validation_details(exc: RequestValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}" for err in exc.errors()
    )


def create_app(
    settings: Optional[Dict[str, Any]] = None,
    fetcher_factory: FetcherFactory = create_fetcher,
) -> FastAPI:
    """Build the app; *settings* are config-file values applied under every request."""
    app = FastAPI(title="SiteHarvest")
    app.state.settings = dict(settings or {})
    app.state.fetcher_factory = fetcher_factory

    @app.exception_handler(RequestValidationError)
    async def _on_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, "Invalid request body.", _validation_details(exc))

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/scrape")
    async def scrape(body: ScrapeRequest, request: Request):
        if not body.url or not body.websiteType or not body.timeLimit:
            return _error(400, "url, websiteType, and timeLimit are required fields.")
        if body.websiteType.lower() not in WebsiteType.choices():
            return _error(
                400, f"Invalid websiteType. Supported types: {', '.join(WebsiteType.choices())}"
            )
        try:
            config = build_config(
                ScrapeConfig,
                request.app.state.settings,
                url=body.url,
                website_type=body.websiteType,
                time_limit=body.timeLimit,
                limit=body.limit,
                offset=body.offset,
            )
        except InvalidInput as exc:
            return _error(400, "Invalid input.", str(exc))

        try:
            return await start_scrape(config, fetcher_factory=request.app.state.fetcher_factory)
        except Exception as exc:
            logger.error("Scrape of %s failed: %s", config.url, exc)
            return _error(500, "An error occurred during scraping.", str(exc))

    @app.post("/crawl")
    async def crawl(body: CrawlRequest, request: Request):
        if not body.url or not body.timeLimit:
            return _error(400, "url and timeLimit are required fields.")
        try:
            config = build_config(
                CrawlConfig,
                request.app.state.settings,
                seed_url=body.url,
                time_limit=body.timeLimit,
            )
        except InvalidInput as exc:
            return _error(400, "Invalid input.", str(exc))

        try:
            report = await start_crawl(config, fetcher_factory=request.app.state.fetcher_factory)
        except Exception as exc:
            logger.error("Crawl of %s failed: %s", config.seed_url, exc)
            return _error(500, "An error occurred during crawling.", str(exc))
        return [page.to_dict() for page in report.pages]

    return app


app = create_app()
