"""HTTP API tests."""

import pytest
from fastapi.testclient import TestClient

from site_harvest.api import create_app

NEWS_HOME = "https://news.test/"
SITE = "https://site.test/"


@pytest.fixture()
def fetchers():
    return []


@pytest.fixture()
def client(stub_fetcher_factory, fetchers) -> TestClient:
    pages = {
        NEWS_HOME: ["/news/1", "/news/2", "/contact"],
        f"{NEWS_HOME}news/1": "<html><head><title>One</title></head></html>",
        f"{NEWS_HOME}news/2": "<html><head><title>Two</title></head></html>",
        SITE: ["/a", "https://elsewhere.test/"],
        f"{SITE}a": ["/"],
    }

    def factory(options):
        fetcher = stub_fetcher_factory(pages)
        fetchers.append(fetcher)
        return fetcher

    return TestClient(create_app({"fetcher": "http"}, fetcher_factory=factory))


class TestScrapeEndpoint:
    def test_success(self, client: TestClient, fetchers) -> None:
        resp = client.post(
            "/scrape",
            json={"url": NEWS_HOME, "websiteType": "News", "timeLimit": 10, "limit": 1, "offset": 1},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["websiteType"] == "news"
        assert body["pagination"] == {"limit": 1, "offset": 1, "count": 1, "total": 2}
        assert body["data"][0]["title"] == "Two"
        assert fetchers[0].closed

    def test_string_numbers_accepted(self, client: TestClient) -> None:
        resp = client.post(
            "/scrape", json={"url": NEWS_HOME, "websiteType": "news", "timeLimit": "10", "limit": "5"}
        )
        assert resp.status_code == 200
        assert resp.json()["pagination"]["limit"] == 5

    @pytest.mark.parametrize(
        "body",
        [
            {"websiteType": "news", "timeLimit": 10},
            {"url": NEWS_HOME, "timeLimit": 10},
            {"url": NEWS_HOME, "websiteType": "news"},
            {"url": NEWS_HOME, "websiteType": "news", "timeLimit": 0},
        ],
    )
    def test_missing_fields(self, client: TestClient, body) -> None:
        resp = client.post("/scrape", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "url, websiteType, and timeLimit are required fields."}

    def test_invalid_website_type(self, client: TestClient) -> None:
        resp = client.post("/scrape", json={"url": NEWS_HOME, "websiteType": "blog", "timeLimit": 10})
        assert resp.status_code == 400
        assert "Supported types: news, ecommerce, weather" in resp.json()["error"]

    def test_invalid_values(self, client: TestClient) -> None:
        resp = client.post(
            "/scrape", json={"url": "not-a-url", "websiteType": "news", "timeLimit": 10, "offset": -1}
        )
        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "Invalid input."
        assert "url" in body["details"]
        assert "offset" in body["details"]

    def test_malformed_body(self, client: TestClient) -> None:
        resp = client.post("/scrape", content=b"{not json", headers={"Content-Type": "application/json"})
        assert resp.status_code == 400
        assert "error" in resp.json()
        assert "details" in resp.json()

    def test_seed_failure_is_500(self, client: TestClient) -> None:
        resp = client.post(
            "/scrape", json={"url": "https://unknown.test/", "websiteType": "news", "timeLimit": 10}
        )
        assert resp.status_code == 500
        body = resp.json()
        assert body["error"] == "An error occurred during scraping."
        assert "HTTP 404" in body["details"]


class TestCrawlEndpoint:
    def test_success(self, client: TestClient) -> None:
        resp = client.post("/crawl", json={"url": SITE, "timeLimit": 10})
        assert resp.status_code == 200
        records = resp.json()
        assert [r["url"] for r in records] == [SITE, f"{SITE}a"]
        assert set(records[0]) == {"url", "links", "images", "textContent", "htmlContent"}

    def test_missing_fields(self, client: TestClient) -> None:
        resp = client.post("/crawl", json={"url": SITE})
        assert resp.status_code == 400

    def test_invalid_url(self, client: TestClient) -> None:
        resp = client.post("/crawl", json={"url": "mailto:x@y", "timeLimit": 10})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid input."


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
