"""
Tests for the page fetcher (httpx MockTransport, no network).
"""

import httpx
import pytest

from recipe_ingest.core.exceptions import PageFetchError
from recipe_ingest.services.page_fetcher import PageFetcher


@pytest.mark.asyncio
async def test_fetch_returns_html():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["agent"] = request.headers.get("user-agent")
        return httpx.Response(200, text="<html>ok</html>")

    fetcher = PageFetcher(user_agent="test-agent", transport=httpx.MockTransport(handler))
    html = await fetcher.fetch("https://example.com/recept")

    assert html == "<html>ok</html>"
    assert seen == {"url": "https://example.com/recept", "agent": "test-agent"}


@pytest.mark.asyncio
async def test_fetch_through_proxy_template():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, text="proxied")

    fetcher = PageFetcher(
        proxy_template="https://proxy.example.org/raw?url={url}",
        transport=httpx.MockTransport(handler),
    )
    assert await fetcher.fetch("https://example.com/a b?x=1") == "proxied"
    assert seen["url"].host == "proxy.example.org"
    assert seen["url"].params["url"] == "https://example.com/a b?x=1"


def test_request_url_without_proxy():
    fetcher = PageFetcher(proxy_template="")
    assert fetcher.request_url("https://example.com/") == "https://example.com/"


@pytest.mark.asyncio
async def test_http_error_status_raises_page_fetch_error():
    fetcher = PageFetcher(transport=httpx.MockTransport(lambda request: httpx.Response(404)))

    with pytest.raises(PageFetchError) as exc_info:
        await fetcher.fetch("https://example.com/missing")
    assert exc_info.value.url == "https://example.com/missing"
    assert exc_info.value.detail == "HTTP 404"


@pytest.mark.asyncio
async def test_network_error_raises_page_fetch_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = PageFetcher(transport=httpx.MockTransport(handler))
    with pytest.raises(PageFetchError) as exc_info:
        await fetcher.fetch("https://example.com/")
    assert "connection refused" in exc_info.value.detail
