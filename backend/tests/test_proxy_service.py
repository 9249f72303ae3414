"""Tests for the server-side fetch proxy."""

from __future__ import annotations

import httpx
import pytest

from app.config import settings
from app.services.proxy_service import fetch_url
from app.utils.exceptions import FetchProxyError


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestFetchUrl:
    @pytest.mark.asyncio
    async def test_success_sends_user_agent(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["ua"] = request.headers["user-agent"]
            return httpx.Response(200, text="<html>listing</html>", headers={"content-type": "text/html; charset=utf-8"})

        async with _client(handler) as client:
            page = await fetch_url("https://example.com/home", http_client=client)

        assert page.text == "<html>listing</html>"
        assert page.content_type.startswith("text/html")
        assert seen["ua"] == settings.fetch_user_agent

    @pytest.mark.asyncio
    async def test_upstream_status_is_kept(self):
        async with _client(lambda request: httpx.Response(403)) as client:
            with pytest.raises(FetchProxyError) as exc_info:
                await fetch_url("https://example.com/blocked", http_client=client)
        assert exc_info.value.status_code == 403
        assert str(exc_info.value) == "Failed to fetch URL: Forbidden"

    @pytest.mark.asyncio
    async def test_transport_error_is_500(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(FetchProxyError) as exc_info:
                await fetch_url("https://example.com/down", http_client=client)
        assert exc_info.value.status_code == 500
        assert str(exc_info.value).startswith("Server error:")
