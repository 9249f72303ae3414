"""Server-side page fetch used by URL ingestion and the /proxy endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from app.config import settings
from app.utils.exceptions import FetchProxyError

logger = logging.getLogger(__name__)


@dataclass
class FetchedPage:
    url: str
    text: str
    content_type: str = "text/html"


async def fetch_url(url: str, http_client: httpx.AsyncClient | None = None) -> FetchedPage:
    """GET ``url`` with the proxy's fixed user agent.

    Raises:
        FetchProxyError: with the upstream status on a non-2xx response, or
            500 when the request itself fails.
    """
    headers = {"User-Agent": settings.fetch_user_agent}
    try:
        if http_client is not None:
            response = await http_client.get(url, headers=headers)
        else:
            async with httpx.AsyncClient(
                timeout=settings.fetch_timeout_seconds, follow_redirects=True
            ) as client:
                response = await client.get(url, headers=headers)
    except httpx.HTTPError as e:
        logger.warning("Proxy fetch of %s failed: %s", url, e)
        raise FetchProxyError(500, f"Server error: {e}") from e

    if not response.is_success:
        logger.warning("Proxy fetch of %s returned %d", url, response.status_code)
        raise FetchProxyError(
            response.status_code, f"Failed to fetch URL: {response.reason_phrase}"
        )

    content_type = response.headers.get("content-type", "text/html")
    return FetchedPage(url=url, text=response.text, content_type=content_type)
