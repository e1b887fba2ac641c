"""
Page fetcher for URL imports.

Fetches raw HTML, optionally through a CORS-bypass proxy configured as a
URL template (`{url}` is replaced by the quoted target URL).
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import httpx

from ..core.config import get_settings
from ..core.exceptions import PageFetchError

logger = logging.getLogger(__name__)


class PageFetcher:
    """Async HTML fetcher backed by httpx."""

    def __init__(
        self,
        proxy_template: Optional[str] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.proxy_template = proxy_template if proxy_template is not None else settings.fetch_proxy_template
        self.timeout = timeout or settings.fetch_timeout
        self.user_agent = user_agent or settings.fetch_user_agent
        self.transport = transport

    def request_url(self, url: str) -> str:
        if not self.proxy_template:
            return url
        return self.proxy_template.replace("{url}", quote(url, safe=""))

    async def fetch(self, url: str) -> str:
        """
        Return the page HTML.

        Raises:
            PageFetchError: network failure or non-2xx response
        """
        target = self.request_url(url)
        headers = {"User-Agent": self.user_agent, "Accept": "text/html,application/xhtml+xml"}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(target, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning("Fetch %s returned HTTP %s", url, exc.response.status_code)
            raise PageFetchError(url, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.warning("Fetch %s failed: %s", url, exc)
            raise PageFetchError(url, str(exc) or type(exc).__name__) from exc

        logger.info("Fetched %s (%d chars)", url, len(response.text))
        return response.text
