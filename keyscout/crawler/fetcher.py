# keyscout/crawler/fetcher.py
"""
Fetcher module: fast HTTP fetch with a browser-render fallback.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout
from playwright.async_api import Error as PlaywrightError

from keyscout.config import ScoutConfig
from keyscout.errors import PageFetchFailure
from keyscout.logger import LOGGER_NAME


class Renderer(Protocol):
    async def render(self, url: str, timeout: float) -> str: ...


class PageFetcher:
    """
    Returns page markup for a URL.

    A plain GET is tried first; its body is accepted only when it looks like a
    complete HTML document. Anything else goes through the domain's browser.
    """

    def __init__(
        self,
        session: ClientSession,
        config: ScoutConfig,
        renderer: Optional[Renderer] = None,
    ) -> None:
        self.session = session
        self.config = config
        self.renderer = renderer
        self.logger = logging.getLogger(LOGGER_NAME)

    def looks_complete(self, html: Optional[str]) -> bool:
        """Reject anti-bot stubs: require a <body> tag and a minimum length."""
        if not html:
            return False
        return "<body" in html.lower() and len(html) > self.config.min_content_length

    async def fetch_http(self, url: str) -> Optional[str]:
        """
        Direct GET. Returns the body, or None when the request failed or the
        status is not 2xx.
        """
        timeout = ClientTimeout(total=self.config.http_timeout)
        try:
            async with self.session.get(
                url,
                timeout=timeout,
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            ) as resp:
                if not 200 <= resp.status < 300:
                    self.logger.debug("HTTP %s for %s", resp.status, url)
                    return None
                return await resp.text(errors="replace")
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            self.logger.warning("    ... HTTP fetch failed for %s (%s). Retrying in browser.", url, exc)
            return None

    async def fetch_rendered(self, url: str) -> str:
        if self.renderer is None:
            raise PageFetchFailure(url, "no browser available for fallback")
        try:
            content = await self.renderer.render(url, self.config.render_timeout)
        except (PlaywrightError, asyncio.TimeoutError) as exc:
            self.logger.error("    ... browser render failed for %s: %s", url, exc)
            raise PageFetchFailure(url, str(exc)) from exc
        self.logger.info("    ... fetched with browser: %s", url)
        return content

    async def fetch(self, url: str) -> str:
        """Return page markup or raise PageFetchFailure."""
        html = await self.fetch_http(url)
        if self.looks_complete(html):
            self.logger.info("    ... fetched over HTTP: %s", url)
            return html  # type: ignore[return-value]
        if html is not None:
            self.logger.debug("    ... incomplete HTML (%d chars) from %s", len(html), url)
        return await self.fetch_rendered(url)


__all__ = ["PageFetcher", "Renderer"]
