# keyscout/crawler/browser.py
"""
Headless browser session used as the fallback fetch strategy.

One ``BrowserSession`` lives for exactly one domain; it is opened with
``async with`` and torn down on every exit path.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from playwright.async_api import Browser, Playwright, async_playwright

from keyscout.config import ScoutConfig
from keyscout.logger import LOGGER_NAME


class BrowserSession:
    """Chromium instance driven by Playwright, scoped to one domain."""

    def __init__(self, config: ScoutConfig) -> None:
        self.config = config
        self.logger = logging.getLogger(LOGGER_NAME)
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    @property
    def is_open(self) -> bool:
        return self._browser is not None

    async def __aenter__(self) -> BrowserSession:
        self.logger.info("Launching browser instance…")
        self._playwright = await async_playwright().start()
        try:
            args: List[str] = list(self.config.browser_args)
            self._browser = await self._playwright.chromium.launch(
                headless=self.config.headless, args=args
            )
        except BaseException:
            await self._playwright.stop()
            self._playwright = None
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._browser is not None:
            self.logger.info("Closing browser instance…")
            try:
                await self._browser.close()
            finally:
                self._browser = None
                if self._playwright is not None:
                    await self._playwright.stop()
                    self._playwright = None

    async def render(self, url: str, timeout: float) -> str:
        """
        Open *url* in a new tab, wait for network idle and return the rendered markup.

        The tab is closed before returning, whatever happens.
        """
        if self._browser is None:
            raise RuntimeError("Browser session not started")
        page = await self._browser.new_page(user_agent=self.config.user_agent)
        try:
            await page.goto(url, wait_until="networkidle", timeout=timeout * 1000)
            return await page.content()
        finally:
            await page.close()


__all__ = ["BrowserSession"]
