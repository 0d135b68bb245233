"""
Render session - one Chromium instance and one page per request.

Sessions are never pooled or reused: each invocation launches a fresh
browser so no cookies, storage or cache leak between requests.
"""

import logging
from typing import Any, NamedTuple, Optional

from playwright.async_api import async_playwright

from .config import RenderSettings

logger = logging.getLogger(__name__)


class RenderSessionHandle(NamedTuple):
    """Browser and page owned by the current request."""

    browser: Any
    page: Any


class RenderSession:
    """
    Owns the Playwright driver, browser and page for a single request.

    Usage:
        async with RenderSession(settings) as handle:
            pdf_bytes = await renderer.render(handle.page, target, options)

    release() is idempotent and safe to call after a partial acquire().
    """

    def __init__(self, settings: RenderSettings):
        self.settings = settings
        self._playwright = None
        self._browser = None
        self._page = None

    @property
    def handle(self) -> Optional[RenderSessionHandle]:
        if self._browser is None or self._page is None:
            return None
        return RenderSessionHandle(self._browser, self._page)

    async def acquire(self) -> RenderSessionHandle:
        """
        Launch Chromium and open one page.

        Returns:
            RenderSessionHandle for the new browser and page

        Raises:
            RuntimeError: if the session was already acquired
            Exception: any Playwright launch error, unchanged
        """
        if self._playwright is not None:
            raise RuntimeError("Render session already acquired")

        logger.debug(
            f"Launching Chromium (headless={self.settings.headless}, "
            f"executable={self.settings.browser_executable_path or 'bundled'})"
        )
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self.settings.headless,
            args=list(self.settings.browser_args),
            executable_path=self.settings.browser_executable_path,
        )
        self._page = await self._browser.new_page()

        if self.settings.navigation_timeout_ms is not None:
            self._page.set_default_navigation_timeout(self.settings.navigation_timeout_ms)

        return RenderSessionHandle(self._browser, self._page)

    async def release(self) -> None:
        """
        Close the browser and stop the Playwright driver.

        Best-effort: close failures are logged, never raised, so the
        caller's response is not replaced by a teardown error.
        """
        browser, playwright = self._browser, self._playwright
        self._browser = None
        self._page = None
        self._playwright = None

        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                logger.warning(f"Failed to close browser: {e}")

        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                logger.warning(f"Failed to stop Playwright driver: {e}")

    async def __aenter__(self) -> RenderSessionHandle:
        try:
            return await self.acquire()
        except BaseException:
            await self.release()
            raise

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.release()
