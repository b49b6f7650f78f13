"""Playwright-backed Page for the bird guide.

The traversal never holds a live browser object. PlaywrightPage renders
each document in a real browser tab, serializes the rendered DOM and
hands back an lxml snapshot, so classification and extraction run on
static HTML exactly as they do in tests.

Key features:
- Browser lifecycle management through the open() context manager
- Navigation failures (timeouts, network errors, HTTP >= 400) surfaced
  as NavigationFailure
- In-page script to click collapsed-section toggles
- Optional navigation pacing via pyrate_limiter
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from playwright.async_api import (
    Browser,
    BrowserContext,
    async_playwright,
)
from playwright.async_api import (
    Error as PlaywrightError,
)
from playwright.async_api import (
    Page as BrowserPage,
)
from playwright.async_api import (
    TimeoutError as PlaywrightTimeoutError,
)
from pyrate_limiter import Limiter

from peipsi_birds.common.exceptions import NavigationFailure
from peipsi_birds.common.lxml_page_element import LxmlPageElement

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30_000

# Returns the number of toggles clicked.
EXPAND_SCRIPT = """
(markerClass) => {
    const toggles = Array.from(document.getElementsByClassName(markerClass));
    for (const elem of toggles) {
        elem.click();
    }
    return toggles.length;
}
"""


class PlaywrightPage:
    """Page implementation driving a single Playwright browser tab.

    Args:
        page: The Playwright page to drive.
        timeout_ms: Navigation timeout in milliseconds.
        rate_limiter: Optional limiter acquired before every navigation.

    Example:
        async with PlaywrightPage.open(headless=True) as page:
            records = await crawl(page)
    """

    def __init__(
        self,
        page: BrowserPage,
        timeout_ms: float = DEFAULT_TIMEOUT_MS,
        rate_limiter: Limiter | None = None,
    ) -> None:
        self._page = page
        self.timeout_ms = timeout_ms
        self.rate_limiter = rate_limiter

    @classmethod
    @asynccontextmanager
    async def open(
        cls,
        browser_type: str = "chromium",
        headless: bool = True,
        viewport: dict[str, int] | None = None,
        user_agent: str | None = None,
        locale: str = "ru-RU",
        timeout_ms: float = DEFAULT_TIMEOUT_MS,
        rate_limiter: Limiter | None = None,
    ) -> AsyncIterator[PlaywrightPage]:
        """Launch a browser and yield a page driving a fresh tab.

        Browser, context and Playwright itself are closed on exit, in
        reverse order of creation, even if the body raises.

        Args:
            browser_type: "chromium", "firefox", or "webkit" (default: "chromium").
            headless: Run browser in headless mode (default: True).
            viewport: Browser viewport size (default: 1280x720).
            user_agent: Custom user agent string (default: browser default).
            locale: Browser locale (default: "ru-RU").
            timeout_ms: Navigation timeout in milliseconds.
            rate_limiter: Optional limiter acquired before every navigation.

        Yields:
            Initialized PlaywrightPage instance.
        """
        if viewport is None:
            viewport = {"width": 1280, "height": 720}

        playwright = await async_playwright().start()
        try:
            browser_launcher = getattr(playwright, browser_type)
            browser: Browser = await browser_launcher.launch(
                headless=headless
            )
            logger.debug(f"Launched {browser_type} (headless={headless})")

            try:
                context_kwargs: dict[str, Any] = {
                    "viewport": viewport,
                    "locale": locale,
                }
                if user_agent:
                    context_kwargs["user_agent"] = user_agent

                browser_context: BrowserContext = await browser.new_context(
                    **context_kwargs
                )

                try:
                    page = await browser_context.new_page()
                    yield cls(
                        page, timeout_ms=timeout_ms, rate_limiter=rate_limiter
                    )

                finally:
                    await browser_context.close()

            finally:
                await browser.close()

        finally:
            await playwright.stop()

    @property
    def url(self) -> str:
        return self._page.url

    async def goto(self, url: str) -> None:
        """Navigate the tab to a URL.

        Raises:
            NavigationFailure: On timeout, browser/network error, or an
                HTTP error status.
        """
        if self.rate_limiter:
            await self.rate_limiter.try_acquire_async(
                name="navigation", weight=1
            )

        try:
            response = await self._page.goto(
                url, wait_until="domcontentloaded", timeout=self.timeout_ms
            )
        except PlaywrightTimeoutError as e:
            logger.warning(f"Playwright timeout navigating to {url}: {e}")
            raise NavigationFailure(url, f"timeout: {e}") from e
        except PlaywrightError as e:
            raise NavigationFailure(url, str(e)) from e

        if response is not None and response.status >= 400:
            raise NavigationFailure(
                url, response.status_text, status_code=response.status
            )

    async def expand(self, marker_class: str) -> None:
        clicked = await self._page.evaluate(EXPAND_SCRIPT, marker_class)
        logger.info(f"Expanded {clicked} '.{marker_class}' sections")

    async def snapshot(self) -> LxmlPageElement:
        """Serialize the rendered DOM and parse it with lxml."""
        html_content = await self._page.content()
        return LxmlPageElement.from_html(html_content, self._page.url)
