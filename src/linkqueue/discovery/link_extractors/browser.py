"""Link extraction from a live page rendered by Playwright."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from playwright.async_api import Page

# Runs inside the page. Element.href is already resolved by the browser.
EXTRACT_HREFS_JS = "(elements) => elements.map((el) => el.href).filter((href) => !!href)"


class PageSource:
    """
    Extract links from a rendered browser page.

    The selector is evaluated inside the page, so links added by JavaScript
    are found and relative URLs are resolved by the browser itself against
    the page's own location.

    Example:
        async with async_playwright() as p:
            browser = await p.chromium.launch()
            page = await browser.new_page()
            await page.goto("https://example.com")
            urls = await PageSource(page).extract_urls("a")

    Requires: pip install linkqueue[js]
    """

    def __init__(self, page: Page):  # type: ignore[no-any-unimported]
        """
        Initialize the page source.

        Args:
            page: An open Playwright page (or any object with a compatible
                ``eval_on_selector_all`` coroutine)
        """
        self._page = page

    async def extract_urls(self, selector: str) -> list[str]:
        hrefs = await self._page.eval_on_selector_all(selector, EXTRACT_HREFS_JS)
        urls = [href for href in (hrefs or []) if href]
        logger.debug(f"Selector {selector!r} matched {len(urls)} links on page")
        return urls
