# fortnite_events/scraper/session.py
"""
Browser session management for Playwright-based scraping.

Handles browser lifecycle: launch, context with a browser-like user agent,
page creation and teardown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import Page, async_playwright

from ..constants import USER_AGENT, VIEWPORT

logger = logging.getLogger(__name__)


@asynccontextmanager
async def open_page(headless: bool = True, slow_mo: int = 0) -> AsyncIterator[Page]:
    """
    Launch Chromium and yield a fresh page; the browser is closed on exit.

    Args:
        headless: If False, show the browser window
        slow_mo: Delay in milliseconds added to every Playwright operation

    Yields:
        Playwright Page ready for navigation
    """
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=headless, slow_mo=slow_mo)
        logger.debug("Launched chromium (headless=%s)", headless)
        try:
            context = await browser.new_context(
                user_agent=USER_AGENT,
                viewport=VIEWPORT,
                locale="en-US",
            )
            yield await context.new_page()
        finally:
            await browser.close()
            logger.debug("Browser closed")
