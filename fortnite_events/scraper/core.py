from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Optional
from urllib.parse import quote

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from ..constants import (
    BASE_URL,
    BLOCKED_TITLE_PREFIXES,
    PLAYER_BLOCK,
    PROFILE_EVENTS_PATH,
    RENDER_WAIT_MS,
    SETTLE_DELAY_MS,
)
from ..exceptions import NavigationError, PlayerNotFoundError, ScraperBlockedError
from ..models import EventStats
from .events import EventExtractor
from .page import PageQueries
from .session import open_page

logger = logging.getLogger(__name__)


async def _gather_all(coroutines: Iterable[Awaitable[Any]]) -> List[Any]:
    """Run coroutines concurrently; on the first failure cancel the rest and re-raise."""
    tasks = [asyncio.ensure_future(coro) for coro in coroutines]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class EventScraper:
    """Reads a player's tournament history from the fortnitetracker events page."""

    def __init__(
        self,
        page: Page,
        base_url: str = BASE_URL,
        settle_delay_ms: int = SETTLE_DELAY_MS,
        render_wait_ms: int = RENDER_WAIT_MS,
        queries_factory: Callable[[Page], Any] = PageQueries,
    ):
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.settle_delay_ms = settle_delay_ms
        self.render_wait_ms = render_wait_ms
        self.queries_factory = queries_factory

    def profile_url(self, player_name: str) -> str:
        return self.base_url + PROFILE_EVENTS_PATH.format(player=quote(player_name, safe=""))

    async def get_player_stats(self, player_name: str) -> List[EventStats]:
        """
        Scrape every event block on the player's profile.

        Event blocks are extracted concurrently; sessions inside a block are
        revealed one at a time. The result keeps the page order of the blocks.

        Raises:
            NavigationError: If the profile page cannot be loaded
            StructuralMismatchError: If the page does not follow the events layout
            NormalizationError: If a stat value cannot be parsed
        """
        url = self.profile_url(player_name)
        await self._navigate(url)

        queries = self.queries_factory(self.page)
        blocks = await queries.qsa(PLAYER_BLOCK)
        logger.info("Found %d event blocks for %s", len(blocks), player_name)

        extractor = EventExtractor(queries, settle_delay_ms=self.settle_delay_ms)
        try:
            events = await _gather_all(extractor.extract(block) for block in blocks)
        finally:
            await queries.dispose(blocks)

        logger.info(
            "Scraped %d events, %d sessions for %s",
            len(events),
            sum(len(event.sessions) for event in events),
            player_name,
        )
        return events

    async def _navigate(self, url: str) -> None:
        """Load ``url`` once; no retries."""
        logger.info("Navigating to %s", url)
        try:
            response = await self.page.goto(url, wait_until="load")
            title = (await self.page.title()).strip().lower()
        except PlaywrightError as exc:
            raise NavigationError(f"Failed to load {url}: {exc}") from exc

        status: Optional[int] = response.status if response is not None else None

        # The profile title embeds the player name; only the interstitial's own title counts.
        if title.startswith(BLOCKED_TITLE_PREFIXES):
            raise ScraperBlockedError(f"Cloudflare blocked the request to {url}")
        if status == 404:
            raise PlayerNotFoundError(f"Profile page not found at {url}")
        if status is not None and status >= 400:
            raise NavigationError(f"Loading {url} returned HTTP {status}")

        # Event blocks are mounted client-side after the load event.
        await self.page.wait_for_timeout(self.render_wait_ms)


async def get_player_stats(
    player_name: str,
    headless: bool = True,
    slow_mo: int = 0,
    base_url: str = BASE_URL,
) -> List[EventStats]:
    """Launch a browser, scrape ``player_name`` and always close the browser."""
    async with open_page(headless=headless, slow_mo=slow_mo) as page:
        scraper = EventScraper(page, base_url=base_url)
        return await scraper.get_player_stats(player_name)
