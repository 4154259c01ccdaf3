# fortnite_events/scraper/page.py
"""
Query helpers bound to a live Playwright page.

The extraction code only talks to the document through these coroutines:
single and multi element queries scoped to an optional parent, text and
href reads, a class predicate, the click used to reveal panels, a
suspend-for-duration and handle disposal.
"""

from typing import Iterable, List, Optional

from playwright.async_api import ElementHandle, Page


class PageQueries:
    """Thin async facade over ``Page``/``ElementHandle`` lookups."""

    def __init__(self, page: Page):
        self.page = page

    async def qs(self, selector: str, parent: Optional[ElementHandle] = None) -> Optional[ElementHandle]:
        root = parent if parent is not None else self.page
        return await root.query_selector(selector)

    async def qsa(self, selector: str, parent: Optional[ElementHandle] = None) -> List[ElementHandle]:
        root = parent if parent is not None else self.page
        return await root.query_selector_all(selector)

    async def sleep(self, ms: int) -> None:
        await self.page.wait_for_timeout(ms)

    async def text(self, element: ElementHandle) -> str:
        return await element.text_content() or ""

    async def href(self, element: ElementHandle) -> str:
        # The DOM property resolves relative links against the page URL.
        return await element.evaluate("el => el.href || ''")

    async def matches(self, element: ElementHandle, selector: str) -> bool:
        return await element.evaluate("(el, sel) => el.matches(sel)", selector)

    async def activate(self, element: ElementHandle) -> None:
        await element.dispatch_event("click")

    async def dispose(self, elements: Iterable[Optional[ElementHandle]]) -> None:
        for element in elements:
            if element is not None:
                await element.dispose()
