# fortnite_events/scraper/revealer.py
"""
Session reveal protocol.

Each event block shows the details of one session at a time. Clicking a
session selector swaps the visible panel, so sessions are revealed and read
strictly one after another: click, wait for the re-render, then query.
"""

import logging
from typing import Any, List, Optional

from ..constants import SETTLE_DELAY_MS
from ..exceptions import StaleSessionError

logger = logging.getLogger(__name__)


class RevealedSession:
    """
    Query view over the currently revealed session panel of one event block.

    Valid only until the owning revealer reveals the next session. Element
    handles obtained through the view are disposed when it is released.
    """

    def __init__(self, queries, container, index: int):
        self.queries = queries
        self.container = container
        self.index = index
        self._valid = True
        self._handles: List[Any] = []

    @property
    def valid(self) -> bool:
        return self._valid

    def invalidate(self) -> None:
        self._valid = False

    async def release(self) -> None:
        """Invalidate the view and dispose every handle it handed out."""
        self.invalidate()
        handles, self._handles = self._handles, []
        await self.queries.dispose(handles)

    async def dispose(self, elements) -> None:
        elements = [element for element in elements if element is not None]
        self._handles = [h for h in self._handles if all(h is not e for e in elements)]
        await self.queries.dispose(elements)

    def _check(self) -> None:
        if not self._valid:
            raise StaleSessionError(
                f"Session panel {self.index} was replaced by a later reveal"
            )

    async def qs(self, selector: str, parent: Any = None) -> Optional[Any]:
        self._check()
        element = await self.queries.qs(selector, parent if parent is not None else self.container)
        if element is not None:
            self._handles.append(element)
        return element

    async def qsa(self, selector: str, parent: Any = None) -> List[Any]:
        self._check()
        elements = await self.queries.qsa(selector, parent if parent is not None else self.container)
        self._handles.extend(elements)
        return elements

    async def text(self, element) -> str:
        self._check()
        return await self.queries.text(element)

    async def matches(self, element, selector: str) -> bool:
        self._check()
        return await self.queries.matches(element, selector)


class SessionRevealer:
    """Owns the single "revealed session" slot of one event block."""

    def __init__(self, queries, container, settle_delay_ms: int = SETTLE_DELAY_MS):
        self.queries = queries
        self.container = container
        self.settle_delay_ms = settle_delay_ms
        self._current: Optional[RevealedSession] = None
        self._reveals = 0

    @property
    def current(self) -> Optional[RevealedSession]:
        return self._current

    async def reveal(self, selector) -> RevealedSession:
        """Click ``selector``, wait for the panel to settle and return a fresh view."""
        await self.close()

        await self.queries.activate(selector)
        await self.queries.sleep(self.settle_delay_ms)

        self._current = RevealedSession(self.queries, self.container, self._reveals)
        self._reveals += 1
        logger.debug("Revealed session panel %d", self._current.index)
        return self._current

    async def close(self) -> None:
        """Release the current view, if any."""
        if self._current is not None:
            current, self._current = self._current, None
            await current.release()
