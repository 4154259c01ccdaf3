# fortnite_events/scraper/events.py
"""Extraction of one event block: header, sessions and their match rows."""

import logging
import re
from typing import Any, List

from .. import constants as layout
from ..constants import SETTLE_DELAY_MS
from ..exceptions import NormalizationError, StructuralMismatchError
from ..models import EventStats, Match, Session, SessionStats
from ..parser import MATCH_STATS, SESSION_STATS, LabelValueReducer
from .revealer import RevealedSession, SessionRevealer

logger = logging.getLogger(__name__)

_COUNTER_RE = re.compile(r"[0-9]+")

session_stats_reducer = LabelValueReducer(
    layout.SESSION_STAT_NAME, layout.SESSION_STAT_VALUE, SESSION_STATS
)
match_stats_reducer = LabelValueReducer(
    layout.MATCH_STAT_NAME, layout.MATCH_STAT_VALUE, MATCH_STATS
)


def _counter_token(text: str, position: int, what: str) -> int:
    """Integer at a fixed whitespace token position, e.g. ('Session 3', 1) -> 3."""
    tokens = text.split()
    if len(tokens) <= position:
        raise StructuralMismatchError(f"{what} text {text!r} has no token {position}")
    token = tokens[position]
    if not _COUNTER_RE.fullmatch(token):
        raise NormalizationError(what, text, f"token {token!r} is not an integer")
    return int(token)


class EventExtractor:
    """Turns one ``.fn-event-player`` block into an EventStats record."""

    def __init__(self, queries, settle_delay_ms: int = SETTLE_DELAY_MS):
        self.queries = queries
        self.settle_delay_ms = settle_delay_ms

    async def _require(self, view, selector: str, parent: Any = None):
        element = await view.qs(selector, parent)
        if element is None:
            raise StructuralMismatchError(f"Required element {selector!r} not found")
        return element

    async def _required_text(self, view, selector: str, parent: Any = None) -> str:
        element = await self._require(view, selector, parent)
        try:
            text = (await view.text(element)).strip()
        finally:
            await view.dispose([element])
        if not text:
            raise StructuralMismatchError(f"Required element {selector!r} is empty")
        return text

    async def extract(self, block) -> EventStats:
        revealer = SessionRevealer(self.queries, block, self.settle_delay_ms)
        entry = None
        selectors: List[Any] = []
        try:
            entry = await self._require(self.queries, layout.EVENT_ENTRY, block)
            url = await self.queries.href(entry)
            if not url:
                raise StructuralMismatchError(f"Event entry {layout.EVENT_ENTRY!r} has no link")
            title = await self._required_text(self.queries, layout.EVENT_TITLE, entry)
            subtitle = await self._required_text(self.queries, layout.EVENT_SUBTITLE, entry)

            sessions: List[Session] = []
            selectors = await self.queries.qsa(layout.SESSION_SELECTOR, block)
            for selector in selectors:
                view = await revealer.reveal(selector)
                sessions.append(await self._read_session(view))
        finally:
            await revealer.close()
            await self.queries.dispose([entry, *selectors])

        logger.debug("Extracted %s (%s): %d sessions", title, subtitle, len(sessions))
        return EventStats(url=url, title=title, subtitle=subtitle, sessions=tuple(sessions))

    async def _read_session(self, view: RevealedSession) -> Session:
        number = _counter_token(
            await self._required_text(view, layout.SESSION_TITLE), 1, "Session number"
        )
        number_of_matches = _counter_token(
            await self._required_text(view, layout.SESSION_SUBLINE), 0, "Number of matches"
        )
        stats: SessionStats = await session_stats_reducer.reduce_elements(view, view.container)

        matches: List[Match] = []
        for row in await view.qsa(layout.MATCH_ROW):
            date_text = await view.text(await self._require(view, layout.MATCH_DATE, row))
            date = date_text.split(",")[0].strip()
            matches.append(await match_stats_reducer.reduce_elements(view, row, date=date))

        logger.debug("Session %d: %d/%d matches read", number, len(matches), number_of_matches)
        return Session(
            number=number,
            stats=stats,
            number_of_matches=number_of_matches,
            matches=tuple(matches),
        )
