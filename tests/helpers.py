# tests/helpers.py
"""
In-memory stand-in for a Playwright page, backed by BeautifulSoup.

Session panels are stored in ``<template data-panel="...">`` elements and
copied into the block's ``.panel-slot`` when the matching
``.fn-event-windows__entry`` receives a click, mimicking the single revealed
panel of the live site. Clicks, waits and queries are written to ``log``;
waits only take real time when ``time_scale`` is set. Every handle handed
out is kept in ``handles`` so tests can check that it was disposed.
"""

import asyncio
from typing import List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError


class FakeResponse:
    def __init__(self, status: int = 200):
        self.status = status


class FakeElement:
    """Subset of ``ElementHandle`` used by PageQueries."""

    def __init__(self, document: "FakePage", tag):
        self.document = document
        self.tag = tag
        self.disposed = False
        document.handles.append(self)

    async def query_selector(self, selector: str) -> Optional["FakeElement"]:
        return self.document._one(self.tag, selector)

    async def query_selector_all(self, selector: str) -> List["FakeElement"]:
        return self.document._all(self.tag, selector)

    async def text_content(self) -> Optional[str]:
        return self.tag.get_text()

    async def evaluate(self, expression: str, arg=None):
        if "matches" in expression:
            return self.tag.css.match(arg)
        if "href" in expression:
            href = self.tag.get("href")
            return urljoin(self.document.url, href) if href else ""
        raise NotImplementedError(expression)

    async def dispatch_event(self, event_type: str) -> None:
        self.document._dispatch(self, event_type)

    async def dispose(self) -> None:
        if self.disposed:
            raise RuntimeError("handle disposed twice")
        self.disposed = True


class FakePage:
    """Subset of ``Page``: goto, title, element queries and timed waits."""

    def __init__(self, html: str, status: int = 200, title: str = "Events - Fortnite Tracker",
                 goto_error: Optional[str] = None, time_scale: float = 0.0):
        self.soup = BeautifulSoup(html, "html.parser")
        self.panels = {}
        for template in self.soup.select("template[data-panel]"):
            self.panels[template["data-panel"]] = template.decode_contents()
            template.decompose()
        self.status = status
        self._title = title
        self.goto_error = goto_error
        self.time_scale = time_scale
        self.wait_until: List[Optional[str]] = []
        self.handles: List[FakeElement] = []
        self.url = "about:blank"
        self.visited: List[str] = []
        self.log: List[tuple] = []

    # --- Page API ---

    async def goto(self, url: str, wait_until: Optional[str] = None) -> FakeResponse:
        self.visited.append(url)
        self.wait_until.append(wait_until)
        if self.goto_error:
            raise PlaywrightError(self.goto_error)
        self.url = url
        return FakeResponse(self.status)

    async def title(self) -> str:
        return self._title

    async def query_selector(self, selector: str) -> Optional[FakeElement]:
        return self._one(self.soup, selector)

    async def query_selector_all(self, selector: str) -> List[FakeElement]:
        return self._all(self.soup, selector)

    async def wait_for_timeout(self, ms: int) -> None:
        self.log.append(("sleep", ms))
        await asyncio.sleep(ms / 1000 * self.time_scale)

    # --- Internals ---

    def _one(self, root, selector: str) -> Optional[FakeElement]:
        self.log.append(("query", selector))
        tag = root.select_one(selector)
        return FakeElement(self, tag) if tag is not None else None

    def _all(self, root, selector: str) -> List[FakeElement]:
        self.log.append(("query", selector))
        return [FakeElement(self, tag) for tag in root.select(selector)]

    def _dispatch(self, element: FakeElement, event_type: str) -> None:
        panel_id = element.tag.get("data-panel")
        self.log.append((event_type, panel_id))
        if event_type != "click" or panel_id is None:
            return
        block = element.tag.find_parent(class_="fn-event-player")
        slot = block.select_one(".panel-slot")
        slot.clear()
        fragment = BeautifulSoup(self.panels[panel_id], "html.parser")
        for child in list(fragment.contents):
            slot.append(child)


# --- HTML builders ---

SESSION_STATS = [
    ("Rank", "#5"),
    ("Earnings", "$100"),
    ("PR Points", "1,250"),
    ("Eliminations", "12"),
    ("K/D", "x1.5"),
    ("Points Earned", "48"),
    ("Avg. Kills", "0.75"),
    ("Avg. Placement", "14.2"),
    ("Avg. Points", "3"),
]


def stat_pairs_html(stats, name_class: str, value_class: str) -> str:
    return "".join(
        f'<div class="{name_class}">{name}</div><div class="{value_class}">{value}</div>'
        for name, value in stats
    )


def match_html(date: str, eliminations: str, placed: str) -> str:
    stats = stat_pairs_html(
        [("Eliminations", eliminations), ("Placed", placed)],
        "fn-event-team__session-stat__name",
        "fn-event-team__session-stat__value",
    )
    return (
        '<div class="fn-event-team__session">'
        f'<div class="fn-event-team__session-date">{date}</div>{stats}</div>'
    )


def panel_html(number: int, matches_label: str, stats=None, matches: str = "") -> str:
    stats = SESSION_STATS if stats is None else stats
    return (
        f'<div class="trn-card__header-title">Session {number}</div>'
        f'<div class="trn-card__header-subline">{matches_label}</div>'
        + stat_pairs_html(stats, "fn-event-team__stat-name", "fn-event-team__stat-value")
        + matches
    )


def event_html(block_id: str, href: str, title: str, subtitle: str, panels=()) -> str:
    """One ``.fn-event-player`` block; ``panels`` holds the HTML of each session panel."""
    selectors = "".join(
        f'<div class="fn-event-windows__entry" data-panel="{block_id}-{i}">S{i + 1}</div>'
        for i in range(len(panels))
    )
    templates = "".join(
        f'<template data-panel="{block_id}-{i}">{panel}</template>'
        for i, panel in enumerate(panels)
    )
    return (
        '<div class="fn-event-player">'
        f'<a class="fn-events__entry" href="{href}">'
        f'<span class="fn-events__entry-title1">{title}</span>'
        f'<span class="fn-events__entry-title2">{subtitle}</span></a>'
        f'<div class="fn-event-windows">{selectors}</div>'
        '<div class="panel-slot"></div>'
        f'</div>{templates}'
    )


def page_html(*events: str) -> str:
    return "<html><body>" + "".join(events) + "</body></html>"
