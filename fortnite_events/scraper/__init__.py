"""
Playwright-driven extraction of the fortnitetracker events page.
"""

from .core import EventScraper, get_player_stats
from .events import EventExtractor
from .page import PageQueries
from .revealer import RevealedSession, SessionRevealer
from .session import open_page

__all__ = [
    'EventScraper',
    'get_player_stats',
    'EventExtractor',
    'PageQueries',
    'RevealedSession',
    'SessionRevealer',
    'open_page',
]
