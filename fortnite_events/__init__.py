"""Fortnite competitive event history scraper."""

from .exceptions import (
    NavigationError,
    NormalizationError,
    PlayerNotFoundError,
    ScraperBlockedError,
    ScraperError,
    StaleSessionError,
    StructuralMismatchError,
    UnregisteredLabelError,
)
from .models import EventStats, Match, Session, SessionStats

__all__ = [
    "EventStats",
    "Match",
    "Session",
    "SessionStats",
    "ScraperError",
    "StructuralMismatchError",
    "UnregisteredLabelError",
    "StaleSessionError",
    "NormalizationError",
    "NavigationError",
    "PlayerNotFoundError",
    "ScraperBlockedError",
]
