# fortnite_events/models.py
"""Typed records for a player's event history: event -> session -> match."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Match:
    """One completed match within a session."""

    date: str
    eliminations: int
    placed: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "eliminations": self.eliminations,
            "placed": self.placed,
        }


@dataclass(frozen=True)
class SessionStats:
    """Aggregate performance for one session.

    Numeric fields hold an int when the displayed value has no fractional part.
    """

    rank: int
    earnings: float
    pr_points: float
    eliminations: int
    kd: float
    points_earned: float
    avg_kills: float
    avg_placement: float
    avg_points: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rank": self.rank,
            "earnings": self.earnings,
            "prPoints": self.pr_points,
            "eliminations": self.eliminations,
            "kd": self.kd,
            "pointsEarned": self.points_earned,
            "avgKills": self.avg_kills,
            "avgPlacement": self.avg_placement,
            "avgPoints": self.avg_points,
        }


@dataclass(frozen=True)
class Session:
    """
    One scored play window within an event.

    ``number_of_matches`` is the count displayed in the panel header and is
    not checked against ``len(matches)``.
    """

    number: int
    stats: SessionStats
    number_of_matches: int
    matches: Tuple[Match, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "number": self.number,
            "stats": self.stats.to_dict(),
            "numberOfMatches": self.number_of_matches,
            "matches": [match.to_dict() for match in self.matches],
        }


@dataclass(frozen=True)
class EventStats:
    """A tournament the player took part in, with its sessions in reveal order."""

    url: str
    title: str
    subtitle: str
    sessions: Tuple[Session, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "subtitle": self.subtitle,
            "sessions": [session.to_dict() for session in self.sessions],
        }
