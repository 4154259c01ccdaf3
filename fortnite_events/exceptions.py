# fortnite_events/exceptions.py
"""
Errors raised by the event scraper.

Every failure is fatal to a single ``get_player_stats`` call; nothing in the
package retries or returns partial results.
"""

from typing import Optional


class ScraperError(Exception):
    """Base class for everything the scraper raises."""


class StructuralMismatchError(ScraperError):
    """Raised when the rendered page does not follow the expected layout."""


class UnregisteredLabelError(StructuralMismatchError):
    """Raised when a stat label has no normalizer in the active table."""

    def __init__(self, label: str, table: str):
        self.label = label
        self.table = table
        super().__init__(f"No {table} normalizer registered for label {label!r}")


class StaleSessionError(StructuralMismatchError):
    """Raised when a session panel is queried after another one was revealed."""


class NormalizationError(ScraperError, ValueError):
    """Raised when a raw stat value cannot be parsed."""

    def __init__(self, label: str, raw: Optional[str], reason: str = "not numeric"):
        self.label = label
        self.raw = raw
        super().__init__(f"Could not normalize {label!r} from {raw!r}: {reason}")


class NavigationError(ScraperError):
    """Raised when the profile page cannot be loaded."""


class PlayerNotFoundError(NavigationError):
    """Raised when the player profile does not exist."""


class ScraperBlockedError(NavigationError):
    """Raised when Cloudflare blocks scraper access."""
