# main.py
"""
Fetch data about all the events a player participated in and print them
to standard output as JSON.

Usage: python main.py [--no-headless] [--timeout SECONDS] [--verbose] PLAYER
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from fortnite_events.exceptions import ScraperError
from fortnite_events.scraper import get_player_stats

logger = logging.getLogger("fortnite_events")


async def fetch_events(player: str, headless: bool = True, timeout: Optional[float] = None) -> List[Dict[str, Any]]:
    """Scrape ``player`` and return the JSON-ready payload, bounded by ``timeout`` seconds."""
    events = await asyncio.wait_for(get_player_stats(player, headless=headless), timeout=timeout)
    return [event.to_dict() for event in events]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Fetches data about all the events the player participated in "
            "and prints them to standard output."
        )
    )
    parser.add_argument("player", help="Epic display name as shown on fortnitetracker.com")
    parser.add_argument(
        "--no-headless",
        dest="headless",
        action="store_false",
        default=True,
        help="Show browser window while running",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abort after this many seconds (default: no limit)",
    )
    parser.add_argument("--verbose", action="store_true", help="Verbose logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        payload = asyncio.run(fetch_events(args.player, headless=args.headless, timeout=args.timeout))
    except asyncio.TimeoutError:
        logger.error("Timed out after %s seconds fetching events for %s", args.timeout, args.player)
        return 1
    except ScraperError as exc:
        logger.error("Failed to fetch events for %s: %s", args.player, exc)
        return 1

    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
