# fortnite_events/constants.py
"""Site URLs, browser settings and the CSS layout contract of the events page."""

BASE_URL = "https://fortnitetracker.com"
PROFILE_EVENTS_PATH = "/profile/all/{player}/events"

# Reveal protocol: fixed wait after clicking a session selector.
SETTLE_DELAY_MS = 100

# Wait after the load event before the first query.
RENDER_WAIT_MS = 2000

# Lowercased title prefixes of the Cloudflare interstitial.
BLOCKED_TITLE_PREFIXES = ("attention required!", "just a moment...")

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)
VIEWPORT = {"width": 1280, "height": 720}

# --- Layout contract ---

PLAYER_BLOCK = ".fn-event-player"

EVENT_ENTRY = ".fn-events__entry"
EVENT_TITLE = ".fn-events__entry-title1"
EVENT_SUBTITLE = ".fn-events__entry-title2"

SESSION_SELECTOR = ".fn-event-windows__entry"
SESSION_TITLE = ".trn-card__header-title"
SESSION_SUBLINE = ".trn-card__header-subline"

SESSION_STAT_NAME = ".fn-event-team__stat-name"
SESSION_STAT_VALUE = ".fn-event-team__stat-value"

MATCH_ROW = ".fn-event-team__session"
MATCH_DATE = ".fn-event-team__session-date"
MATCH_STAT_NAME = ".fn-event-team__session-stat__name"
MATCH_STAT_VALUE = ".fn-event-team__session-stat__value"
