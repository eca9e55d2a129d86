"""Filters applied to game lists before they reach the browser.

- ``filter_results``: released-only, minimum year and banned-term policy for
  RAWG listings.
- ``is_kid_safe``: stricter content screen over ESRB rating, tags, genres and
  companies.
- ``apply_time_filter``: out-now / coming-soon windows around today for
  normalized games carrying ``releaseDate``.
"""

import logging
import re
from datetime import date, datetime, timedelta

from gamerly.config import settings
from gamerly.models.filters import TimeFilterState

logger = logging.getLogger(__name__)

BANNED_TERMS = re.compile(r"hentai|porn|sex|erotic|nude|bdsm", re.IGNORECASE)

ADULT_KEYWORDS = (
    "hentai", "porno", "porn", "sex", "sexual", "nsfw", "adult", "erotic", "uncensored",
    "tits", "boobs", "nude", "nudity", "futa", "bdsm", "milf", "strip", "rape", "18+",
    "lewd", "ecchi", "oppai", "yaoi", "yuri", "fetish", "sensual", "stripper",
)

ADULT_TAGS = frozenset({
    "nsfw", "adult", "sexual content", "erotic", "hentai", "mature", "nudity", "explicit",
})

ADULT_COMPANIES = (
    "nutaku", "f95", "f95zone", "mangagamer", "kiss", "illusion", "alice soft",
)

BLOCKED_ESRB = frozenset({"mature", "adults only"})

# Days reaching back (out-now) or forward (coming-soon) from today, per time filter
OUT_NOW_WINDOWS = {"today": 0, "week": 6, "month": 29}
COMING_SOON_WINDOWS = {"today": 0, "week": 7, "month": 31}


def parse_release_date(value) -> date | None:
    """Parse ``YYYY-MM-DD`` or a full ISO timestamp into a date."""
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    try:
        if len(text) > 10:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        return date.fromisoformat(text)
    except ValueError:
        return None


# ── Listing policy ───────────────────────────────────────────────────────────

def has_banned_terms(game: dict) -> bool:
    return bool(
        BANNED_TERMS.search(game.get("name") or "")
        or BANNED_TERMS.search(game.get("slug") or "")
    )


def is_listable(game: dict, today: date, min_year: int | None = None) -> bool:
    """True when a RAWG entry is released, recent enough and clean."""
    if min_year is None:
        min_year = settings.min_release_year

    released = parse_release_date(game.get("released"))
    if released is None or released > today:
        return False
    if released.year < min_year:
        return False
    return not has_banned_terms(game)


def filter_results(games: list[dict], today: date | None = None, min_year: int | None = None) -> list[dict]:
    today = today or date.today()
    kept = [g for g in games if is_listable(g, today, min_year)]
    logger.debug("Kept %d of %d listing entries", len(kept), len(games))
    return kept


# ── Kid-safe screen ──────────────────────────────────────────────────────────

def _names(game: dict, key: str) -> list[str]:
    return [(item.get("name") or "").lower() for item in game.get(key) or [] if isinstance(item, dict)]


def is_kid_safe(game: dict | None) -> bool:
    if not game:
        return False

    esrb = game.get("esrb_rating") or {}
    if (esrb.get("name") or "").lower() in BLOCKED_ESRB:
        return False

    name = (game.get("name") or "").lower()
    if any(k in name for k in ADULT_KEYWORDS):
        return False

    if any(t in ADULT_TAGS for t in _names(game, "tags")):
        return False
    if any(g in ADULT_TAGS for g in _names(game, "genres")):
        return False

    companies = _names(game, "developers") + _names(game, "publishers")
    if any(blocked in c for c in companies for blocked in ADULT_COMPANIES):
        return False

    return True


# ── Section time filter ──────────────────────────────────────────────────────

def apply_time_filter(games: list[dict], state: TimeFilterState, today: date | None = None) -> list[dict]:
    """Narrow a section's games to the selected window around today.

    Coming-soon games without a release date are always kept: unannounced
    dates belong on the upcoming list. Out-now games without one are dropped.
    """
    if state.time_filter == "all":
        return list(games)

    today = today or date.today()

    if state.section == "out-now":
        days = OUT_NOW_WINDOWS.get(state.time_filter)
        if days is None:
            return list(games)
        start, end = today - timedelta(days=days), today
        kept = []
        for game in games:
            released = parse_release_date(game.get("releaseDate"))
            if released is not None and start <= released <= end:
                kept.append(game)
        return kept

    if state.section == "coming-soon":
        days = COMING_SOON_WINDOWS.get(state.time_filter)
        if days is None:
            return list(games)
        start, end = today, today + timedelta(days=days)
        kept = []
        for game in games:
            if not game.get("releaseDate"):
                kept.append(game)
                continue
            released = parse_release_date(game.get("releaseDate"))
            if released is not None and start <= released <= end:
                kept.append(game)
        return kept

    return list(games)
