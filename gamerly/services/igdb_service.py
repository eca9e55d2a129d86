"""IGDB game listings with Twitch OAuth client-credentials auth.

IGDB queries are Apicalypse bodies POSTed to ``/games``. Access tokens come
from Twitch and are held in a process-wide ``TwitchTokenCache`` until shortly
before they expire.
"""

import asyncio
import logging
import math
import time
from datetime import datetime, timezone

import httpx

from gamerly.config import settings
from gamerly.errors import MissingConfigError, UpstreamError

logger = logging.getLogger(__name__)

# Refresh tokens this long before Twitch says they expire
TOKEN_EXPIRY_MARGIN_SECONDS = 60

DAY_SECONDS = 24 * 60 * 60

# Platform groups (IGDB platform ids)
PLATFORM_GROUPS = {
    "pc": [6],
    "playstation": [48, 167],  # PS4, PS5
    "xbox": [49, 169],  # Xbox One, Series X|S
    "nintendo": [130],  # Switch
    "ios": [39],
    "android": [34],
}

# (seconds before now, seconds after now); None = unbounded
RANGE_BOUNDS = {
    "this_week": (7 * DAY_SECONDS, 14 * DAY_SECONDS),
    "past_3_months": (90 * DAY_SECONDS, 30 * DAY_SECONDS),
}

SORT_CLAUSES = {
    "newest": "sort first_release_date desc;",
    "highest_rated": "sort rating desc;",
    "az": "sort name asc;",
}

# Main game, remake, remaster, expanded game
GAME_CATEGORIES = (0, 8, 9, 10)

FIELDS = (
    "fields name,slug,summary,first_release_date,rating,rating_count,"
    "cover.url,platforms.name,genres.name,websites.url;"
)


def _require(name: str, value: str) -> str:
    if not value:
        raise MissingConfigError(f"Missing env var: {name}")
    return value


# ── Token cache ──────────────────────────────────────────────────────────────

class TwitchTokenCache:
    """Owns the current Twitch access token and its expiry.

    ``get_token`` is the only way in: it returns the cached token while it is
    valid and otherwise refreshes it inside the lock, so concurrent callers
    share a single refresh.
    """

    def __init__(self, clock=time.time):
        self._clock = clock
        self._lock = asyncio.Lock()
        self.access_token: str | None = None
        self.expires_at: float = 0.0

    def is_valid(self) -> bool:
        return bool(self.access_token) and self._clock() < self.expires_at - TOKEN_EXPIRY_MARGIN_SECONDS

    def clear(self) -> None:
        self.access_token = None
        self.expires_at = 0.0

    async def get_token(self) -> str:
        if self.is_valid():
            return self.access_token

        async with self._lock:
            if self.is_valid():
                return self.access_token
            token, expires_in = await self._request_token()
            self.access_token = token
            self.expires_at = self._clock() + expires_in
            logger.info("Refreshed Twitch access token (expires in %ds)", expires_in)
            return token

    async def _request_token(self) -> tuple[str, int]:
        client_id = _require("IGDB_CLIENT_ID", settings.igdb_client_id)
        client_secret = _require("IGDB_CLIENT_SECRET", settings.igdb_client_secret)

        async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
            resp = await client.post(
                settings.twitch_token_url,
                params={
                    "client_id": client_id,
                    "client_secret": client_secret,
                    "grant_type": "client_credentials",
                },
            )

        try:
            data = resp.json()
        except ValueError:
            data = None
        if resp.status_code != 200 or not isinstance(data, dict) or not data.get("access_token"):
            raise UpstreamError(
                f"Twitch OAuth failed ({resp.status_code})",
                upstream_status=resp.status_code,
                details=data,
            )
        return data["access_token"], int(data.get("expires_in") or 0)


token_cache = TwitchTokenCache()


# ── Query building ───────────────────────────────────────────────────────────

def platform_ids(groups: list[str]) -> list[int]:
    ids: list[int] = []
    for key in groups:
        for platform_id in PLATFORM_GROUPS.get(key, []):
            if platform_id not in ids:
                ids.append(platform_id)
    return ids


def build_igdb_query(
    platforms: list[str],
    sort: str,
    range_name: str,
    limit: int,
    offset: int,
    now: float | None = None,
) -> str:
    """Build the Apicalypse body for a games listing."""
    now_sec = int(now if now is not None else time.time())

    where_parts = [
        f"category = ({','.join(str(c) for c in GAME_CATEGORIES)})",
        "name != null",
    ]

    bounds = RANGE_BOUNDS.get(range_name)
    if bounds:
        before, after = bounds
        where_parts.append(f"first_release_date >= {now_sec - before}")
        where_parts.append(f"first_release_date <= {now_sec + after}")

    ids = platform_ids(platforms)
    if ids:
        where_parts.append(f"platforms = ({','.join(str(i) for i in ids)})")

    return "\n".join([
        FIELDS,
        f"where {' & '.join(where_parts)};",
        SORT_CLAUSES.get(sort, SORT_CLAUSES["newest"]),
        f"limit {limit};",
        f"offset {offset};",
    ])


def build_igdb_lookup_query(game_id: int) -> str:
    return "\n".join([FIELDS, f"where id = {int(game_id)};", "limit 1;"])


# ── Normalization ────────────────────────────────────────────────────────────

def normalize_cover_url(url: str | None) -> str | None:
    if not url:
        return None
    with_proto = f"https:{url}" if url.startswith("//") else url
    return with_proto.replace("t_thumb", "t_cover_big")


def _iso_from_unix(seconds) -> str:
    moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _names(items, key: str) -> list[str]:
    if not isinstance(items, list):
        return []
    return [item.get(key) for item in items if isinstance(item, dict) and item.get(key)]


def normalize_game(raw: dict) -> dict:
    """Reshape a raw IGDB game into the camelCase card shape the browser renders."""
    released = raw.get("first_release_date")
    rating = raw.get("rating")
    rating_count = raw.get("rating_count")
    cover = raw.get("cover") if isinstance(raw.get("cover"), dict) else {}

    return {
        "id": raw.get("id"),
        "name": raw.get("name") or "Unknown title",
        "slug": raw.get("slug"),
        "summary": raw.get("summary"),
        "releaseDate": _iso_from_unix(released) if released else None,
        "rating": math.floor(rating + 0.5) if isinstance(rating, (int, float)) else None,
        "ratingCount": rating_count if isinstance(rating_count, (int, float)) else None,
        "coverUrl": normalize_cover_url(cover.get("url")),
        "platforms": _names(raw.get("platforms"), "name"),
        "genres": _names(raw.get("genres"), "name"),
        "websites": _names(raw.get("websites"), "url"),
    }


# ── Requests ─────────────────────────────────────────────────────────────────

async def _post_games(body: str) -> list:
    client_id = _require("IGDB_CLIENT_ID", settings.igdb_client_id)
    token = await token_cache.get_token()

    async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
        resp = await client.post(
            f"{settings.igdb_base_url}/games",
            content=body,
            headers={
                "Client-ID": client_id,
                "Authorization": f"Bearer {token}",
                "Content-Type": "text/plain",
            },
        )

    try:
        data = resp.json()
    except ValueError:
        data = None
    if resp.status_code != 200:
        if resp.status_code == 401:
            token_cache.clear()
        logger.warning("IGDB request failed with status %d", resp.status_code)
        raise UpstreamError("IGDB request failed", upstream_status=resp.status_code, details=data)
    return data if isinstance(data, list) else []


async def fetch_igdb_games(
    platforms: list[str],
    sort: str = "newest",
    range_name: str = "this_week",
    limit: int = 36,
    offset: int = 0,
) -> list[dict]:
    body = build_igdb_query(platforms, sort, range_name, limit, offset)
    return [normalize_game(g) for g in await _post_games(body)]


async def fetch_igdb_game(game_id: int) -> dict | None:
    games = await _post_games(build_igdb_lookup_query(game_id))
    return normalize_game(games[0]) if games else None
