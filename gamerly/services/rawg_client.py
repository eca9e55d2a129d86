"""RAWG API access: game listings, game detail and screenshots.

Every call is a fresh, uncached request; RAWG answers are relayed as parsed
JSON without reshaping.
"""

import asyncio
import logging
import re
from urllib.parse import quote

import httpx

from gamerly.config import settings
from gamerly.errors import MissingConfigError, UpstreamError

logger = logging.getLogger(__name__)

EXCESS_NEWLINES = re.compile(r"\n{3,}")
NON_ASCII = re.compile(r"[^\x00-\x7f]")


def require_rawg_key() -> str:
    if not settings.rawg_key:
        raise MissingConfigError("Missing RAWG_KEY")
    return settings.rawg_key


def _headers() -> dict:
    return {
        "Accept": "application/json",
        "User-Agent": settings.user_agent,
        "Cache-Control": "no-store",
    }


def _json_or_none(resp: httpx.Response):
    try:
        return resp.json()
    except ValueError:
        return None


# ── Listings ─────────────────────────────────────────────────────────────────

async def fetch_games(params: dict) -> dict:
    """GET /games with ``params``; raises ``UpstreamError`` on a non-OK answer."""
    key = require_rawg_key()

    async with httpx.AsyncClient(timeout=settings.http_timeout, headers=_headers()) as client:
        resp = await client.get(f"{settings.rawg_base_url}/games", params={**params, "key": key})

    data = _json_or_none(resp)
    if resp.status_code != 200 or not isinstance(data, dict):
        logger.warning("RAWG listing failed with status %d", resp.status_code)
        raise UpstreamError(f"RAWG error {resp.status_code}", upstream_status=resp.status_code, details=data)
    return data


# ── Game detail ──────────────────────────────────────────────────────────────

async def fetch_game_detail(slug: str) -> dict:
    """Fetch a game and its screenshots concurrently and merge them.

    The detail answer decides success; a failed screenshot call (error
    status or transport error) just leaves ``screenshots`` empty.
    """
    key = require_rawg_key()
    base = f"{settings.rawg_base_url}/games/{quote(slug, safe='')}"

    async with httpx.AsyncClient(timeout=settings.http_timeout, headers=_headers()) as client:
        main_resp, shots_resp = await asyncio.gather(
            client.get(base, params={"key": key}),
            client.get(f"{base}/screenshots", params={"key": key}),
            return_exceptions=True,
        )

    if isinstance(main_resp, BaseException):
        raise main_resp
    if isinstance(shots_resp, httpx.HTTPError):
        logger.warning("RAWG screenshots for %s failed: %s", slug, shots_resp)
        shots_resp = None
    elif isinstance(shots_resp, BaseException):
        raise shots_resp

    data = _json_or_none(main_resp)
    if main_resp.status_code != 200 or not isinstance(data, dict):
        logger.error("RAWG detail for %s failed with status %d: %s", slug, main_resp.status_code, data)
        raise UpstreamError("RAWG fetch failed", upstream_status=main_resp.status_code, details=data)

    shots = _json_or_none(shots_resp) if shots_resp is not None and shots_resp.status_code == 200 else None
    results = shots.get("results") if isinstance(shots, dict) else None
    merged = {**data, "screenshots": results if isinstance(results, list) else []}

    description = merged.get("description_raw")
    if description:
        description = EXCESS_NEWLINES.sub("\n\n", description)
        merged["description_raw"] = await translate_to_english(description)

    return merged


async def translate_to_english(text: str) -> str:
    """Translate non-ASCII text through the configured LibreTranslate endpoint.

    Returns ``text`` unchanged when no endpoint is configured, the text is
    plain ASCII, or the translation call fails.
    """
    if not settings.translate_url or not NON_ASCII.search(text):
        return text

    try:
        async with httpx.AsyncClient(timeout=settings.http_timeout) as client:
            resp = await client.post(
                settings.translate_url,
                json={"q": text, "source": "auto", "target": "en", "format": "text"},
            )
        payload = _json_or_none(resp)
        if isinstance(payload, dict) and payload.get("translatedText"):
            return payload["translatedText"]
    except httpx.HTTPError as e:
        logger.warning("Translate API failed: %s", e)
    return text
