"""RAWG game routes: filtered listing, legacy passthrough listing, game detail."""

import logging

import httpx
from fastapi import APIRouter

from gamerly.errors import BadRequestError, GamerlyError, UpstreamError
from gamerly.models.game import GameListResponse
from gamerly.services import games_service, rawg_client
from gamerly.services.games_service import API_PROFILE, LEGACY_PROFILE, MAX_PAGE_SIZE, ListingQuery
from gamerly.services.query_params import clamp_int

logger = logging.getLogger(__name__)

router = APIRouter(tags=["games"])


@router.get("/api/games", response_model=GameListResponse)
async def list_games(
    platform: str | None = None,
    ordering: str | None = None,
    sort: str | None = None,
    dates: str | None = None,
    range: str | None = None,
    kid_safe: bool = False,
    page_size: str | None = None,
):
    """Released, filtered RAWG listing; falls back to trending titles when empty."""
    query = ListingQuery(
        platform=platform,
        ordering=ordering or sort,
        dates=dates,
        range=range,
        kid_safe=kid_safe,
        page_size=clamp_int(page_size, MAX_PAGE_SIZE, 1, MAX_PAGE_SIZE),
    )
    rawg_client.require_rawg_key()
    try:
        return await games_service.list_games(query, API_PROFILE)
    except (UpstreamError, httpx.HTTPError) as e:
        logger.error("RAWG fetch error: %s", e)
        raise GamerlyError("Server error fetching games")


@router.get("/games")
async def list_games_legacy(
    platform: str | None = None,
    sort: str | None = None,
    start: str | None = None,
    end: str | None = None,
):
    """Unfiltered RAWG listing kept for older clients; relays the upstream JSON."""
    dates = f"{start},{end or ''}" if start else None
    query = ListingQuery(platform=platform, ordering=sort, dates=dates)
    rawg_client.require_rawg_key()
    try:
        return await games_service.list_games(query, LEGACY_PROFILE)
    except (UpstreamError, httpx.HTTPError) as e:
        logger.error("Legacy RAWG fetch error: %s", e)
        raise GamerlyError("Failed to fetch games")


@router.get("/api/game")
async def get_game(slug: str | None = None):
    """Full RAWG game detail with its screenshots merged in."""
    rawg_client.require_rawg_key()
    if not slug:
        raise BadRequestError("Missing slug parameter")

    try:
        return await rawg_client.fetch_game_detail(slug)
    except UpstreamError as e:
        raise GamerlyError("RAWG fetch failed", status_code=e.upstream_status if (e.upstream_status or 0) >= 400 else 500)
    except httpx.HTTPError as e:
        logger.error("Server error in /api/game: %s", e)
        raise GamerlyError("Internal server error.")
