"""IGDB routes: normalized game listings and single-game lookup."""

import logging

import httpx
from fastapi import APIRouter, Query, Response

from gamerly.errors import BadRequestError, GamerlyError, UpstreamError
from gamerly.models.filters import TimeFilterState
from gamerly.models.igdb import IgdbGame, IgdbListResponse
from gamerly.services import igdb_service
from gamerly.services.filters import apply_time_filter
from gamerly.services.query_params import clamp_int, parse_comma_list
from gamerly.services.slugs import parse_game_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/igdb", tags=["igdb"])

LIST_CACHE_CONTROL = "s-maxage=60, stale-while-revalidate=300"


def _relay_upstream(e: UpstreamError) -> GamerlyError:
    status = e.upstream_status if (e.upstream_status or 0) >= 400 else 500
    return GamerlyError(e.message, status_code=status, details=e.details)


@router.get("", response_model=IgdbListResponse)
async def list_igdb_games(
    response: Response,
    platforms: str | None = None,
    sort: str = "newest",
    range: str = "this_week",
    limit: str | None = None,
    offset: str | None = None,
    section: str | None = None,
    time_filter: str = Query("all", alias="timeFilter"),
):
    """List IGDB games, optionally narrowed to an out-now / coming-soon window.

    ``platforms`` is a comma list of groups (pc, playstation, xbox, nintendo,
    ios, android); ``sort`` is newest | highest_rated | az; ``range`` is
    this_week | past_3_months | all_time.
    """
    groups = parse_comma_list(platforms)
    limit_value = clamp_int(limit, 36, 1, 100)
    offset_value = clamp_int(offset, 0, 0)

    try:
        games = await igdb_service.fetch_igdb_games(groups, sort, range, limit_value, offset_value)
    except UpstreamError as e:
        raise _relay_upstream(e)
    except httpx.HTTPError as e:
        logger.error("IGDB request error: %s", e)
        raise GamerlyError(str(e) or "Unknown server error")

    if section:
        games = apply_time_filter(games, TimeFilterState(section=section, time_filter=time_filter))

    response.headers["Cache-Control"] = LIST_CACHE_CONTROL
    return {
        "ok": True,
        "meta": {
            "platforms": groups,
            "sort": sort,
            "range": range,
            "limit": limit_value,
            "offset": offset_value,
            "count": len(games),
            "section": section,
            "timeFilter": time_filter if section else None,
        },
        "games": games,
    }


@router.get("/game/{ref}", response_model=IgdbGame)
async def get_igdb_game(ref: str):
    """Look up one game by a detail-page reference such as ``1942-the-witcher-3``."""
    game_id = parse_game_id(f"/game/{ref}")
    if game_id is None:
        raise BadRequestError("Invalid game reference")

    try:
        game = await igdb_service.fetch_igdb_game(int(game_id))
    except UpstreamError as e:
        raise _relay_upstream(e)

    if game is None:
        raise GamerlyError("Game not found", status_code=404)
    return game
