"""RAWG listing pipeline shared by ``/api/games`` and the legacy ``/games`` route.

Both routes resolve a date window, build the same upstream query and differ
only in their ``ListingProfile``: page size, whether the answer is
post-filtered, and whether an empty result triggers the trending fallback.
"""

import logging
from dataclasses import dataclass, field
from datetime import date

from gamerly.services import rawg_client
from gamerly.services.date_ranges import format_dates_param, resolve_date_range, trending_dates
from gamerly.services.filters import filter_results, is_kid_safe

logger = logging.getLogger(__name__)

DEFAULT_ORDERING = "-released"
TRENDING_ORDERING = "-added"

# RAWG caps page_size at 40
MAX_PAGE_SIZE = 40


@dataclass(frozen=True)
class ListingProfile:
    name: str
    page_size: int
    post_filter: bool = False
    fallback: bool = False
    extra_params: dict = field(default_factory=dict)


API_PROFILE = ListingProfile(
    name="api",
    page_size=MAX_PAGE_SIZE,
    post_filter=True,
    fallback=True,
    extra_params={"exclude_additions": "true"},
)

LEGACY_PROFILE = ListingProfile(name="legacy", page_size=50)


@dataclass
class ListingQuery:
    platform: str | None = None
    ordering: str | None = None
    dates: str | None = None
    range: str | None = None
    kid_safe: bool = False
    page_size: int | None = None


def build_listing_params(profile: ListingProfile, query: ListingQuery, today: date | None = None) -> dict:
    """Build the RAWG ``/games`` query (without the API key)."""
    start, end = resolve_date_range(query.dates, query.range, today)
    params = {
        "dates": format_dates_param(start, end),
        "ordering": query.ordering or DEFAULT_ORDERING,
        "page_size": query.page_size or profile.page_size,
        **profile.extra_params,
    }
    if query.platform:
        params["platforms"] = query.platform
    return params


def build_trending_params(profile: ListingProfile, today: date | None = None) -> dict:
    return {
        "dates": trending_dates(today),
        "ordering": TRENDING_ORDERING,
        "page_size": profile.page_size,
        **profile.extra_params,
    }


async def list_games(
    query: ListingQuery,
    profile: ListingProfile = API_PROFILE,
    today: date | None = None,
) -> dict:
    """Fetch a listing from RAWG and apply the profile's policy.

    Unfiltered profiles relay the upstream JSON as-is. Filtered profiles
    return ``{count, results}``; when nothing survives the filter, one
    trending request (``ordering=-added`` since 2024-01-01) supplies the list.
    The fallback skips the date and banned-term checks; only a requested
    kid-safe screen still applies.
    """
    today = today or date.today()
    params = build_listing_params(profile, query, today)
    logger.info("RAWG %s listing: dates=%s ordering=%s", profile.name, params["dates"], params["ordering"])

    data = await rawg_client.fetch_games(params)
    if not profile.post_filter:
        return data

    results = filter_results(data.get("results") or [], today)
    if query.kid_safe:
        results = [g for g in results if is_kid_safe(g)]

    if not results and profile.fallback:
        logger.info("No qualifying results for dates=%s, falling back to trending titles", params["dates"])
        trending = await rawg_client.fetch_games(build_trending_params(profile, today))
        results = trending.get("results") or []
        if query.kid_safe:
            results = [g for g in results if is_kid_safe(g)]

    return {"count": len(results), "results": results}
