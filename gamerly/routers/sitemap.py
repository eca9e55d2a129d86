"""Sitemap route built from the current IGDB listing."""

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, Response

from gamerly.config import settings
from gamerly.services import igdb_service
from gamerly.services.sitemap_service import render_sitemap

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sitemap"])


@router.get("/api/sitemap")
async def sitemap():
    try:
        games = await igdb_service.fetch_igdb_games([])
    except Exception as e:
        logger.error("Sitemap generation failed: %s", e)
        return PlainTextResponse("Sitemap generation failed", status_code=500)

    return Response(content=render_sitemap(games, settings.site_url), media_type="application/xml")
