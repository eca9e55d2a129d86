"""Gamerly FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gamerly.config import settings
from gamerly.errors import GamerlyError
from gamerly.routers import diagnostics, games, igdb, sitemap

# Configure logging so our INFO messages appear in container logs
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
# Keep noisy libraries at WARNING
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Report missing upstream credentials at startup."""
    if not settings.rawg_key:
        logger.warning("RAWG_KEY is not set; RAWG endpoints will answer 500.")
    if not settings.has_igdb_credentials:
        logger.warning(
            "IGDB_CLIENT_ID / IGDB_CLIENT_SECRET are not set; "
            "/api/igdb and /api/sitemap will fail."
        )
    yield


app = FastAPI(
    title="Gamerly",
    description="Video game release listings proxied from RAWG and IGDB",
    version=diagnostics.VERSION,
    lifespan=lifespan,
)

# CORS: localhost defaults plus any extra origins from GAMERLY_CORS_ORIGINS
_cors_origins = ["http://localhost:3000", "http://localhost:5173"]
if settings.cors_origins:
    _cors_origins.extend(o.strip() for o in settings.cors_origins.split(",") if o.strip())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(GamerlyError)
async def gamerly_error_handler(request: Request, exc: GamerlyError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    body = {"error": exc.message}
    if exc.details is not None:
        body["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Server error in %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# API routers
app.include_router(games.router)
app.include_router(igdb.router)
app.include_router(sitemap.router)
app.include_router(diagnostics.router)
