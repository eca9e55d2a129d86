"""Deployment diagnostics (public, no upstream calls)."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from gamerly.config import settings

router = APIRouter(prefix="/api", tags=["diagnostics"])

VERSION = "0.1.0"


@router.get("/test-env")
async def test_env():
    """Report whether the RAWG key is configured without revealing it."""
    if settings.rawg_key:
        return {"status": "RAWG_KEY found", "length": len(settings.rawg_key)}
    return JSONResponse(status_code=500, content={"status": "RAWG_KEY missing"})


@router.get("/health")
async def health():
    return {"status": "ok", "version": VERSION}
