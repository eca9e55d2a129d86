"""Pydantic models for RAWG game listings."""

from pydantic import BaseModel


class GameListResponse(BaseModel):
    count: int
    results: list[dict]
