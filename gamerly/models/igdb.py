"""Pydantic models for normalized IGDB listings."""

from pydantic import BaseModel, Field


class IgdbGame(BaseModel):
    id: int | None = None
    name: str
    slug: str | None = None
    summary: str | None = None
    release_date: str | None = Field(None, alias="releaseDate")
    rating: int | None = None
    rating_count: int | None = Field(None, alias="ratingCount")
    cover_url: str | None = Field(None, alias="coverUrl")
    platforms: list[str] = []
    genres: list[str] = []
    websites: list[str] = []

    model_config = {"populate_by_name": True}


class IgdbMeta(BaseModel):
    platforms: list[str]
    sort: str
    range: str
    limit: int
    offset: int
    count: int
    section: str | None = None
    time_filter: str | None = Field(None, alias="timeFilter")

    model_config = {"populate_by_name": True}


class IgdbListResponse(BaseModel):
    ok: bool = True
    meta: IgdbMeta
    games: list[IgdbGame]
