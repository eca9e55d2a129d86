"""Pydantic models for list filtering."""

from pydantic import BaseModel, Field


class TimeFilterState(BaseModel):
    """Which list the visitor is on and how far around today it reaches."""

    section: str = "out-now"  # out-now | coming-soon
    time_filter: str = Field("all", alias="timeFilter")  # all | today | week | month

    model_config = {"populate_by_name": True}
