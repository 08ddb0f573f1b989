"""Pydantic schemas for genre API endpoints."""

from pydantic import Field

from game_reviews.identity import INT32_MAX
from game_reviews.schemas.common import CamelModel


class GenreIn(CamelModel):
    """Request body for creating or replacing a genre."""

    id: int = Field(le=INT32_MAX, description="Genre ID (positive, chosen by the caller)")
    name: str = Field(description="Genre name, unique ignoring case")


class GenreResponse(CamelModel):
    """Genre as returned by the API."""

    id: int = Field(description="Genre ID")
    name: str = Field(description="Genre name")
