"""Pydantic schemas for game API endpoints."""

from pydantic import Field

from game_reviews.identity import INT32_MAX
from game_reviews.schemas.common import CamelModel


class GameIn(CamelModel):
    """Request body for creating or replacing a game."""

    id: int = Field(
        default=0, le=INT32_MAX, description="Game ID; may be omitted when ids are server assigned"
    )
    title: str = Field(description="Game title")
    description: str | None = Field(default=None, description="Optional description")
    image_url: str | None = Field(default=None, description="Optional cover image URL")
    genre_id: int = Field(le=INT32_MAX, description="ID of an existing genre")


class GameResponse(CamelModel):
    """Game as returned by the API."""

    id: int = Field(description="Game ID")
    title: str = Field(description="Game title")
    description: str | None = Field(default=None, description="Description")
    image_url: str | None = Field(default=None, description="Cover image URL")
    genre_id: int = Field(description="Genre ID")
