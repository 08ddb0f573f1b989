"""Pydantic schemas for request/response validation."""

from game_reviews.schemas.auth import AuthResponse, Credentials, IdentityResponse
from game_reviews.schemas.common import CamelModel
from game_reviews.schemas.game import GameIn, GameResponse
from game_reviews.schemas.genre import GenreIn, GenreResponse
from game_reviews.schemas.review import ReviewIn, ReviewListItem, ReviewResponse

__all__ = [
    "CamelModel",
    # Auth schemas
    "Credentials",
    "AuthResponse",
    "IdentityResponse",
    # Catalog schemas
    "GenreIn",
    "GenreResponse",
    "GameIn",
    "GameResponse",
    # Review schemas
    "ReviewIn",
    "ReviewResponse",
    "ReviewListItem",
]
