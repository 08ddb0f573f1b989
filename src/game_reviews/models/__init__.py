"""SQLAlchemy ORM models."""

from game_reviews.models.game import Game
from game_reviews.models.genre import Genre
from game_reviews.models.review import Review
from game_reviews.models.user import User

__all__ = [
    "Game",
    "Genre",
    "Review",
    "User",
]
