"""Per-request repositories, one per table."""

from game_reviews.repositories.base import Repository, WriteOutcome
from game_reviews.repositories.games import GameRepository
from game_reviews.repositories.genres import GenreRepository
from game_reviews.repositories.reviews import ReviewRepository
from game_reviews.repositories.users import UserRepository

__all__ = [
    "GameRepository",
    "GenreRepository",
    "Repository",
    "ReviewRepository",
    "UserRepository",
    "WriteOutcome",
]
