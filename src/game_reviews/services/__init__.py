"""Business logic spanning repositories."""

from game_reviews.services.auth import AuthResult, AuthService
from game_reviews.services.reviews import ReviewService

__all__ = [
    "AuthResult",
    "AuthService",
    "ReviewService",
]
