"""API route modules."""

from game_reviews.api.router import api_router

__all__ = ["api_router"]
