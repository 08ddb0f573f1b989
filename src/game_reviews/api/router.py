"""Main API router aggregation."""

from fastapi import APIRouter

from game_reviews.api.auth import router as auth_router
from game_reviews.api.games import router as games_router
from game_reviews.api.genres import router as genres_router
from game_reviews.api.reviews import router as reviews_router

# Main API router
api_router = APIRouter(prefix="/api")

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(genres_router)
api_router.include_router(games_router)
api_router.include_router(reviews_router)
