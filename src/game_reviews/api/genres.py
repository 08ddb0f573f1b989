"""Genre API endpoints."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from game_reviews.authorization import require_admin
from game_reviews.config import get_settings
from game_reviews.database import get_db
from game_reviews.errors import NotFoundError, ValidationError
from game_reviews.repositories.games import GameRepository
from game_reviews.repositories.genres import GenreRepository
from game_reviews.repositories.reviews import ReviewRepository
from game_reviews.schemas.game import GameResponse
from game_reviews.schemas.genre import GenreIn, GenreResponse
from game_reviews.schemas.review import ReviewResponse
from game_reviews.utils.security import CurrentIdentity

router = APIRouter(prefix="/genres", tags=["genres"])


def get_genre_repository(db: AsyncSession = Depends(get_db)) -> GenreRepository:
    """Dependency that builds a genre repository for the request."""
    return GenreRepository(db, delete_policy=get_settings().genre_delete_policy)


@router.get("", response_model=list[GenreResponse])
async def list_genres(
    genres: GenreRepository = Depends(get_genre_repository),
) -> list[GenreResponse]:
    """List all genres."""
    return [GenreResponse.model_validate(genre) for genre in await genres.list()]


@router.get("/{genre_id}", response_model=GenreResponse)
async def get_genre(
    genre_id: int,
    genres: GenreRepository = Depends(get_genre_repository),
) -> GenreResponse:
    """Get a single genre."""
    return GenreResponse.model_validate(await genres.get(genre_id))


@router.get("/{genre_id}/games", response_model=list[GameResponse])
async def list_genre_games(
    genre_id: int,
    genres: GenreRepository = Depends(get_genre_repository),
) -> list[GameResponse]:
    """List the games of a genre."""
    return [GameResponse.model_validate(game) for game in await genres.games(genre_id)]


@router.get(
    "/{genre_id}/games/{game_id}/reviews/{review_id}",
    response_model=ReviewResponse,
)
async def get_review_by_game_in_genre(
    genre_id: int,
    game_id: int,
    review_id: int,
    genres: GenreRepository = Depends(get_genre_repository),
    db: AsyncSession = Depends(get_db),
) -> ReviewResponse:
    """Get one review of a game, scoped to the game's genre.

    The game must belong to the genre and the review to the game.
    """
    if genre_id <= 0 or game_id <= 0 or review_id <= 0:
        raise ValidationError("Valid 'genreId', 'gameId', and 'reviewId' must be provided.")

    await genres.get(genre_id)

    game = await GameRepository(db).get(game_id)
    if game.genre_id != genre_id:
        raise NotFoundError("Game not found in this genre.")

    review = await ReviewRepository(db).get(review_id)
    if review.game_id != game_id:
        raise NotFoundError("Review not found for this game.")

    return ReviewResponse.model_validate(review)


@router.post("", response_model=GenreResponse, status_code=201)
async def create_genre(
    identity: CurrentIdentity,
    genre_data: GenreIn,
    genres: GenreRepository = Depends(get_genre_repository),
) -> GenreResponse:
    """Create a genre. Admin only.

    Raises:
        ValidationError 400: If the id is not positive or the name is blank
        ConflictError 409: If the id or name (ignoring case) is taken
    """
    require_admin(identity)
    genre = await genres.create(genre_data.id, genre_data.name)
    return GenreResponse.model_validate(genre)


@router.put("", status_code=204)
async def update_genre(
    identity: CurrentIdentity,
    genre_data: GenreIn,
    genres: GenreRepository = Depends(get_genre_repository),
) -> Response:
    """Rename a genre. Admin only."""
    require_admin(identity)
    await genres.update(genre_data.id, genre_data.name)
    return Response(status_code=204)


@router.delete("/{genre_id}", status_code=204)
async def delete_genre(
    genre_id: int,
    identity: CurrentIdentity,
    genres: GenreRepository = Depends(get_genre_repository),
) -> Response:
    """Delete a genre. Admin only.

    A genre that still has games is either refused with 409 or deleted with
    its games, depending on the configured policy.
    """
    require_admin(identity)
    await genres.delete(genre_id)
    return Response(status_code=204)
