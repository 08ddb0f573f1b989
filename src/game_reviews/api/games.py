"""Game API endpoints."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from game_reviews.authorization import Identity, require_admin
from game_reviews.config import get_settings
from game_reviews.database import get_db
from game_reviews.errors import UnauthenticatedError
from game_reviews.repositories.games import GameRepository
from game_reviews.schemas.game import GameIn, GameResponse
from game_reviews.utils.security import OptionalIdentity

router = APIRouter(prefix="/games", tags=["games"])


def get_game_repository(db: AsyncSession = Depends(get_db)) -> GameRepository:
    """Dependency that builds a game repository for the request."""
    return GameRepository(db, id_assignment=get_settings().game_id_assignment)


def authorize_game_mutation(identity: Identity | None) -> None:
    """Admin-only unless game mutations are configured to be open to anyone."""
    if not get_settings().game_mutations_require_admin:
        return
    if identity is None:
        raise UnauthenticatedError("Not authenticated.")
    require_admin(identity)


@router.get("", response_model=list[GameResponse])
async def list_games(
    games: GameRepository = Depends(get_game_repository),
) -> list[GameResponse]:
    """List all games."""
    return [GameResponse.model_validate(game) for game in await games.list()]


@router.get("/{game_id}", response_model=GameResponse)
async def get_game(
    game_id: int,
    games: GameRepository = Depends(get_game_repository),
) -> GameResponse:
    """Get a single game."""
    return GameResponse.model_validate(await games.get(game_id))


@router.post("", response_model=GameResponse, status_code=201)
async def create_game(
    identity: OptionalIdentity,
    game_data: GameIn,
    games: GameRepository = Depends(get_game_repository),
) -> GameResponse:
    """Create a game.

    Raises:
        ValidationError 400: If the id, title or genre id is invalid
        NotFoundError 404: If the genre does not exist
        ConflictError 409: If the id is taken
    """
    authorize_game_mutation(identity)
    game = await games.create(
        game_data.id,
        title=game_data.title,
        genre_id=game_data.genre_id,
        description=game_data.description,
        image_url=game_data.image_url,
    )
    return GameResponse.model_validate(game)


@router.put("", status_code=204)
async def update_game(
    identity: OptionalIdentity,
    game_data: GameIn,
    games: GameRepository = Depends(get_game_repository),
) -> Response:
    """Replace a game's title, description, image and genre."""
    authorize_game_mutation(identity)
    await games.update(
        game_data.id,
        title=game_data.title,
        genre_id=game_data.genre_id,
        description=game_data.description,
        image_url=game_data.image_url,
    )
    return Response(status_code=204)


@router.delete("/{game_id}", status_code=204)
async def delete_game(
    game_id: int,
    identity: OptionalIdentity,
    games: GameRepository = Depends(get_game_repository),
) -> Response:
    """Delete a game and its reviews."""
    authorize_game_mutation(identity)
    await games.delete(game_id)
    return Response(status_code=204)
