"""Game storage and validation."""

import logging
from collections.abc import Sequence

from sqlalchemy import delete, select

from game_reviews.errors import ConflictError, NotFoundError
from game_reviews.models.game import Game
from game_reviews.models.genre import Genre
from game_reviews.models.review import Review
from game_reviews.repositories.base import (
    Repository,
    WriteOutcome,
    require_positive,
    require_text,
)

logger = logging.getLogger(__name__)


class GameRepository(Repository):
    """CRUD for games.

    ``id_assignment`` selects who picks a new game's id: ``"client"``
    requires a positive id in every create request, ``"server"`` assigns the
    next free id when the request does not supply a positive one.
    """

    model = Game

    def __init__(self, session, id_assignment: str = "client") -> None:
        super().__init__(session)
        self.id_assignment = id_assignment

    async def list(self) -> Sequence[Game]:
        result = await self.session.execute(select(Game).order_by(Game.id))
        return result.scalars().all()

    async def get(self, game_id: int) -> Game:
        require_positive(game_id, "A valid game ID must be provided.")
        game = await self.session.get(Game, game_id)
        if game is None:
            raise NotFoundError(f"No game found with ID {game_id}.")
        return game

    async def _require_genre(self, genre_id: int) -> None:
        require_positive(genre_id, "GenreId must be specified.")
        if await self.session.get(Genre, genre_id) is None:
            raise NotFoundError(f"No genre found with ID {genre_id}.")

    async def create(
        self,
        game_id: int | None,
        title: str,
        genre_id: int,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Game:
        if self.id_assignment == "server" and (game_id is None or game_id <= 0):
            game_id = await self._next_id()
        require_positive(game_id, "A valid 'Id' field must be provided.")
        require_text(title, "Title cannot be empty.")
        await self._require_genre(genre_id)

        if await self.exists(game_id):
            raise ConflictError(f"A game with the ID '{game_id}' already exists.")

        game = Game(
            id=game_id,
            title=title,
            description=description,
            image_url=image_url,
            genre_id=genre_id,
        )
        self.session.add(game)
        if await self._flush() is WriteOutcome.CONFLICT:
            raise ConflictError("A game with this ID already exists in the database.")

        logger.info("Created game %d (%s)", game.id, game.title)
        return game

    async def update(
        self,
        game_id: int,
        title: str,
        genre_id: int,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Game:
        require_positive(game_id, "Game Id is required.")
        game = await self.session.get(Game, game_id)
        if game is None:
            raise NotFoundError(f"No game found with ID {game_id}.")

        require_text(title, "Title cannot be empty.")
        await self._require_genre(genre_id)

        game.title = title
        game.description = description
        game.image_url = image_url
        game.genre_id = genre_id
        if await self._flush() is WriteOutcome.CONFLICT:
            raise ConflictError("A database constraint prevented updating this game.")
        return game

    async def delete(self, game_id: int) -> None:
        """Delete a game together with its reviews."""
        game = await self.get(game_id)
        await self.session.execute(delete(Review).where(Review.game_id == game_id))
        await self.session.delete(game)
        if await self._flush() is WriteOutcome.CONFLICT:
            raise ConflictError("A database constraint prevented deleting this game.")
