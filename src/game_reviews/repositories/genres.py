"""Genre storage and validation."""

import logging
from collections.abc import Sequence

from sqlalchemy import delete, func, select

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


class GenreRepository(Repository):
    """CRUD for genres.

    Genre names are unique ignoring case. What happens to a genre's games on
    delete is decided by ``delete_policy``: ``"reject"`` refuses to delete a
    genre that still has games, ``"cascade"`` removes the games (and their
    reviews) along with it.
    """

    model = Genre

    def __init__(self, session, delete_policy: str = "reject") -> None:
        super().__init__(session)
        self.delete_policy = delete_policy

    async def list(self) -> Sequence[Genre]:
        result = await self.session.execute(select(Genre).order_by(Genre.id))
        return result.scalars().all()

    async def get(self, genre_id: int) -> Genre:
        require_positive(genre_id, "A valid 'Id' must be provided.")
        genre = await self.session.get(Genre, genre_id)
        if genre is None:
            raise NotFoundError(f"No genre found with ID {genre_id}.")
        return genre

    async def games(self, genre_id: int) -> Sequence[Game]:
        """Games that belong to an existing genre."""
        await self.get(genre_id)
        result = await self.session.execute(
            select(Game).where(Game.genre_id == genre_id).order_by(Game.id)
        )
        return result.scalars().all()

    async def find_by_name(self, name: str, exclude_id: int | None = None) -> Genre | None:
        """Find a genre whose name matches ``name`` ignoring case."""
        query = select(Genre).where(func.lower(Genre.name) == name.lower())
        if exclude_id is not None:
            query = query.where(Genre.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def create(self, genre_id: int, name: str) -> Genre:
        require_positive(genre_id, "A valid 'Id' must be provided.")
        require_text(name, "Genre 'Name' cannot be empty.")

        if await self.exists(genre_id):
            raise ConflictError(f"A genre with the ID '{genre_id}' already exists.")

        if await self.find_by_name(name) is not None:
            raise ConflictError(f"A genre with the name '{name}' already exists.")

        genre = Genre(id=genre_id, name=name)
        self.session.add(genre)
        if await self._flush() is WriteOutcome.CONFLICT:
            raise ConflictError("A genre with this ID or name already exists.")

        logger.info("Created genre %d (%s)", genre.id, genre.name)
        return genre

    async def update(self, genre_id: int, name: str) -> Genre:
        require_positive(genre_id, "A valid 'Id' must be provided.")
        genre = await self.session.get(Genre, genre_id)
        if genre is None:
            raise NotFoundError("Genre not found.")

        require_text(name, "Genre 'Name' cannot be empty.")
        if await self.find_by_name(name, exclude_id=genre_id) is not None:
            raise ConflictError(f"A genre with the name '{name}' already exists.")

        genre.name = name
        if await self._flush() is WriteOutcome.CONFLICT:
            raise ConflictError(f"A genre with the name '{name}' already exists.")
        return genre

    async def delete(self, genre_id: int) -> None:
        require_positive(genre_id, "A valid 'Id' must be provided.")
        genre = await self.session.get(Genre, genre_id)
        if genre is None:
            raise NotFoundError("Genre not found.")

        game_ids = (
            (await self.session.execute(select(Game.id).where(Game.genre_id == genre_id)))
            .scalars()
            .all()
        )
        if game_ids:
            if self.delete_policy != "cascade":
                raise ConflictError(
                    f"Genre {genre_id} still has {len(game_ids)} game(s); "
                    "delete or move them first."
                )
            await self.session.execute(delete(Review).where(Review.game_id.in_(game_ids)))
            await self.session.execute(delete(Game).where(Game.id.in_(game_ids)))
            logger.info("Cascading delete of genre %d removed %d game(s)", genre_id, len(game_ids))

        await self.session.delete(genre)
        if await self._flush() is WriteOutcome.CONFLICT:
            raise ConflictError("A database constraint prevented deleting this genre.")
