"""Review storage with the one-review-per-user-per-game rule."""

from collections.abc import Sequence

from sqlalchemy import select

from game_reviews.errors import ConflictError, NotFoundError
from game_reviews.models.review import Review
from game_reviews.repositories.base import Repository, WriteOutcome, require_positive

DUPLICATE_REVIEW_MESSAGE = (
    "You can only post one review per game. You already have a review for this game."
)


class ReviewRepository(Repository):
    model = Review

    async def list(self, game_id: int | None = None) -> Sequence[Review]:
        query = select(Review).order_by(Review.id)
        if game_id is not None:
            query = query.where(Review.game_id == game_id)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get(self, review_id: int) -> Review:
        require_positive(review_id, "A valid review ID must be provided.")
        review = await self.session.get(Review, review_id)
        if review is None:
            raise NotFoundError(f"No review found with ID {review_id}.")
        return review

    async def find_for_pair(
        self, user_id: int, game_id: int, exclude_id: int | None = None
    ) -> Review | None:
        """The review ``user_id`` wrote for ``game_id``, if any.

        Pending edits are not flushed by this lookup; constraint violations
        must come out of ``_flush`` where they are turned into conflicts.
        """
        query = select(Review).where(Review.user_id == user_id, Review.game_id == game_id)
        if exclude_id is not None:
            query = query.where(Review.id != exclude_id)
        with self.session.no_autoflush:
            result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def next_id(self) -> int:
        return await self._next_id()

    async def add(self, review: Review) -> Review:
        """Insert a new review.

        Raises:
            ConflictError: If the id is taken or the user already reviewed the game
        """
        if await self.exists(review.id):
            raise ConflictError(f"A review with the ID '{review.id}' already exists.")

        if await self.find_for_pair(review.user_id, review.game_id) is not None:
            raise ConflictError(DUPLICATE_REVIEW_MESSAGE)

        self.session.add(review)
        if await self._flush() is WriteOutcome.CONFLICT:
            raise ConflictError("A review with this ID or for this game already exists.")
        return review

    async def save(self, review: Review) -> Review:
        """Persist changes made to a loaded review."""
        if await self.find_for_pair(review.user_id, review.game_id, exclude_id=review.id):
            raise ConflictError("That user already has a review for this game.")

        if await self._flush() is WriteOutcome.CONFLICT:
            raise ConflictError("A database constraint prevented updating this review.")
        return review

    async def delete(self, review: Review) -> None:
        await self.session.delete(review)
        if await self._flush() is WriteOutcome.CONFLICT:
            raise ConflictError("A database constraint prevented deleting this review.")
