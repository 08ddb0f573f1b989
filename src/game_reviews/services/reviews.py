"""Review operations with ownership and uniqueness enforcement.

Every review belongs to the numeric identity of the user who wrote it.
Regular users can only write reviews as themselves and only touch their own
reviews; administrators can act on any review and attribute reviews to
other users. A user has at most one review per game.
"""

import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from game_reviews.authorization import (
    Identity,
    Role,
    ensure_can_modify,
    is_owner,
    require_role,
    resolve_owner,
)
from game_reviews.errors import NotFoundError, ValidationError
from game_reviews.models.review import Review
from game_reviews.repositories.base import require_positive, require_text
from game_reviews.repositories.games import GameRepository
from game_reviews.repositories.reviews import ReviewRepository

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def validate_review_fields(rating: int, comment: str | None, game_id: int) -> None:
    """Field rules shared by create and update, for every role."""
    if rating is None or not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}.")
    require_text(comment, "Comment cannot be empty.")
    require_positive(game_id, "A valid 'GameId' must be provided.")


class ReviewService:
    """Review use cases for one request."""

    def __init__(self, session: AsyncSession) -> None:
        self.reviews = ReviewRepository(session)
        self.games = GameRepository(session)

    async def _require_game(self, game_id: int) -> None:
        if not await self.games.exists(game_id):
            raise NotFoundError(f"No game found with ID {game_id}.")

    async def list(
        self, identity: Identity | None, game_id: int | None = None
    ) -> Sequence[tuple[Review, bool]]:
        """Reviews, optionally for one game, each paired with an is-owner flag."""
        if game_id is not None:
            require_positive(game_id, "A valid 'gameId' must be provided.")
        reviews = await self.reviews.list(game_id=game_id)
        return [(review, is_owner(identity, review.user_id)) for review in reviews]

    async def get(self, review_id: int) -> Review:
        return await self.reviews.get(review_id)

    async def create(
        self,
        identity: Identity,
        rating: int,
        comment: str,
        game_id: int,
        review_id: int | None = None,
        user_id: int | None = None,
    ) -> Review:
        """Create a review owned by the caller (or, for admins, by ``user_id``)."""
        require_role(identity, Role.USER, Role.ADMIN)
        validate_review_fields(rating, comment, game_id)
        await self._require_game(game_id)

        owner_id = resolve_owner(identity, user_id)
        if review_id is None or review_id <= 0:
            review_id = await self.reviews.next_id()

        review = Review(
            id=review_id,
            rating=rating,
            comment=comment,
            game_id=game_id,
            user_id=owner_id,
        )
        await self.reviews.add(review)
        logger.info(
            "User %s created review %d for game %d", identity.username, review.id, game_id
        )
        return review

    async def update(
        self,
        identity: Identity,
        review_id: int,
        rating: int,
        comment: str,
        game_id: int,
        user_id: int | None = None,
    ) -> Review:
        """Replace a review's rating, comment and game.

        Only the owner or an administrator may edit. Administrators may also
        hand the review to another user by passing a positive ``user_id``.
        """
        require_role(identity, Role.USER, Role.ADMIN)
        require_positive(review_id, "A valid 'Id' must be provided.")
        validate_review_fields(rating, comment, game_id)

        review = await self.reviews.get(review_id)
        ensure_can_modify(identity, review.user_id, "You can only edit your own reviews.")
        await self._require_game(game_id)

        review.rating = rating
        review.comment = comment
        review.game_id = game_id
        if identity.is_admin and user_id is not None and user_id > 0:
            review.user_id = user_id

        return await self.reviews.save(review)

    async def delete(self, identity: Identity, review_id: int) -> None:
        require_role(identity, Role.USER, Role.ADMIN)
        review = await self.reviews.get(review_id)
        ensure_can_modify(
            identity,
            review.user_id,
            "You can only delete your own reviews. Admins can delete any review.",
        )
        await self.reviews.delete(review)
        logger.info("User %s deleted review %d", identity.username, review_id)
