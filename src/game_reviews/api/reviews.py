"""Review API endpoints."""

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from game_reviews.database import get_db
from game_reviews.models.review import Review
from game_reviews.schemas.review import ReviewIn, ReviewListItem, ReviewResponse
from game_reviews.services.reviews import ReviewService
from game_reviews.utils.security import CurrentIdentity, OptionalIdentity

router = APIRouter(prefix="/reviews", tags=["reviews"])


def get_review_service(db: AsyncSession = Depends(get_db)) -> ReviewService:
    """Dependency that builds the review service for the request."""
    return ReviewService(db)


def review_to_list_item(review: Review, is_owner: bool) -> ReviewListItem:
    """Convert a Review model to a listing entry."""
    return ReviewListItem(
        id=review.id,
        rating=review.rating,
        comment=review.comment,
        game_id=review.game_id,
        user_id=review.user_id,
        is_owner=is_owner,
    )


@router.get("", response_model=list[ReviewListItem])
async def list_reviews(
    identity: OptionalIdentity,
    game_id: int | None = Query(None, alias="gameId", description="Only reviews of this game"),
    reviews: ReviewService = Depends(get_review_service),
) -> list[ReviewListItem]:
    """List reviews, optionally for a single game.

    Each entry's ``isOwner`` tells whether the caller wrote it; it is always
    false without a valid token.
    """
    entries = await reviews.list(identity, game_id=game_id)
    return [review_to_list_item(review, owned) for review, owned in entries]


@router.get("/{review_id}", response_model=ReviewResponse)
async def get_review(
    review_id: int,
    reviews: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    """Get a single review."""
    return ReviewResponse.model_validate(await reviews.get(review_id))


@router.post("", response_model=ReviewResponse, status_code=201)
async def create_review(
    identity: CurrentIdentity,
    review_data: ReviewIn,
    reviews: ReviewService = Depends(get_review_service),
) -> ReviewResponse:
    """Create a review for a game.

    The review is owned by the caller; a ``userId`` in the body is ignored
    unless the caller is an administrator.
    Requires authentication.

    Raises:
        ValidationError 400: If rating, comment or game id is invalid
        NotFoundError 404: If the game does not exist
        ConflictError 409: If the id is taken or the owner already reviewed the game
    """
    review = await reviews.create(
        identity,
        rating=review_data.rating,
        comment=review_data.comment,
        game_id=review_data.game_id,
        review_id=review_data.id,
        user_id=review_data.user_id,
    )
    return ReviewResponse.model_validate(review)


@router.put("", status_code=204)
async def update_review(
    identity: CurrentIdentity,
    review_data: ReviewIn,
    reviews: ReviewService = Depends(get_review_service),
) -> Response:
    """Update a review.

    Only the owner or an administrator can edit a review.
    Requires authentication.
    """
    await reviews.update(
        identity,
        review_id=review_data.id,
        rating=review_data.rating,
        comment=review_data.comment,
        game_id=review_data.game_id,
        user_id=review_data.user_id,
    )
    return Response(status_code=204)


@router.delete("/{review_id}", status_code=204)
async def delete_review(
    review_id: int,
    identity: CurrentIdentity,
    reviews: ReviewService = Depends(get_review_service),
) -> Response:
    """Delete a review.

    Only the owner or an administrator can delete a review.
    Requires authentication.
    """
    await reviews.delete(identity, review_id)
    return Response(status_code=204)
