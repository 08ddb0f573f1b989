"""Pydantic schemas for review API endpoints."""

from pydantic import Field

from game_reviews.identity import INT32_MAX
from game_reviews.schemas.common import CamelModel


class ReviewIn(CamelModel):
    """Request body for creating or replacing a review.

    ``user_id`` is only honored for administrators; for everyone else the
    owner is always the caller.
    """

    id: int = Field(
        default=0, le=INT32_MAX, description="Review ID; the next free id is used if omitted"
    )
    rating: int = Field(description="Rating from 1 to 5")
    comment: str = Field(description="Review text")
    game_id: int = Field(le=INT32_MAX, description="ID of the reviewed game")
    user_id: int = Field(default=0, le=INT32_MAX, description="Owner override (admins only)")


class ReviewResponse(CamelModel):
    """Review as returned by the API."""

    id: int = Field(description="Review ID")
    rating: int = Field(description="Rating from 1 to 5")
    comment: str = Field(description="Review text")
    game_id: int = Field(description="Reviewed game ID")
    user_id: int = Field(description="Numeric id of the review's owner")


class ReviewListItem(ReviewResponse):
    """Review in a listing, flagged with whether the caller owns it."""

    is_owner: bool = Field(default=False, description="Whether the caller wrote this review")
