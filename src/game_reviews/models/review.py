"""Review ORM model."""

from sqlalchemy import CheckConstraint, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from game_reviews.database import Base


class Review(Base):
    """A user's rating and comment for a game.

    ``user_id`` is the numeric identity derived from the owner's token
    subject, not a foreign key into ``users``.
    """

    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "game_id", name="uq_review_user_game"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    rating: Mapped[int] = mapped_column()
    comment: Mapped[str] = mapped_column(Text)
    game_id: Mapped[int] = mapped_column(ForeignKey("games.id"), index=True)
    user_id: Mapped[int] = mapped_column(index=True)
