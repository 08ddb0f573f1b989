"""User ORM model."""

from datetime import UTC, datetime

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from game_reviews.database import Base


class User(Base):
    """User account model for authentication.

    ``id`` is an opaque generated string and is what tokens carry as their
    subject. Reviews reference users through the numeric id derived from it.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), default="User")
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
