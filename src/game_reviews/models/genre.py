"""Genre ORM model."""

from sqlalchemy import Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from game_reviews.database import Base


class Genre(Base):
    """Genre a game belongs to. Names are unique ignoring case."""

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(100))


Index("uq_genres_name_lower", func.lower(Genre.name), unique=True)
