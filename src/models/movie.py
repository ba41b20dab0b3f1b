"""Movie model for the movie collection."""
from sqlalchemy import Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin, UUIDv7Mixin


class Movie(Base, UUIDv7Mixin, TimestampMixin):
    """Movie model - a title with its genre, rating and where to stream it."""

    __tablename__ = "movies"
    __table_args__ = (Index("ix_movies_created_at_id", "created_at", "id"),)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    genre: Mapped[str] = mapped_column(String(100), nullable=False)
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    streaming_link: Mapped[str] = mapped_column(Text, nullable=False)
