"""SQLAlchemy models."""
from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.movie import Movie
from models.user import User

__all__ = ["Base", "Movie", "TimestampMixin", "UUIDv7Mixin", "User"]
