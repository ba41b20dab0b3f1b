"""User model for signed-up accounts."""
from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin, UUIDv7Mixin


class User(Base, UUIDv7Mixin, TimestampMixin):
    """User model - stores credentials (hashed) and the admin flag."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt hash - plaintext is never stored",
    )
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
