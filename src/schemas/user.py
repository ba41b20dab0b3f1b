"""Pydantic schemas for user endpoints."""
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserCreate(BaseModel):
    """Schema for signing up a new user. All fields are required."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    is_admin: bool = Field(..., alias="isAdmin")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Trim surrounding whitespace and require an @."""
        v = v.strip()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v


class UserResponse(BaseModel):
    """Public view of a user. Never includes the password hash."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    name: str
    email: str
    is_admin: bool = Field(..., alias="isAdmin")
