"""Pydantic schemas for movie endpoints."""
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _reject_bool_rating(value: Any) -> Any:
    # JSON true/false would otherwise coerce to 1.0/0.0.
    if isinstance(value, bool):
        raise ValueError("rating must be a number")
    return value


class MovieCreate(BaseModel):
    """Schema for adding a movie. All four content fields are required."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=500)
    genre: str = Field(..., min_length=1, max_length=100)
    rating: float
    streaming_link: str = Field(..., alias="streamingLink", min_length=1)

    @field_validator("rating", mode="before")
    @classmethod
    def reject_bool_rating(cls, v: Any) -> Any:
        """Booleans are not ratings."""
        return _reject_bool_rating(v)


class MovieUpdate(BaseModel):
    """
    Schema for a partial movie update.

    Any subset of fields may be sent. Omitted fields are left unchanged;
    an explicit null is rejected because every movie field is required.
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = Field(default=None, min_length=1, max_length=500)
    genre: str | None = Field(default=None, min_length=1, max_length=100)
    rating: float | None = None
    streaming_link: str | None = Field(default=None, alias="streamingLink", min_length=1)

    @field_validator("rating", mode="before")
    @classmethod
    def reject_bool_rating(cls, v: Any) -> Any:
        """Booleans are not ratings."""
        return _reject_bool_rating(v)

    @model_validator(mode="before")
    @classmethod
    def reject_explicit_nulls(cls, data: Any) -> Any:
        """Fields may be omitted but not set to null."""
        if isinstance(data, dict):
            nulls = [key for key, value in data.items() if value is None]
            if nulls:
                raise ValueError(f"Fields cannot be null: {', '.join(sorted(nulls))}")
        return data


class MovieResponse(BaseModel):
    """Schema for movie responses."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    title: str
    genre: str
    rating: float
    streaming_link: str = Field(..., alias="streamingLink")
