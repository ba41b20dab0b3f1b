"""Pydantic schemas for login and session tokens."""
from pydantic import BaseModel, ConfigDict, Field, field_validator


class LoginRequest(BaseModel):
    """Schema for logging in with email and password."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        """Trim surrounding whitespace, as signup does."""
        return v.strip()


class TokenResponse(BaseModel):
    """Response carrying a freshly issued session token."""

    token: str


class TokenClaims(BaseModel):
    """
    Identity claims carried by a session token.

    Attached to the request as the authenticated identity once the token
    has been verified.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    user_id: str = Field(..., alias="userId", min_length=1)
    email: str
    is_admin: bool = Field(..., alias="isAdmin")
