"""
Tagged error variants raised by the service and auth layers.

Every error carries an ErrorCode identifying the exact failure plus optional
structured context for logging. The API layer translates the code into the
client-facing (numeric code, message, HTTP status) triple in api.errors.
"""
from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Closed set of error identifiers exposed by the API."""

    UNEXPECTED_ERROR = "ERR_UNEXPECTED_ERROR"
    CANNOT_CREATE_USER = "CANNOT_CREATE_USER"
    USER_ALREADY_EXIST = "USER_ALREADY_EXIST"
    INVALID_USER_EMAIL = "INVALID_USER_EMAIL"
    INVALID_USER_PASSWORD = "INVALID_USER_PASSWORD"
    INVALID_REQ_PARAMS = "INVALID_REQ_PARAMS"
    NO_AUTH_TOKEN = "NO_AUTH_TOKEN"
    INVALID_AUTH_TOKEN = "INVALID_AUTH_TOKEN"
    ONLY_ADMIN_ALLOWED = "ONLY_ADMIN_ALLOWED"
    NO_SEARCH_QUERY_FOUND = "NO_SEARCH_QUERY_FOUND"
    MOVIE_NOT_FOUND = "MOVIE_NOT_FOUND"
    MOVIE_ID_MISSING = "MOVIE_ID_MISSING"
    MOVIE_ID_INVALID = "MOVIE_ID_INVALID"


class MovieLobbyError(Exception):
    """Base class for all errors translated into API error responses."""

    def __init__(self, code: ErrorCode, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(code.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.value!r}, context={self.context!r})"


class InvalidInputError(MovieLobbyError):
    """Missing or malformed input (request params, ids, credentials)."""


class NotFoundError(MovieLobbyError):
    """A referenced entity does not exist."""


class ConflictError(MovieLobbyError):
    """A unique field collides with an existing record."""


class AuthenticationError(MovieLobbyError):
    """Missing, invalid, or expired bearer token."""


class AuthorizationError(MovieLobbyError):
    """Authenticated identity lacks the required role."""


class UnexpectedError(MovieLobbyError):
    """Failure with no more specific mapping (database errors and the like)."""

    def __init__(self, code: ErrorCode = ErrorCode.UNEXPECTED_ERROR, **context: Any) -> None:
        super().__init__(code, **context)
