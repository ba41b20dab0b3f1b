"""Translation of service errors into client-facing error responses."""
import logging
from dataclasses import dataclass

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from services.exceptions import ErrorCode, MovieLobbyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorDescriptor:
    """Stable client-facing description of an error code."""

    code: int
    message: str
    status_code: int

    def to_body(self) -> dict[str, int | str]:
        """Render the JSON body sent to clients."""
        return {"code": self.code, "message": self.message}


ERROR_DESCRIPTORS: dict[ErrorCode, ErrorDescriptor] = {
    ErrorCode.UNEXPECTED_ERROR: ErrorDescriptor(1001, "Unexpected Error: Something went wrong!", 500),  # noqa: E501
    ErrorCode.CANNOT_CREATE_USER: ErrorDescriptor(1002, "Not able to create users right now!", 500),  # noqa: E501
    ErrorCode.USER_ALREADY_EXIST: ErrorDescriptor(1003, "User with given email already exists!", 400),  # noqa: E501
    ErrorCode.INVALID_USER_EMAIL: ErrorDescriptor(1004, "User with this email doesn't exist!", 404),  # noqa: E501
    ErrorCode.INVALID_USER_PASSWORD: ErrorDescriptor(1005, "User password is incorrect!", 400),
    ErrorCode.INVALID_REQ_PARAMS: ErrorDescriptor(1006, "Invalid Request Params!", 400),
    ErrorCode.NO_AUTH_TOKEN: ErrorDescriptor(1007, "No auth token provided!", 401),
    ErrorCode.INVALID_AUTH_TOKEN: ErrorDescriptor(1008, "Invalid auth token provided!", 403),
    ErrorCode.ONLY_ADMIN_ALLOWED: ErrorDescriptor(
        1009, "Only Admins are allowed to access, not allowed to this account!", 403,
    ),
    ErrorCode.NO_SEARCH_QUERY_FOUND: ErrorDescriptor(1010, "No search query found!", 400),
    ErrorCode.MOVIE_NOT_FOUND: ErrorDescriptor(1011, "Movie not found!", 404),
    ErrorCode.MOVIE_ID_MISSING: ErrorDescriptor(1012, "Movie ID is missing in request params!", 400),  # noqa: E501
    ErrorCode.MOVIE_ID_INVALID: ErrorDescriptor(1013, "Movie ID is invalid!", 400),
}


def translate(code: ErrorCode | str | None) -> ErrorDescriptor:
    """
    Look up the descriptor for an error code.

    Unrecognized codes degrade to the generic unexpected-error descriptor.
    """
    try:
        return ERROR_DESCRIPTORS[ErrorCode(code)]
    except (KeyError, ValueError):
        return ERROR_DESCRIPTORS[ErrorCode.UNEXPECTED_ERROR]


def error_response(code: ErrorCode | str | None) -> JSONResponse:
    """Build the JSON error response for an error code."""
    descriptor = translate(code)
    headers = {"WWW-Authenticate": "Bearer"} if descriptor.status_code == 401 else None
    return JSONResponse(
        status_code=descriptor.status_code,
        content=descriptor.to_body(),
        headers=headers,
    )


async def movie_lobby_error_handler(request: Request, exc: MovieLobbyError) -> JSONResponse:
    """Translate a tagged service error into its error response."""
    logger.info(
        "request_failed method=%s path=%s error=%r",
        request.method,
        request.url.path,
        exc,
    )
    return error_response(exc.code)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed bodies, query strings and path params as invalid params."""
    logger.info(
        "request_validation_failed method=%s path=%s errors=%s",
        request.method,
        request.url.path,
        exc.errors(),
    )
    return error_response(ErrorCode.INVALID_REQ_PARAMS)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Collapse any unmapped failure into the generic error response."""
    logger.exception(
        "unhandled_error method=%s path=%s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(ErrorCode.UNEXPECTED_ERROR)
