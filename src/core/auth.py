"""
Authentication and authorization for every routed request.

authenticate_request is installed as an application-wide dependency, so it runs
before every route handler:

1. Public-path bypass: signup and login skip the token gate. Paths are compared
   exactly after normalization (query string and trailing slashes removed), so
   no prefix of a public path accidentally exposes a protected route.
2. Token gate: the bearer token must be present and valid; its identity claims
   are attached to request.state.identity.

require_admin is the role gate for admin-only routes.
"""
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import Settings, get_settings
from schemas.token import TokenClaims
from services import token_service
from services.exceptions import AuthenticationError, AuthorizationError, ErrorCode

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)

# Paths relative to the base path that never require a token
PUBLIC_ROUTES = ("/users", "/users/login")


def normalize_path(path: str) -> str:
    """Strip any query string and trailing slashes from a request path."""
    path = path.split("?", 1)[0]
    return path.rstrip("/") or "/"


def public_paths(base_path: str) -> frozenset[str]:
    """Full normalized paths that bypass the token gate."""
    return frozenset(normalize_path(f"{base_path}{route}") for route in PUBLIC_ROUTES)


def is_public_path(path: str, base_path: str) -> bool:
    """Check whether a request path exactly matches a public route."""
    return normalize_path(path) in public_paths(base_path)


async def authenticate_request(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> TokenClaims | None:
    """
    Dependency that validates the bearer token and attaches the identity.

    Returns None for public paths.

    Raises:
        AuthenticationError: NO_AUTH_TOKEN if no bearer token was sent,
            INVALID_AUTH_TOKEN if it fails verification.
    """
    request.state.identity = None
    if is_public_path(request.url.path, settings.base_path):
        return None

    if credentials is None or not credentials.credentials:
        raise AuthenticationError(ErrorCode.NO_AUTH_TOKEN, path=request.url.path)

    identity = token_service.verify_token(credentials.credentials, settings.jwt_secret_key)
    request.state.identity = identity
    return identity


async def get_current_identity(
    identity: TokenClaims | None = Depends(authenticate_request),
) -> TokenClaims | None:
    """Dependency returning the authenticated identity (None on public paths)."""
    return identity


async def require_admin(
    identity: TokenClaims | None = Depends(get_current_identity),
) -> TokenClaims:
    """
    Dependency that only lets administrators through.

    Raises:
        AuthorizationError: ONLY_ADMIN_ALLOWED if there is no identity or it is
            not flagged as admin.
    """
    if identity is None or not identity.is_admin:
        raise AuthorizationError(
            ErrorCode.ONLY_ADMIN_ALLOWED,
            user_id=identity.user_id if identity else None,
        )
    return identity
