"""Credential hashing and session token issuing/verification."""
import logging
from datetime import UTC, datetime, timedelta
from uuid import UUID

import bcrypt
import jwt
from pydantic import ValidationError

from schemas.token import TokenClaims
from services.exceptions import AuthenticationError, ErrorCode

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL = timedelta(hours=12)
DEFAULT_BCRYPT_ROUNDS = 10

# bcrypt only looks at the first 72 bytes of a password.
_BCRYPT_MAX_BYTES = 72


def _password_bytes(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plaintext: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """
    Hash a password with bcrypt using a fresh random salt.

    Hashing the same password twice yields different hashes; both verify.
    """
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(plaintext), salt).decode("ascii")


def verify_password(plaintext: str, hashed: str) -> bool:
    """
    Check a password against a stored bcrypt hash.

    Returns False for a wrong password and for a malformed stored hash; never raises
    on mismatch. The comparison inside bcrypt is constant-time.
    """
    try:
        return bcrypt.checkpw(_password_bytes(plaintext), hashed.encode("ascii"))
    except (ValueError, UnicodeEncodeError):
        logger.warning("Stored password hash is malformed")
        return False


def issue_token(
    user_id: UUID | str,
    email: str,
    is_admin: bool,
    secret: str,
    ttl: timedelta = DEFAULT_TOKEN_TTL,
) -> str:
    """
    Sign a self-contained session token carrying the user's identity and role.

    Args:
        user_id: Identifier of the authenticated user.
        email: The user's email.
        is_admin: Whether the user may perform admin-only operations.
        secret: HMAC signing secret.
        ttl: Lifetime of the token (12 hours by default).

    Returns:
        The encoded JWT.
    """
    now = datetime.now(UTC)
    payload = {
        "userId": str(user_id),
        "email": email,
        "isAdmin": is_admin,
        "iat": now,
        "exp": now + ttl,
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def verify_token(token: str, secret: str) -> TokenClaims:
    """
    Verify a session token's signature and expiry and return its identity claims.

    Raises:
        AuthenticationError: INVALID_AUTH_TOKEN if the signature is invalid, the
            token has expired, or the payload does not carry the identity claims.
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Session token has expired")
        raise AuthenticationError(ErrorCode.INVALID_AUTH_TOKEN, reason="expired")
    except jwt.PyJWTError as e:
        logger.warning("Session token validation failed: %s", e)
        raise AuthenticationError(ErrorCode.INVALID_AUTH_TOKEN, reason="invalid")

    if not isinstance(payload, dict):
        raise AuthenticationError(ErrorCode.INVALID_AUTH_TOKEN, reason="payload")

    try:
        return TokenClaims.model_validate(payload)
    except ValidationError:
        logger.warning("Session token is missing identity claims")
        raise AuthenticationError(ErrorCode.INVALID_AUTH_TOKEN, reason="claims")
