"""Tests for password hashing and session tokens."""
from datetime import UTC, datetime, timedelta

import jwt
import pytest
from uuid6 import uuid7

from services.exceptions import AuthenticationError, ErrorCode
from services.token_service import (
    JWT_ALGORITHM,
    hash_password,
    issue_token,
    verify_password,
    verify_token,
)

SECRET = "unit-test-secret"


class TestPasswordHashing:
    """Tests for hash_password and verify_password."""

    def test__hash_password__is_not_plaintext(self) -> None:
        hashed = hash_password("hunter2", rounds=4)

        assert hashed != "hunter2"
        assert hashed.startswith("$2")

    def test__hash_password__salts_every_hash(self) -> None:
        """Hashing the same password twice gives different hashes that both verify."""
        first = hash_password("hunter2", rounds=4)
        second = hash_password("hunter2", rounds=4)

        assert first != second
        assert verify_password("hunter2", first)
        assert verify_password("hunter2", second)

    def test__verify_password__wrong_password_is_false(self) -> None:
        hashed = hash_password("hunter2", rounds=4)

        assert verify_password("hunter3", hashed) is False

    def test__verify_password__malformed_hash_is_false(self) -> None:
        assert verify_password("hunter2", "not-a-bcrypt-hash") is False

    def test__hash_password__long_password_is_accepted(self) -> None:
        """Passwords beyond bcrypt's 72-byte limit hash and verify without error."""
        password = "x" * 100
        hashed = hash_password(password, rounds=4)

        assert verify_password(password, hashed)

    def test__hash_password__honors_rounds(self) -> None:
        assert hash_password("pw", rounds=5).split("$")[2] == "05"


class TestIssueToken:
    """Tests for issue_token."""

    def test__issue_token__carries_identity_claims(self) -> None:
        user_id = uuid7()
        token = issue_token(user_id, "ann@example.com", True, secret=SECRET)

        payload = jwt.decode(token, SECRET, algorithms=[JWT_ALGORITHM])

        assert payload["userId"] == str(user_id)
        assert payload["email"] == "ann@example.com"
        assert payload["isAdmin"] is True

    def test__issue_token__expires_after_ttl(self) -> None:
        token = issue_token(uuid7(), "ann@example.com", False, secret=SECRET)

        payload = jwt.decode(token, SECRET, algorithms=[JWT_ALGORITHM])

        assert payload["exp"] - payload["iat"] == 12 * 60 * 60

    def test__issue_token__custom_ttl(self) -> None:
        token = issue_token(
            uuid7(), "ann@example.com", False, secret=SECRET, ttl=timedelta(minutes=5),
        )

        payload = jwt.decode(token, SECRET, algorithms=[JWT_ALGORITHM])

        assert payload["exp"] - payload["iat"] == 300


class TestVerifyToken:
    """Tests for verify_token."""

    def test__verify_token__returns_claims(self) -> None:
        user_id = uuid7()
        token = issue_token(user_id, "ann@example.com", False, secret=SECRET)

        claims = verify_token(token, SECRET)

        assert claims.user_id == str(user_id)
        assert claims.email == "ann@example.com"
        assert claims.is_admin is False

    def test__verify_token__wrong_secret(self) -> None:
        token = issue_token(uuid7(), "ann@example.com", False, secret=SECRET)

        with pytest.raises(AuthenticationError) as exc_info:
            verify_token(token, "another-secret")

        assert exc_info.value.code == ErrorCode.INVALID_AUTH_TOKEN
        assert exc_info.value.context["reason"] == "invalid"

    def test__verify_token__expired(self) -> None:
        token = issue_token(
            uuid7(), "ann@example.com", False, secret=SECRET, ttl=timedelta(seconds=-5),
        )

        with pytest.raises(AuthenticationError) as exc_info:
            verify_token(token, SECRET)

        assert exc_info.value.code == ErrorCode.INVALID_AUTH_TOKEN
        assert exc_info.value.context["reason"] == "expired"

    def test__verify_token__tampered_payload(self) -> None:
        token = issue_token(uuid7(), "ann@example.com", False, secret=SECRET)
        header, _, signature = token.split(".")
        forged_payload = jwt.encode(
            {"userId": "x", "email": "x@x", "isAdmin": True,
             "exp": datetime.now(UTC) + timedelta(hours=1)},
            "attacker",
            algorithm=JWT_ALGORITHM,
        ).split(".")[1]

        with pytest.raises(AuthenticationError):
            verify_token(f"{header}.{forged_payload}.{signature}", SECRET)

    def test__verify_token__requires_expiry(self) -> None:
        token = jwt.encode(
            {"userId": "x", "email": "x@example.com", "isAdmin": False},
            SECRET,
            algorithm=JWT_ALGORITHM,
        )

        with pytest.raises(AuthenticationError) as exc_info:
            verify_token(token, SECRET)

        assert exc_info.value.context["reason"] == "invalid"

    def test__verify_token__missing_claims(self) -> None:
        token = jwt.encode(
            {"userId": "x", "exp": datetime.now(UTC) + timedelta(hours=1)},
            SECRET,
            algorithm=JWT_ALGORITHM,
        )

        with pytest.raises(AuthenticationError) as exc_info:
            verify_token(token, SECRET)

        assert exc_info.value.context["reason"] == "claims"

    def test__verify_token__rejects_unsigned_token(self) -> None:
        token = jwt.encode(
            {"userId": "x", "email": "x@example.com", "isAdmin": True,
             "exp": datetime.now(UTC) + timedelta(hours=1)},
            None,
            algorithm="none",
        )

        with pytest.raises(AuthenticationError):
            verify_token(token, SECRET)
