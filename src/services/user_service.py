"""Service layer for user signup and login."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.token import LoginRequest
from schemas.user import UserCreate
from services import token_service
from services.exceptions import (
    ConflictError,
    ErrorCode,
    InvalidInputError,
    NotFoundError,
    UnexpectedError,
)

logger = logging.getLogger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get a user by email. Returns None if no such user exists."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    data: UserCreate,
    bcrypt_rounds: int = token_service.DEFAULT_BCRYPT_ROUNDS,
) -> User:
    """
    Sign up a new user with a hashed password.

    Raises:
        ConflictError: USER_ALREADY_EXIST if the email is taken (including a
            concurrent signup that wins the race to the unique constraint).
        UnexpectedError: CANNOT_CREATE_USER if the database rejects the insert
            for any other reason.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    if await get_user_by_email(db, data.email) is not None:
        raise ConflictError(ErrorCode.USER_ALREADY_EXIST, email=data.email)

    user = User(
        name=data.name,
        email=data.email,
        password_hash=token_service.hash_password(data.password, rounds=bcrypt_rounds),
        is_admin=data.is_admin,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError(ErrorCode.USER_ALREADY_EXIST, email=data.email) from e
    except SQLAlchemyError as e:
        logger.exception("Failed to create user email=%s", data.email)
        await db.rollback()
        raise UnexpectedError(ErrorCode.CANNOT_CREATE_USER, email=data.email) from e

    await db.refresh(user)
    logger.info("user_created user_id=%s is_admin=%s", user.id, user.is_admin)
    return user


async def authenticate(db: AsyncSession, data: LoginRequest) -> User:
    """
    Check login credentials and return the matching user.

    Raises:
        NotFoundError: INVALID_USER_EMAIL if no user has this email.
        InvalidInputError: INVALID_USER_PASSWORD if the password does not match.
    """
    user = await get_user_by_email(db, data.email)
    if user is None:
        raise NotFoundError(ErrorCode.INVALID_USER_EMAIL, email=data.email)

    if not token_service.verify_password(data.password, user.password_hash):
        raise InvalidInputError(ErrorCode.INVALID_USER_PASSWORD, user_id=str(user.id))

    return user
