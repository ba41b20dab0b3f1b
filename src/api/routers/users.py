"""User signup and login endpoints (public)."""
from datetime import timedelta

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_settings
from core.config import Settings
from schemas.token import LoginRequest, TokenResponse
from schemas.user import UserCreate, UserResponse
from services import token_service, user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> UserResponse:
    """
    Sign up a new user.

    **Authentication: public**

    The password is stored only as a bcrypt hash and never returned.
    """
    user = await user_service.create_user(db, data, bcrypt_rounds=settings.bcrypt_rounds)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> TokenResponse:
    """
    Exchange email and password for a session token.

    **Authentication: public**

    The token carries userId, email and isAdmin and expires after JWT_EXPIRY_HOURS.
    """
    user = await user_service.authenticate(db, data)
    token = token_service.issue_token(
        user_id=user.id,
        email=user.email,
        is_admin=user.is_admin,
        secret=settings.jwt_secret_key,
        ttl=timedelta(hours=settings.jwt_expiry_hours),
    )
    return TokenResponse(token=token)
