"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Callable

# Must be set before any app imports that create the engine from Settings.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///"
os.environ["DB_NAME"] = ":memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["DB_AUTO_CREATE"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.cache import ResponseCache  # noqa: E402
from core.config import Settings  # noqa: E402
from models import Base  # noqa: E402
from models.user import User  # noqa: E402
from services.token_service import hash_password, issue_token  # noqa: E402

BASE_PATH = "/movie_lobby"
TEST_JWT_SECRET = "test-secret-key"
TEST_PASSWORD = "correct horse battery staple"


class FakeClock:
    """Monotonic clock the tests advance by hand."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: known signing secret and cheap bcrypt rounds."""
    return Settings(
        _env_file=None,
        environment="test",
        jwt_secret_key=TEST_JWT_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture
def clock() -> FakeClock:
    """Controllable clock driving the response cache's expiry."""
    return FakeClock()


@pytest.fixture
def response_cache(clock: FakeClock, settings: Settings) -> ResponseCache:
    """Fresh response cache per test."""
    return ResponseCache(default_ttl=settings.cache_ttl_seconds, timer=clock)


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Async session bound to the per-test database."""
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    db_session: AsyncSession,
    settings: Settings,
    response_cache: ResponseCache,
) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database session, settings and cache overrides."""
    from api.main import app  # noqa: PLC0415
    from core.cache import get_response_cache  # noqa: PLC0415
    from core.config import get_settings  # noqa: PLC0415
    from db.session import get_async_session  # noqa: PLC0415

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_response_cache] = lambda: response_cache

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable:
    """Factory inserting a user with TEST_PASSWORD as password."""

    async def _make_user(
        email: str,
        is_admin: bool = False,
        name: str = "Test User",
    ) -> User:
        user = User(
            name=name,
            email=email,
            password_hash=hash_password(TEST_PASSWORD, rounds=4),
            is_admin=is_admin,
        )
        db_session.add(user)
        await db_session.flush()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
async def admin_user(make_user: Callable) -> User:
    """An administrator."""
    return await make_user("admin@example.com", is_admin=True, name="Admin")


@pytest.fixture
async def regular_user(make_user: Callable) -> User:
    """A user without the admin flag."""
    return await make_user("viewer@example.com", is_admin=False, name="Viewer")


def _bearer(user: User) -> dict[str, str]:
    token = issue_token(user.id, user.email, user.is_admin, secret=TEST_JWT_SECRET)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user: User) -> dict[str, str]:
    """Authorization header for the administrator."""
    return _bearer(admin_user)


@pytest.fixture
def user_headers(regular_user: User) -> dict[str, str]:
    """Authorization header for the non-admin user."""
    return _bearer(regular_user)
