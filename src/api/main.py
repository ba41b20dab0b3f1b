"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from api.errors import (
    movie_lobby_error_handler,
    request_validation_error_handler,
    unexpected_error_handler,
)
from api.routers import movies, users
from core.auth import authenticate_request
from core.cache import ResponseCache
from core.config import get_settings
from db.session import create_tables, engine
from services.exceptions import MovieLobbyError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()

    # Startup: one response cache shared by every request of this process
    app.state.response_cache = ResponseCache(
        default_ttl=app_settings.cache_ttl_seconds,
        maxsize=app_settings.cache_max_size,
    )

    # Startup: make sure tables exist (no migrations in this service)
    if app_settings.db_auto_create:
        await create_tables()

    logger.info(
        "Movie lobby started environment=%s base_path=%s",
        app_settings.environment,
        app_settings.base_path,
    )

    yield

    # Shutdown: drop cached responses and release DB connections
    app.state.response_cache.clear()
    await engine.dispose()


app_settings = get_settings()

app = FastAPI(
    title="Movie Lobby API",
    description="A movie collection with JWT auth, admin-gated writes and cached reads.",
    version="0.1.0",
    lifespan=lifespan,
    dependencies=[Depends(authenticate_request)],
)

app.add_exception_handler(MovieLobbyError, movie_lobby_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)
app.add_exception_handler(Exception, unexpected_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router, prefix=app_settings.base_path)
app.include_router(movies.router, prefix=app_settings.base_path)


def run() -> None:
    """Run the API with uvicorn on the configured port."""
    logging.basicConfig(
        level=app_settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=app_settings.port)  # noqa: S104


if __name__ == "__main__":
    run()
