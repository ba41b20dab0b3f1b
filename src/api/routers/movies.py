"""Movie CRUD, listing and search endpoints."""
from typing import Any

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import (
    get_async_session,
    get_identifier_validator,
    get_response_cache,
    get_settings,
    require_admin,
)
from core.cache import DEFAULT_LIMIT, DEFAULT_PAGE, MOVIES_KEY_PREFIX, ResponseCache
from core.config import Settings
from core.identifiers import IdentifierValidator
from schemas.movie import MovieCreate, MovieResponse, MovieUpdate
from services import movie_service

router = APIRouter(prefix="/movies", tags=["movies"])


def _after_write(cache: ResponseCache, settings: Settings) -> None:
    """Drop cached movie reads after a mutation, if configured to."""
    if settings.cache_invalidate_on_write:
        cache.invalidate_prefix(MOVIES_KEY_PREFIX)


@router.get("", response_model=list[MovieResponse])
async def list_movies(
    page: int = Query(default=DEFAULT_PAGE, ge=1, description="Page number (1-based)"),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, description="Movies per page"),
    db: AsyncSession = Depends(get_async_session),
    cache: ResponseCache = Depends(get_response_cache),
) -> list[dict[str, Any]]:
    """
    List movies one page at a time.

    **Authentication: token**

    Results are cached per (page, limit) for CACHE_TTL_SECONDS.
    """
    return await movie_service.list_movies(db, cache, page=page, limit=limit)


@router.get("/search", response_model=list[MovieResponse])
async def search_movies(
    q: str | None = Query(default=None, description="Text matched against title and genre"),
    db: AsyncSession = Depends(get_async_session),
    cache: ResponseCache = Depends(get_response_cache),
) -> list[dict[str, Any]]:
    """
    Search movies by title or genre (case-insensitive substring match).

    **Authentication: token**

    Results are cached per search term for CACHE_TTL_SECONDS.
    """
    return await movie_service.search_movies(db, cache, q)


@router.get("/{movie_id}", response_model=MovieResponse)
async def get_movie(
    movie_id: str,
    db: AsyncSession = Depends(get_async_session),
    validator: IdentifierValidator = Depends(get_identifier_validator),
) -> MovieResponse:
    """
    Get a single movie by id.

    **Authentication: token**
    """
    resolved_id = movie_service.resolve_movie_id(movie_id, validator)
    movie = await movie_service.get_movie(db, resolved_id)
    return MovieResponse.model_validate(movie)


@router.post(
    "",
    response_model=MovieResponse,
    status_code=201,
    dependencies=[Depends(require_admin)],
)
async def create_movie(
    data: MovieCreate,
    db: AsyncSession = Depends(get_async_session),
    cache: ResponseCache = Depends(get_response_cache),
    settings: Settings = Depends(get_settings),
) -> MovieResponse:
    """
    Add a movie.

    **Authentication: token, admin only**
    """
    movie = await movie_service.create_movie(db, data)
    _after_write(cache, settings)
    return MovieResponse.model_validate(movie)


@router.put("", dependencies=[Depends(require_admin)], include_in_schema=False)
async def update_movie_without_id(
    validator: IdentifierValidator = Depends(get_identifier_validator),
) -> None:
    """Reject an update that names no movie."""
    movie_service.resolve_movie_id(None, validator)


@router.put(
    "/{movie_id}",
    response_model=MovieResponse,
    dependencies=[Depends(require_admin)],
)
async def update_movie(
    movie_id: str,
    data: MovieUpdate,
    db: AsyncSession = Depends(get_async_session),
    validator: IdentifierValidator = Depends(get_identifier_validator),
    cache: ResponseCache = Depends(get_response_cache),
    settings: Settings = Depends(get_settings),
) -> MovieResponse:
    """
    Update some or all fields of a movie.

    **Authentication: token, admin only**

    Omitted fields keep their current values.
    """
    resolved_id = movie_service.resolve_movie_id(movie_id, validator)
    movie = await movie_service.update_movie(db, resolved_id, data)
    _after_write(cache, settings)
    return MovieResponse.model_validate(movie)


@router.delete("", dependencies=[Depends(require_admin)], include_in_schema=False)
async def delete_movie_without_id(
    validator: IdentifierValidator = Depends(get_identifier_validator),
) -> None:
    """Reject a delete that names no movie."""
    movie_service.resolve_movie_id(None, validator)


@router.delete("/{movie_id}", status_code=204, dependencies=[Depends(require_admin)])
async def delete_movie(
    movie_id: str,
    db: AsyncSession = Depends(get_async_session),
    validator: IdentifierValidator = Depends(get_identifier_validator),
    cache: ResponseCache = Depends(get_response_cache),
    settings: Settings = Depends(get_settings),
) -> Response:
    """
    Delete a movie permanently.

    **Authentication: token, admin only**
    """
    resolved_id = movie_service.resolve_movie_id(movie_id, validator)
    await movie_service.delete_movie(db, resolved_id)
    _after_write(cache, settings)
    return Response(status_code=204)
