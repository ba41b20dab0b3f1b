"""Service layer for movie CRUD, listing and search."""
import logging
from typing import Any
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.cache import DEFAULT_LIMIT, DEFAULT_PAGE, ResponseCache, list_cache_key, search_cache_key
from core.identifiers import IdentifierValidator
from models.movie import Movie
from schemas.movie import MovieCreate, MovieResponse, MovieUpdate
from services.exceptions import ErrorCode, InvalidInputError, NotFoundError, UnexpectedError
from services.utils import escape_ilike

logger = logging.getLogger(__name__)


def serialize_movies(movies: list[Movie]) -> list[dict[str, Any]]:
    """Render movies as JSON-ready response bodies (the form that gets cached)."""
    return [
        MovieResponse.model_validate(movie).model_dump(mode="json", by_alias=True)
        for movie in movies
    ]


async def fetch_movies_page(db: AsyncSession, page: int, limit: int) -> list[Movie]:
    """Read one page of movies in creation order (skip (page-1)*limit, take limit)."""
    result = await db.execute(
        select(Movie)
        .order_by(Movie.created_at, Movie.id)
        .offset((page - 1) * limit)
        .limit(limit),
    )
    return list(result.scalars().all())


async def fetch_movies_matching(db: AsyncSession, term: str) -> list[Movie]:
    """Read movies whose title or genre contains term, case-insensitively."""
    pattern = f"%{escape_ilike(term)}%"
    result = await db.execute(
        select(Movie)
        .where(
            or_(
                Movie.title.ilike(pattern, escape="\\"),
                Movie.genre.ilike(pattern, escape="\\"),
            ),
        )
        .order_by(Movie.created_at, Movie.id),
    )
    return list(result.scalars().all())


async def list_movies(
    db: AsyncSession,
    cache: ResponseCache,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> list[dict[str, Any]]:
    """
    Get a page of movies, served from the response cache when possible.

    A cache miss reads the database and stores the result under the page/limit
    key before returning it.
    """
    key = list_cache_key(page, limit)
    cached = cache.get(key)
    if cached is not None:
        return cached

    movies = serialize_movies(await fetch_movies_page(db, page, limit))
    cache.set(key, movies)
    return movies


async def search_movies(
    db: AsyncSession,
    cache: ResponseCache,
    term: str | None,
) -> list[dict[str, Any]]:
    """
    Search movies by title or genre, served from the response cache when possible.

    Raises:
        InvalidInputError: NO_SEARCH_QUERY_FOUND if term is missing or empty.
    """
    if not term:
        raise InvalidInputError(ErrorCode.NO_SEARCH_QUERY_FOUND)

    key = search_cache_key(term)
    cached = cache.get(key)
    if cached is not None:
        return cached

    movies = serialize_movies(await fetch_movies_matching(db, term))
    cache.set(key, movies)
    return movies


def resolve_movie_id(raw_id: str | None, validator: IdentifierValidator) -> UUID:
    """
    Turn a raw path id into a movie identifier.

    Raises:
        InvalidInputError: MOVIE_ID_MISSING if absent or blank,
            MOVIE_ID_INVALID if it is not a well-formed identifier.
    """
    if raw_id is None or not raw_id.strip():
        raise InvalidInputError(ErrorCode.MOVIE_ID_MISSING)

    movie_id = validator.parse(raw_id.strip())
    if movie_id is None:
        raise InvalidInputError(ErrorCode.MOVIE_ID_INVALID, movie_id=raw_id)
    return movie_id


async def get_movie(db: AsyncSession, movie_id: UUID) -> Movie:
    """
    Get a movie by id.

    Raises:
        NotFoundError: MOVIE_NOT_FOUND if no movie has this id.
    """
    movie = await db.get(Movie, movie_id)
    if movie is None:
        raise NotFoundError(ErrorCode.MOVIE_NOT_FOUND, movie_id=str(movie_id))
    return movie


async def create_movie(db: AsyncSession, data: MovieCreate) -> Movie:
    """
    Add a movie to the collection.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    movie = Movie(
        title=data.title,
        genre=data.genre,
        rating=data.rating,
        streaming_link=data.streaming_link,
    )
    db.add(movie)
    await db.flush()
    await db.refresh(movie)
    logger.info("movie_created movie_id=%s", movie.id)
    return movie


async def update_movie(db: AsyncSession, movie_id: UUID, data: MovieUpdate) -> Movie:
    """
    Apply a partial update; fields not sent in the request are left unchanged.

    Raises:
        NotFoundError: MOVIE_NOT_FOUND if no movie has this id.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    movie = await get_movie(db, movie_id)

    update_data = data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(movie, field, value)

    if update_data:
        await db.flush()
        await db.refresh(movie)
        logger.info("movie_updated movie_id=%s fields=%s", movie_id, sorted(update_data))
    return movie


async def delete_movie(db: AsyncSession, movie_id: UUID) -> None:
    """
    Delete a movie permanently.

    Raises:
        NotFoundError: MOVIE_NOT_FOUND if no movie has this id.
        UnexpectedError: UNEXPECTED_ERROR if the database fails to delete it.
    """
    movie = await get_movie(db, movie_id)
    try:
        await db.delete(movie)
        await db.flush()
    except SQLAlchemyError as e:
        logger.exception("Failed to delete movie movie_id=%s", movie_id)
        raise UnexpectedError(movie_id=str(movie_id)) from e
    logger.info("movie_deleted movie_id=%s", movie_id)
