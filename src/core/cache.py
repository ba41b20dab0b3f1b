"""In-process response cache with per-entry time-to-live."""
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from cachetools import TLRUCache
from fastapi import Request

logger = logging.getLogger(__name__)

# Prefix shared by every movie read key, used for write invalidation.
MOVIES_KEY_PREFIX = "movies_"

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 5


def list_cache_key(page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> str:
    """Cache key for a page of the movie list."""
    return f"{MOVIES_KEY_PREFIX}list_page{page}_limit{limit}"


def search_cache_key(term: str) -> str:
    """Cache key for a movie search (the raw, unsanitized term)."""
    return f"{MOVIES_KEY_PREFIX}search_query{term}"


@dataclass(frozen=True)
class _Entry:
    value: Any
    ttl: float


def _time_to_use(_key: str, entry: _Entry, now: float) -> float:
    return now + entry.ttl


class ResponseCache:
    """
    Process-wide mapping from cache key to a computed JSON-serializable body.

    Entries expire autonomously after their TTL; writing a key again replaces the
    value and restarts its TTL. When the cache is full the least recently used
    entry is evicted first.

    Not thread-safe. Shared between asyncio tasks of a single event loop, where
    concurrent writers to one key are last-write-wins.
    """

    DEFAULT_TTL = 20  # seconds

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL,
        maxsize: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = default_ttl
        self._store: TLRUCache = TLRUCache(
            maxsize=maxsize, ttu=_time_to_use, timer=timer,
        )

    @property
    def default_ttl(self) -> float:
        """TTL applied when set() is called without one."""
        return self._default_ttl

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if absent or expired."""
        entry = self._store.get(key)
        if entry is None:
            logger.debug("response_cache_miss key=%s", key)
            return None
        logger.debug("response_cache_hit key=%s", key)
        return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value; its expiry becomes now + ttl (default TTL if omitted)."""
        ttl = self._default_ttl if ttl is None else ttl
        # Reinserting an existing key must restart its TTL.
        self._store.pop(key, None)
        self._store[key] = _Entry(value=value, ttl=ttl)
        logger.debug("response_cache_set key=%s ttl=%s", key, ttl)

    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every entry whose key starts with prefix. Returns the number dropped."""
        self._store.expire()
        keys = [key for key in list(self._store.keys()) if key.startswith(prefix)]
        for key in keys:
            self._store.pop(key, None)
        if keys:
            logger.debug("response_cache_invalidate prefix=%s count=%s", prefix, len(keys))
        return len(keys)

    def clear(self) -> None:
        """Drop every entry."""
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


def get_response_cache(request: Request) -> ResponseCache:
    """Dependency returning the cache created during application startup."""
    return request.app.state.response_cache
