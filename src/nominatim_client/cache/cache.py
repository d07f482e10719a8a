"""Dual-pool in-memory cache for request outcomes.

:class:`ResponseCache` remembers two kinds of outcome per request key:

* decoded **successful** responses, so a repeated request returns without
  touching the network, and
* **error** messages, so a request known to fail is rejected immediately
  instead of hammering the server again.

Each kind lives in its own :class:`~nominatim_client.cache.pool.CachePool`
with independent capacity and lifespan. Either pool (or both) may be
absent, in which case the matching ``record_*`` method is a no-op and
:meth:`ResponseCache.lookup` never reports that kind of hit.

The cache is a passive store. It never performs I/O; the request flow in
:mod:`nominatim_client.client` queries it and reports outcomes back.

See Also:
    :class:`~nominatim_client.models.CacheConfig` -- the model that sizes
    both pools.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from nominatim_client.cache.pool import CachePool
from nominatim_client.models import CacheConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheHit(Generic[T]):
    """A live successful response was found."""

    value: T


@dataclass(frozen=True)
class KnownError:
    """The request key is known to fail; ``message`` describes the original error."""

    message: str


class CacheMiss:
    """Nothing live is stored for the request key."""

    _instance: Optional[CacheMiss] = None

    def __new__(cls) -> CacheMiss:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISS"


MISS = CacheMiss()

CacheLookup = Union[CacheHit[Any], KnownError, CacheMiss]


class ResponseCache:
    """Success and error pools keyed by request key.

    Args:
        success_pool: Pool for decoded successful responses, or ``None``
            to never cache successes.
        errors_pool: Pool for error messages, or ``None`` to never cache
            failures.

    Example::

        cache = ResponseCache.from_config(CacheConfig(success_cache_size=2))
        cache.record_success("https://example.org/search?q=a", [{"place_id": 1}])
        cache.lookup("https://example.org/search?q=a")   # CacheHit(value=[...])
        cache.record_error("https://example.org/search?q=b", "timeout")
        cache.lookup("https://example.org/search?q=b")   # KnownError(message='timeout')
        cache.lookup("https://example.org/search?q=c")   # MISS
    """

    def __init__(
        self,
        success_pool: Optional[CachePool[Any]] = None,
        errors_pool: Optional[CachePool[str]] = None,
    ) -> None:
        self._success_pool = success_pool
        self._errors_pool = errors_pool

    @classmethod
    def from_config(
        cls,
        config: Optional[CacheConfig],
        timer: Callable[[], float] = time.monotonic,
    ) -> ResponseCache:
        """Build a cache from *config*.

        ``None`` yields a fully disabled cache. A pool whose size is ``0``
        is not created.
        """
        if config is None:
            return cls()

        success_pool: Optional[CachePool[Any]] = None
        if config.success_cache_size > 0:
            success_pool = CachePool(
                config.success_cache_size, config.success_cache_entity_lifespan, timer=timer
            )

        errors_pool: Optional[CachePool[str]] = None
        if config.errors_cache_size > 0:
            errors_pool = CachePool(
                config.errors_cache_size, config.errors_cache_entity_lifespan, timer=timer
            )

        return cls(success_pool, errors_pool)

    @property
    def enabled(self) -> bool:
        """Whether at least one pool exists."""
        return self._success_pool is not None or self._errors_pool is not None

    @property
    def success_pool(self) -> Optional[CachePool[Any]]:
        return self._success_pool

    @property
    def errors_pool(self) -> Optional[CachePool[str]]:
        return self._errors_pool

    def lookup(self, key: str) -> CacheLookup:
        """Classify *key* as a hit, a known error, or a miss.

        The success pool is consulted first. Expired entries are treated
        as absent.
        """
        if self._success_pool is not None:
            found, value = self._success_pool.lookup(key)
            if found:
                logger.debug("Cache hit: %s", key)
                return CacheHit(value)

        if self._errors_pool is not None:
            found, message = self._errors_pool.lookup(key)
            if found:
                logger.debug("Cached error for %s: %s", key, message)
                return KnownError(message)

        return MISS

    def record_success(self, key: str, value: Any) -> None:
        """Remember a decoded response for *key*. No-op without a success pool."""
        if self._success_pool is None:
            return
        logger.debug("Caching response for %s", key)
        self._success_pool.set(key, value)

    def record_error(self, key: str, message: str) -> None:
        """Remember that *key* failed with *message*. No-op without an errors pool."""
        if self._errors_pool is None:
            return
        logger.debug("Caching error for %s: %s", key, message)
        self._errors_pool.set(key, message)

    def invalidate(self, key: str) -> None:
        """Forget *key* in both pools."""
        for pool in (self._success_pool, self._errors_pool):
            if pool is not None:
                pool.invalidate(key)

    def clear(self) -> None:
        """Remove every entry from both pools."""
        for pool in (self._success_pool, self._errors_pool):
            if pool is not None:
                pool.clear()

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            ``{"enabled": False}`` when no pool exists, otherwise
            ``enabled`` plus a ``success`` and an ``errors`` entry, each
            either ``None`` (pool disabled) or a dict with ``size``,
            ``capacity`` and ``lifespan_seconds``.
        """
        if not self.enabled:
            return {"enabled": False}
        return {
            "enabled": True,
            "success": self._success_pool.stats() if self._success_pool is not None else None,
            "errors": self._errors_pool.stats() if self._errors_pool is not None else None,
        }
