"""In-memory response caching for nominatim_client.

This package provides :class:`ResponseCache`, which remembers decoded
successful responses and request errors in two independent
:class:`CachePool` instances. Both pools are bounded, expire entries a
fixed time after they were stored, and are safe to share between threads.

The cache is consumed by :class:`~nominatim_client.client.WebClient` and
:class:`~nominatim_client.client.AsyncWebClient` and is sized by
:class:`~nominatim_client.models.CacheConfig`. Nothing is ever written to
disk.
"""

from nominatim_client.cache.cache import (
    MISS,
    CacheHit,
    CacheLookup,
    CacheMiss,
    KnownError,
    ResponseCache,
)
from nominatim_client.cache.pool import CachePool

__all__ = [
    "MISS",
    "CacheHit",
    "CacheLookup",
    "CacheMiss",
    "CachePool",
    "KnownError",
    "ResponseCache",
]
