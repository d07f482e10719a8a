"""A single bounded, expiring, thread-safe key-value pool.

:class:`CachePool` wraps :class:`cachetools.TTLCache` with a lock. Every
entry costs one unit of capacity and lives for a fixed lifespan measured
from the moment it was stored; reading an entry does not extend it.

When storing a new key would exceed the capacity, expired entries are
purged first and then the least-recently-used live entry is evicted. With
no reads in between, that is the oldest stored entry.
"""

from __future__ import annotations

import threading
import time
from datetime import timedelta
from typing import Any, Callable, Generic, Hashable, TypeVar, Union

from cachetools import TTLCache

V = TypeVar("V")

_MISSING: Any = object()


class CachePool(Generic[V]):
    """Thread-safe LRU pool with a per-entry time-to-live.

    Args:
        capacity: Maximum number of live entries. Must be at least 1; a
            disabled pool is represented by not creating one at all.
        lifespan: Time-to-live of each entry, as a :class:`~datetime.timedelta`
            or a number of seconds.
        timer: Monotonic clock returning seconds. Tests inject a fake one.

    Example::

        pool: CachePool[str] = CachePool(2, timedelta(hours=1))
        pool.set("a", "1")
        pool.get("a")  # "1"
    """

    def __init__(
        self,
        capacity: int,
        lifespan: Union[timedelta, float],
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        seconds = lifespan.total_seconds() if isinstance(lifespan, timedelta) else float(lifespan)
        if seconds <= 0:
            raise ValueError(f"lifespan must be positive, got {lifespan!r}")

        self._capacity = capacity
        self._lifespan = seconds
        self._lock = threading.Lock()
        self._entries: TTLCache = TTLCache(maxsize=capacity, ttl=seconds, timer=timer)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def lifespan_seconds(self) -> float:
        return self._lifespan

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the live value stored under *key*, or *default*."""
        with self._lock:
            return self._entries.get(key, default)

    def lookup(self, key: Hashable) -> tuple[bool, Any]:
        """Return ``(found, value)`` so that stored ``None`` values are not mistaken for misses."""
        with self._lock:
            value = self._entries.get(key, _MISSING)
        if value is _MISSING:
            return False, None
        return True, value

    def set(self, key: Hashable, value: V) -> None:
        """Store *value* under *key*, restarting its lifespan."""
        with self._lock:
            self._entries[key] = value

    def invalidate(self, key: Hashable) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)

    def stats(self) -> dict[str, Any]:
        return {
            "size": len(self),
            "capacity": self._capacity,
            "lifespan_seconds": self._lifespan,
        }
