"""In-memory time-to-live cache.

Entries are valid until a fixed expiry computed at insertion time. A stale
entry is evicted the next time it is read. The store is guarded by a single
lock so the cache can be shared by concurrent callers.

Typical usage:
    cache: TTLCache[ExportIndex] = TTLCache()
    index = cache.get(package_root)
    if index is None:
        index = builder.build(package_root / "src")
        cache.put(package_root, index)
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

V = TypeVar("V")

# 5 minutes
TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """A cached value and the clock reading after which it is stale."""

    value: V
    expires_at: float


class TTLCache(Generic[V]):
    """Keyed TTL cache with last-writer-wins puts."""

    def __init__(
        self,
        ttl_seconds: float = TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            ttl_seconds: Default validity of an entry in seconds.
            clock: Monotonic time source, injectable for tests.
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry[V]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> V | None:
        """Return the cached value, or None if missing or expired.

        Expired entries are removed as a side effect.
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() < entry.expires_at:
                return entry.value
            del self._entries[key]
            return None

    def put(self, key: str, value: V, ttl: float | None = None) -> None:
        """Store value under key, replacing any existing entry.

        Args:
            key: Cache key.
            value: Value to store. Callers must treat it as immutable.
            ttl: Validity in seconds. Defaults to the cache-wide TTL.
        """
        lifetime = self.ttl_seconds if ttl is None else ttl
        with self._lock:
            self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + lifetime)

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
