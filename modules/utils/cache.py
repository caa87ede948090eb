"""Simple in-memory TTL cache used to hold per-session objects."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    """Store cached value with expiration metadata."""

    value: V
    expires_at: float


class TTLCache(Generic[K, V]):
    """Sliding-expiry cache: every read pushes the entry's deadline back."""

    def __init__(self, ttl_seconds: float = 3600.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._data: Dict[K, CacheEntry[V]] = {}

    def set(self, key: K, value: V) -> None:
        """Insert a value into the cache."""
        self.purge_expired()
        self._data[key] = CacheEntry(value=value, expires_at=self._clock() + self.ttl_seconds)

    def get(self, key: K) -> Optional[V]:
        """Retrieve a cached value if it has not expired."""
        entry = self._data.get(key)
        if entry is None:
            return None
        now = self._clock()
        if entry.expires_at < now:
            self._data.pop(key, None)
            return None
        entry.expires_at = now + self.ttl_seconds
        return entry.value

    def get_or_create(self, key: K, factory: Callable[[], V]) -> V:
        """Return the cached value, creating and storing it when missing."""
        value = self.get(key)
        if value is None:
            value = factory()
            self.set(key, value)
        return value

    def pop(self, key: K) -> Optional[V]:
        """Remove an entry and return its value."""
        entry = self._data.pop(key, None)
        return entry.value if entry is not None else None

    def purge_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        now = self._clock()
        expired = [key for key, entry in self._data.items() if entry.expires_at < now]
        for key in expired:
            del self._data[key]
        return len(expired)

    def clear(self) -> None:
        """Remove all entries."""
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data
