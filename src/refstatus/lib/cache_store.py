"""Key/value cache stores with per-entry TTL.

Provides the CacheStore interface used by the cache policy and an in-memory
implementation shared process-wide.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class CacheStore(ABC):
    """Abstract key/value store with TTL support."""

    @abstractmethod
    def read(self, key: str) -> Any | None:
        """Return the live value for a key, or None when absent or expired."""

    @abstractmethod
    def write(self, key: str, value: Any, ttl: timedelta) -> None:
        """Store a value for a key, replacing any existing entry.

        Args:
            key: Cache key
            value: Value to store
            ttl: Time-to-live for the entry
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a key.

        Returns:
            True if an entry was removed, False if not found.
        """


@dataclass
class CacheEntry:
    """Stored value with its expiry.

    Attributes:
        value: The cached value.
        expires_at: UTC timestamp after which the entry is no longer live.
    """

    value: Any
    expires_at: datetime


class MemoryCacheStore(CacheStore):
    """In-memory cache store with TTL-based expiration.

    Expired entries are dropped lazily on read and in bulk by
    ``cleanup_expired``.

    Attributes:
        entries: Dictionary mapping cache keys to CacheEntry objects.
    """

    def __init__(self, clock: Clock = utcnow) -> None:
        """Initialize the store.

        Args:
            clock: Callable returning the current UTC time.
        """
        self.entries: dict[str, CacheEntry] = {}
        self._clock = clock
        self._lock = threading.Lock()

    def read(self, key: str) -> Any | None:
        with self._lock:
            entry = self.entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self.entries[key]
                return None
            return entry.value

    def write(self, key: str, value: Any, ttl: timedelta) -> None:
        with self._lock:
            self.entries[key] = CacheEntry(
                value=value, expires_at=self._clock() + ttl
            )

    def delete(self, key: str) -> bool:
        with self._lock:
            return self.entries.pop(key, None) is not None

    def cleanup_expired(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed.
        """
        now = self._clock()
        with self._lock:
            expired_keys = [
                key for key, entry in self.entries.items() if entry.expires_at <= now
            ]
            for key in expired_keys:
                del self.entries[key]
        return len(expired_keys)


# Process-wide store used when no store is injected.
DEFAULT_STORE = MemoryCacheStore()
