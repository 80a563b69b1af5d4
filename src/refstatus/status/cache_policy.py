"""Read-through caching of provider results with adaptive expiry.

Only immutable (versioned) references are cached. How long a result lives
depends on how settled it looks: fresh pending statuses expire quickly, old
resolved statuses are kept for a day.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import timedelta
from typing import Any, TypeVar

from refstatus.lib.cache_store import CacheStore, Clock, utcnow
from refstatus.lib.version import is_versioned
from refstatus.models.config import CacheConfig
from refstatus.models.status import CommitStatusResult, StatusState

logger = logging.getLogger(__name__)

T = TypeVar("T")

Expiry = timedelta | Callable[[Any], timedelta]


def cache_key(project_id: int, reference: str) -> str:
    """Cache key for a project's reference."""
    return f"commit-status/{project_id}/{reference}"


class CachePolicy:
    """Decides whether and for how long provider results are cached.

    Attributes:
        store: Backing key/value store.
        config: Durations and thresholds.
    """

    def __init__(
        self,
        store: CacheStore,
        config: CacheConfig | None = None,
        clock: Clock = utcnow,
    ) -> None:
        """Initialize the policy.

        Args:
            store: Backing cache store.
            config: Cache durations; defaults apply when omitted.
            clock: Callable returning the current UTC time.
        """
        self.store = store
        self.config = config or CacheConfig()
        self._clock = clock

    def should_cache(self, reference: str) -> bool:
        """Return True if results for the reference may be cached."""
        return self.config.enabled and is_versioned(reference)

    def fetch_if(
        self,
        should_cache: bool,
        key: str,
        expires_in: Expiry,
        compute: Callable[[], T],
    ) -> T:
        """Fetch through the cache when ``should_cache`` is set.

        When ``should_cache`` is False the store is neither read nor written.
        Otherwise a live entry is returned as is; on a miss ``compute`` runs,
        ``expires_in`` is resolved against its result and the value is stored.
        A None result is returned without being stored.

        Args:
            should_cache: Whether the cache may be used at all.
            key: Cache key.
            expires_in: TTL, or a callable mapping the computed value to a TTL.
            compute: Produces the value on a miss.

        Returns:
            Cached or freshly computed value.
        """
        if not should_cache:
            return compute()

        cached = self.store.read(key)
        if cached is not None:
            logger.debug(f"Cache hit for {key}")
            return cached

        logger.debug(f"Cache miss for {key}")
        value = compute()
        if value is None:
            # the store reads None as a miss
            logger.debug(f"Not caching empty result for {key}")
            return value
        ttl = expires_in(value) if callable(expires_in) else expires_in
        self.store.write(key, value, ttl)
        return value

    def cache_duration(self, result: CommitStatusResult) -> timedelta:
        """Pick a TTL from how fresh and how final the result is."""
        last_updated = result.last_updated_at
        if not result.statuses or last_updated is None:
            return self.config.duration("unknown_ttl")

        age = self._clock() - last_updated

        if age >= self.config.duration("settled_after"):
            return self.config.duration("settled_ttl")
        if result.state == StatusState.PENDING and age < self.config.duration(
            "pending_window"
        ):
            return self.config.duration("pending_ttl")
        return self.config.duration("recent_ttl")

    def expire(self, key: str) -> bool:
        """Remove a cached entry regardless of its TTL."""
        removed = self.store.delete(key)
        logger.debug(f"Expired cache entry {key}: {'removed' if removed else 'absent'}")
        return removed
