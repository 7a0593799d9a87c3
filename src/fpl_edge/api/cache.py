"""
Analysis Caching Layer.

Single-slot, in-memory cache for the generated top picks payload. Callers
pass "now" explicitly so expiry can be tested without real delays.
"""

import logging
import time
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TTL = 12 * 60 * 60  # 12 hours


class CacheEntry(Generic[T]):
    """Represents a cached item with metadata."""

    def __init__(self, data: T, timestamp: float, ttl: float):
        self.data = data
        self.timestamp = timestamp
        self.ttl = ttl

    def age(self, now: float) -> float:
        """Get age of cache entry in seconds."""
        return now - self.timestamp

    def is_expired(self, now: float) -> bool:
        """Entry is valid while its age is strictly below the TTL."""
        return self.age(now) >= self.ttl


class AnalysisCache(Generic[T]):
    """
    Single-slot cache with a fixed TTL.

    No invalidation, no persistence and no locking: a raced regeneration
    just overwrites the slot with an equivalent payload.
    """

    def __init__(self, ttl: float = DEFAULT_TTL):
        """
        Initialize the cache.

        Args:
            ttl: Seconds a stored payload stays valid
        """
        self.ttl = ttl
        self._entry: CacheEntry[T] | None = None

    def get(self, now: float | None = None) -> T | None:
        """
        Get the cached payload.

        Returns:
            The payload if present and not expired, None otherwise
        """
        now = time.time() if now is None else now
        entry = self._entry

        if entry is None:
            logger.debug("Cache miss: empty")
            return None

        if entry.is_expired(now):
            logger.debug(f"Cache expired (age: {entry.age(now):.0f}s)")
            return None

        logger.debug(f"Cache hit (age: {entry.age(now):.0f}s)")
        return entry.data

    def set(self, data: T, now: float | None = None) -> None:
        """Store the payload, replacing any previous one."""
        now = time.time() if now is None else now
        self._entry = CacheEntry(data=data, timestamp=now, ttl=self.ttl)
        logger.debug(f"Cached analysis (ttl: {self.ttl}s)")
