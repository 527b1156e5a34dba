"""Time-boxed cache for task metadata.

Entries are keyed by issue key and expire after a TTL. There is no
background timer: expired entries are dropped by sweep(), which the
fetcher runs at the start of every lookup, and get() never serves an
entry past its TTL.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ..linker_logging import get_logger

if TYPE_CHECKING:
    from .models import TaskMetadata

logger = get_logger()


@dataclass
class CacheEntry:
    """A cached metadata value with its insertion time."""

    key: str
    value: TaskMetadata
    inserted_at: float


class TaskCache:
    """TTL cache of TaskMetadata keyed by issue key.

    Not thread-safe: it is owned by one fetcher and only touched from the
    event loop thread.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,  # 5 minutes default
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the task cache.

        Args:
            ttl_seconds: Time-to-live for entries in seconds
            clock: Time source in seconds, injectable for tests
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

        # Statistics
        self._hits = 0
        self._misses = 0

    def _is_expired(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.inserted_at >= self.ttl_seconds

    def sweep(self) -> int:
        """Remove every entry whose age has reached the TTL.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired_keys = [
            key for key, entry in self._entries.items() if self._is_expired(entry, now)
        ]
        for key in expired_keys:
            del self._entries[key]
        if expired_keys:
            logger.debug(f"Swept {len(expired_keys)} expired task entries")
        return len(expired_keys)

    def get(self, key: str) -> TaskMetadata | None:
        """Get a cached value.

        Args:
            key: The issue key

        Returns:
            Cached metadata or None if not found/expired
        """
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None

        if self._is_expired(entry, self._clock()):
            del self._entries[key]
            self._misses += 1
            return None

        self._hits += 1
        return entry.value

    def set(self, key: str, value: TaskMetadata) -> None:
        """Store a value, replacing any entry for the same key.

        Args:
            key: The issue key
            value: The metadata to cache
        """
        self._entries[key] = CacheEntry(key=key, value=value, inserted_at=self._clock())

    def invalidate(self, key: str | None = None) -> int:
        """Invalidate cache entries.

        Args:
            key: If provided, only drop this issue key

        Returns:
            Number of entries removed
        """
        if key is None:
            count = len(self._entries)
            self._entries.clear()
            return count
        return 1 if self._entries.pop(key, None) is not None else 0

    def clear(self) -> int:
        """Clear all cache entries.

        Returns:
            Number of entries cleared
        """
        return self.invalidate()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @property
    def stats(self) -> dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with cache stats
        """
        total_requests = self._hits + self._misses
        hit_rate = self._hits / total_requests if total_requests > 0 else 0.0
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": hit_rate,
            "ttl_seconds": self.ttl_seconds,
        }
