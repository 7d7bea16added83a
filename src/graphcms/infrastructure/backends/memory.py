"""In-memory cache adapter implementation."""

import time
from collections.abc import Callable
from typing import Any

from cachetools import LRUCache  # type: ignore[import-untyped]

from graphcms.core.builders.document import BaseDocument
from graphcms.core.entities.cache_entry import CacheEntry
from graphcms.infrastructure.backends.inline import refresh_inline


class MemoryCacheAdapter:
    """In-memory cache adapter with LRU eviction.

    Suitable for single-process deployments and tests. Entries are kept
    past their TTL (they turn stale, not missing) until evicted by size.
    Refreshes run inline.
    """

    def __init__(
        self,
        maxsize: int = 1000,
        ttl: int = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the in-memory cache adapter.

        Args:
            maxsize: Maximum number of entries kept.
            ttl: Seconds after which an entry is reported stale.
            clock: Source of the current epoch time.
        """
        self._maxsize = maxsize
        self.ttl = ttl
        self._clock = clock
        self._cache: LRUCache[str, CacheEntry] = LRUCache(maxsize=maxsize)

    def get(self, key: str) -> tuple[Any | None, bool]:
        """Retrieve the payload stored under a key.

        Args:
            key: The cache key.

        Returns:
            A ``(payload, stale)`` tuple; ``(None, False)`` on a miss.
        """
        entry = self._cache.get(key)
        if entry is None:
            return None, False
        return entry.payload, entry.is_stale(self.ttl, self._clock())

    def set(self, key: str, payload: Any) -> bool:
        """Store a payload stamped with the current time.

        Args:
            key: The cache key.
            payload: The payload to store.

        Returns:
            Always True.
        """
        self._cache[key] = CacheEntry.create(payload, self._clock())
        return True

    def refresh(
        self,
        document: BaseDocument,
        variables: dict[str, Any] | None = None,
        key: str | None = None,
    ) -> bool:
        """Recompute the entry for a document inline."""
        return refresh_inline(self, document, variables, key)

    def entry(self, key: str) -> CacheEntry | None:
        """Return the raw entry stored under a key, or None."""
        return self._cache.get(key)

    def clear(self) -> None:
        """Remove all entries."""
        self._cache.clear()

    def __len__(self) -> int:
        """Return the number of entries in the cache."""
        return len(self._cache)

    @property
    def maxsize(self) -> int:
        """Return the maximum size of the cache."""
        return self._maxsize
