"""Cache entry entity."""

import math
import time
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """Immutable cache entry value object.

    Stores a payload together with the epoch second it was written.
    Entries never expire on their own; they only become stale.
    """

    payload: Any
    updated_at: int

    def age(self, now: float | None = None) -> int:
        """Seconds elapsed since the entry was written.

        Args:
            now: Current epoch time. Defaults to ``time.time()``.

        Returns:
            The entry age in whole seconds.
        """
        current = int(time.time() if now is None else now)
        return current - self.updated_at

    def is_stale(self, ttl: int, now: float | None = None) -> bool:
        """Check whether the entry is older than ``ttl`` seconds.

        An entry written at ``t0`` is still fresh at ``t0 + ttl`` and
        becomes stale at ``t0 + ttl + 1``.

        Args:
            ttl: Freshness window in seconds.
            now: Current epoch time. Defaults to ``time.time()``.

        Returns:
            True if the entry needs a refresh, False otherwise.
        """
        return self.age(now) > ttl

    def to_record(self) -> dict[str, Any]:
        """Return the storage record for this entry."""
        return {"updated": self.updated_at, "data": self.payload}

    @classmethod
    def from_record(cls, record: Any) -> "CacheEntry":
        """Rebuild an entry from a storage record.

        Args:
            record: A mapping with ``updated`` and ``data`` keys.

        Returns:
            The decoded CacheEntry.

        Raises:
            ValueError: If the record does not have the expected shape.
        """
        if not isinstance(record, dict) or "updated" not in record:
            raise ValueError("cache record is missing the 'updated' field")
        updated = record["updated"]
        if isinstance(updated, bool) or not isinstance(updated, (int, float)):
            raise ValueError(f"cache record timestamp must be a number, got {updated!r}")
        if not math.isfinite(updated):
            raise ValueError(f"cache record timestamp must be finite, got {updated!r}")
        return cls(payload=record.get("data"), updated_at=int(updated))

    @classmethod
    def create(cls, payload: Any, now: float | None = None) -> "CacheEntry":
        """Factory method stamping the entry with the current time.

        Args:
            payload: The value to cache.
            now: Current epoch time. Defaults to ``time.time()``.

        Returns:
            A new CacheEntry instance.
        """
        return cls(payload=payload, updated_at=int(time.time() if now is None else now))
