"""Redis cache adapter implementation."""

import logging
import time
from collections.abc import Callable
from typing import Any

import redis

from graphcms.core.builders.document import BaseDocument
from graphcms.core.entities.cache_entry import CacheEntry
from graphcms.core.errors import CacheIOError, SerializationError
from graphcms.core.interfaces.job_channel import IJobChannel
from graphcms.core.interfaces.serializer import ISerializer
from graphcms.infrastructure.serializers.json import JsonSerializer
from graphcms_redis.channel import RedisJobChannel

logger = logging.getLogger(__name__)


class RedisCacheAdapter:
    """Redis cache adapter with asynchronous refresh.

    Entries are stored under the document key itself (optionally
    prefixed). Stale entries are not recomputed here: ``refresh``
    publishes a job on the channel and returns at once, and a
    :class:`~graphcms.RefreshWorker` connected to the same Redis writes
    the fresh payload.
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        redis_url: str = "redis://localhost:6379",
        ttl: int = 3600,
        channel: IJobChannel | None = None,
        key_prefix: str | None = None,
        retention: int | None = None,
        serializer: ISerializer | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the Redis cache adapter.

        Args:
            client: Sync Redis client. Created from ``redis_url`` if omitted.
            redis_url: Redis connection URL.
            ttl: Seconds after which an entry is reported stale.
            channel: Job channel for refreshes. Defaults to a
                :class:`RedisJobChannel` on the same client.
            key_prefix: Optional prefix for all keys.
            retention: Optional Redis expiry in seconds, for housekeeping
                of entries nobody reads anymore. Should exceed ``ttl``.
            serializer: Record serializer. Defaults to JSON.
            clock: Source of the current epoch time.
        """
        self._redis: redis.Redis = client if client is not None else redis.Redis.from_url(redis_url)
        self.ttl = ttl
        self._channel = channel or RedisJobChannel(self._redis)
        self._key_prefix = key_prefix
        self._retention = retention
        self._serializer = serializer or JsonSerializer()
        self._clock = clock

    @property
    def channel(self) -> IJobChannel:
        return self._channel

    def get(self, key: str) -> tuple[Any | None, bool]:
        """Retrieve the payload stored under a key.

        Args:
            key: The cache key.

        Returns:
            A ``(payload, stale)`` tuple; ``(None, False)`` on a miss.

        Raises:
            CacheIOError: If Redis cannot be read or the record is corrupt.
        """
        try:
            data = self._redis.get(self._prefixed_key(key))
        except redis.RedisError as e:
            raise CacheIOError(f"Failed to read cache entry: {e}") from e

        if data is None:
            return None, False

        try:
            entry = CacheEntry.from_record(self._serializer.deserialize(data))
        except (SerializationError, ValueError) as e:
            raise CacheIOError(f"Corrupt cache entry: {e}") from e

        return entry.payload, entry.is_stale(self.ttl, self._clock())

    def set(self, key: str, payload: Any) -> bool:
        """Store a payload stamped with the current time.

        Args:
            key: The cache key.
            payload: The payload to store.

        Returns:
            True if Redis stored the entry, False otherwise.
        """
        entry = CacheEntry.create(payload, self._clock())
        try:
            data = self._serializer.serialize(entry.to_record())
            return bool(self._redis.set(self._prefixed_key(key), data, ex=self._retention))
        except (SerializationError, redis.RedisError) as e:
            logger.warning("Failed to store cache entry: %s", e)
            return False

    def refresh(
        self,
        document: BaseDocument,
        variables: dict[str, Any] | None = None,
        key: str | None = None,
    ) -> bool:
        """Queue a refresh job for a document.

        Returns:
            True if the job was published.
        """
        try:
            job = document.to_job(key, variables)
        except SerializationError as e:
            logger.warning("Cannot describe %s as a refresh job: %s", document.name, e)
            return False
        return self._channel.publish(job)

    def close(self) -> None:
        """Close the Redis connection."""
        self._redis.close()

    def __enter__(self) -> "RedisCacheAdapter":
        return self

    def __exit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        self.close()

    def _prefixed_key(self, key: str) -> str:
        if self._key_prefix:
            return f"{self._key_prefix}:{key}"
        return key
