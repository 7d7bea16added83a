"""Redis job channel implementation."""

import logging

import redis

from graphcms.core.entities.refresh_job import RefreshJob
from graphcms.core.errors import CacheIOError, SerializationError
from graphcms.core.interfaces.serializer import ISerializer
from graphcms.infrastructure.serializers.json import JsonSerializer

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL = "graphcms:refresh"


class RedisJobChannel:
    """Refresh job queue stored in a Redis list.

    Producers ``LPUSH`` job messages and workers ``BRPOP`` them, so jobs
    are taken roughly in publication order and each delivery reaches a
    single worker. Several workers may consume the same list.
    """

    def __init__(
        self,
        client: redis.Redis,
        name: str = DEFAULT_CHANNEL,
        serializer: ISerializer | None = None,
    ) -> None:
        """Initialize the channel.

        Args:
            client: Sync Redis client.
            name: Redis key of the job list.
            serializer: Message serializer. Defaults to JSON.
        """
        self._redis = client
        self._name = name
        self._serializer = serializer or JsonSerializer()

    @property
    def name(self) -> str:
        return self._name

    def publish(self, job: RefreshJob) -> bool:
        """Enqueue a job without waiting for it to be processed.

        Args:
            job: The job to enqueue.

        Returns:
            True if Redis accepted the job, False otherwise.
        """
        try:
            data = self._serializer.serialize(job.to_message())
        except SerializationError as e:
            logger.warning("Cannot enqueue refresh job for %s: %s", job.operation_name, e)
            return False

        try:
            self._redis.lpush(self._name, data)
        except redis.RedisError as e:
            logger.warning("Failed to publish refresh job on %s: %s", self._name, e)
            return False
        return True

    def consume(self, timeout: float = 1.0) -> RefreshJob | None:
        """Take the next job from the list.

        Malformed messages are logged and discarded.

        Args:
            timeout: Seconds to block waiting for a job.

        Returns:
            The next job, or None if none arrived in time.

        Raises:
            CacheIOError: If Redis cannot be reached.
        """
        try:
            item = self._redis.brpop([self._name], timeout=timeout)
        except redis.RedisError as e:
            raise CacheIOError(f"Failed to read from {self._name}: {e}") from e

        if item is None:
            return None

        _, data = item
        try:
            return RefreshJob.from_message(self._serializer.deserialize(data))
        except (SerializationError, ValueError) as e:
            logger.warning("Discarding malformed refresh job: %s", e)
            return None

    def __len__(self) -> int:
        """Return the number of queued jobs."""
        return int(self._redis.llen(self._name))
