"""Redis backend for graphcms.

Provides a cache adapter that serves stale entries immediately and
queues refresh jobs in Redis, plus the worker that processes them.
"""

from graphcms_redis.backend import RedisCacheAdapter
from graphcms_redis.channel import DEFAULT_CHANNEL, RedisJobChannel

__all__ = [
    "DEFAULT_CHANNEL",
    "RedisCacheAdapter",
    "RedisJobChannel",
]
