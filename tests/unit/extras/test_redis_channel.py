"""Tests for RedisJobChannel."""

import pytest

pytest.importorskip("redis")

from graphcms.core.entities.refresh_job import RefreshJob  # noqa: E402
from graphcms.core.errors import CacheIOError  # noqa: E402
from graphcms_redis import DEFAULT_CHANNEL, RedisJobChannel  # noqa: E402


def make_job(key: str) -> RefreshJob:
    return RefreshJob(key=key, document=f"query method{{{key}{{id}}}}")


class TestRedisJobChannel:
    """Tests for RedisJobChannel."""

    @pytest.fixture
    def channel(self, fake_redis) -> RedisJobChannel:
        """Create a channel over the fake client."""
        return RedisJobChannel(fake_redis)

    def test_publish_and_consume(self, channel: RedisJobChannel) -> None:
        """Test that a published job comes back unchanged."""
        job = RefreshJob(key="k", document="query method{a{b}}", endpoint_id="p", variables={"x": 1})

        assert channel.publish(job) is True
        assert channel.consume(timeout=0) == job

    def test_publication_order(self, channel: RedisJobChannel) -> None:
        """Test that jobs are consumed first in, first out."""
        channel.publish(make_job("a"))
        channel.publish(make_job("b"))

        assert channel.consume(timeout=0).key == "a"
        assert channel.consume(timeout=0).key == "b"

    def test_empty(self, channel: RedisJobChannel) -> None:
        """Test that an empty list times out with None."""
        assert channel.consume(timeout=0) is None
        assert len(channel) == 0

    def test_default_name(self, channel: RedisJobChannel, fake_redis) -> None:
        """Test the default list key."""
        channel.publish(make_job("a"))
        assert channel.name == DEFAULT_CHANNEL
        assert len(fake_redis.lists[DEFAULT_CHANNEL]) == 1

    def test_malformed_message_is_discarded(self, channel: RedisJobChannel, fake_redis) -> None:
        """Test that garbage on the list is skipped."""
        fake_redis.lpush(DEFAULT_CHANNEL, b'{"key": "only"}')
        fake_redis.lpush(DEFAULT_CHANNEL, b"not json")
        fake_redis.lpush(
            DEFAULT_CHANNEL, b'{"key": "k", "document": "query method{a{b}}", "variables": [1]}'
        )

        assert channel.consume(timeout=0) is None
        assert channel.consume(timeout=0) is None
        assert channel.consume(timeout=0) is None

    def test_publish_failure(self, channel: RedisJobChannel, fake_redis) -> None:
        """Test that an unreachable Redis is reported as False."""
        fake_redis.fail = True
        assert channel.publish(make_job("a")) is False

    def test_unserializable_job(self, channel: RedisJobChannel) -> None:
        """Test that a job with unencodable variables is not queued."""
        job = RefreshJob(key="k", document="query method{a{b}}", variables={"x": object()})
        assert channel.publish(job) is False
        assert len(channel) == 0

    def test_consume_failure(self, channel: RedisJobChannel, fake_redis) -> None:
        """Test that an unreachable Redis raises on consume."""
        fake_redis.fail = True
        with pytest.raises(CacheIOError):
            channel.consume(timeout=0)
