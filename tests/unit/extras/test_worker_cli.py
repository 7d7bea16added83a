"""Tests for the refresh worker command line."""

from typing import Any

import pytest

pytest.importorskip("redis")
pytest.importorskip("typer")

from typer.testing import CliRunner  # noqa: E402

from graphcms.core.entities.refresh_job import RefreshJob  # noqa: E402
from graphcms.core.services.refresh_worker import RefreshWorker  # noqa: E402
from graphcms_redis import RedisCacheAdapter, RedisJobChannel  # noqa: E402
from graphcms_redis import worker as worker_cli  # noqa: E402

runner = CliRunner()


@pytest.fixture
def launched(monkeypatch, fake_redis) -> dict[str, list[Any]]:
    """Patch out Redis, signals and the blocking loop.

    Returns the recorded connection arguments and the started workers.
    """
    record: dict[str, list[Any]] = {"connections": [], "workers": []}

    def connect(**kwargs: Any):
        record["connections"].append(kwargs)
        return fake_redis

    monkeypatch.setattr(worker_cli.redis, "Redis", connect)
    monkeypatch.setattr(worker_cli, "_setup_signal_handlers", lambda worker: None)
    monkeypatch.setattr(RefreshWorker, "run", lambda self: record["workers"].append(self))
    return record


class TestWorkerCommand:
    """Tests for the graphcms-refresh-worker command."""

    def test_defaults(self, launched: dict[str, list[Any]], fake_redis) -> None:
        """Test that the worker connects to the default Redis and runs."""
        result = runner.invoke(worker_cli.app, [])

        assert result.exit_code == 0, result.output
        assert launched["connections"] == [{"host": "127.0.0.1", "port": 6379, "db": 0}]
        assert len(launched["workers"]) == 1
        assert fake_redis.closed

    def test_options(self, launched: dict[str, list[Any]]) -> None:
        """Test that connection options reach the client."""
        result = runner.invoke(
            worker_cli.app,
            ["--host", "redis.internal", "--port", "6380", "--db", "2", "--token", "t", "-v"],
        )

        assert result.exit_code == 0, result.output
        assert launched["connections"] == [{"host": "redis.internal", "port": 6380, "db": 2}]

    def test_environment(self, launched: dict[str, list[Any]], monkeypatch) -> None:
        """Test that connection settings can come from the environment."""
        monkeypatch.setenv("GRAPHCMS_REDIS_HOST", "cache")
        monkeypatch.setenv("GRAPHCMS_REDIS_PORT", "7000")

        result = runner.invoke(worker_cli.app, [])

        assert result.exit_code == 0, result.output
        assert launched["connections"] == [{"host": "cache", "port": 7000, "db": 0}]


class TestBuildWorker:
    """Tests for wiring a worker to Redis."""

    def test_worker_processes_published_job(self, fake_redis, transport) -> None:
        """Test that the wired worker reads jobs from the configured list."""
        worker = worker_cli.build_worker(
            fake_redis, token="t", channel="jobs", ttl=60, transport=transport
        )
        RedisJobChannel(fake_redis, name="jobs").publish(
            RefreshJob(key="query method{user{name}}", document="query method{user{name}}")
        )

        assert worker.run_once(timeout=0) is True

        adapter = RedisCacheAdapter(fake_redis, ttl=60)
        assert adapter.get("query method{user{name}}") == (
            {"data": {"user": {"name": "Alice"}}},
            False,
        )
        assert transport.calls[0]["credential"] == "t"
