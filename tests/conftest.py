"""Pytest configuration for graphcms tests."""

import queue
from typing import Any

import pytest

from graphcms.core.entities.refresh_job import RefreshJob


class FakeClock:
    """Settable epoch clock."""

    def __init__(self, now: float = 1_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubTransport:
    """Transport returning scripted responses and recording calls.

    The last response is repeated once the script is exhausted.
    """

    def __init__(self, responses: list[Any] | None = None, error: Exception | None = None) -> None:
        self.responses = list(responses or [{"data": {}}])
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def execute(
        self,
        document: str,
        project_id: str | None,
        credential: str | None,
        variables: dict[str, Any],
        operation_name: str = "method",
    ) -> Any:
        self.calls.append(
            {
                "document": document,
                "project_id": project_id,
                "credential": credential,
                "variables": variables,
                "operation_name": operation_name,
            }
        )
        if self.error is not None:
            raise self.error
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


class QueueChannel:
    """In-process job channel backed by ``queue.Queue``."""

    def __init__(self) -> None:
        self.jobs: queue.Queue[RefreshJob] = queue.Queue()

    def publish(self, job: RefreshJob) -> bool:
        self.jobs.put(job)
        return True

    def consume(self, timeout: float = 1.0) -> RefreshJob | None:
        try:
            return self.jobs.get(timeout=timeout)
        except queue.Empty:
            return None


class FakeRedis:
    """Dict-backed stand-in for the subset of ``redis.Redis`` in use."""

    def __init__(self) -> None:
        self.store: dict[str, bytes] = {}
        self.expiry: dict[str, int | None] = {}
        self.lists: dict[str, list[bytes]] = {}
        self.fail = False
        self.closed = False

    def _check(self) -> None:
        if self.fail:
            import redis

            raise redis.ConnectionError("Connection refused")

    def get(self, key: str) -> bytes | None:
        self._check()
        return self.store.get(key)

    def set(self, key: str, value: bytes, ex: int | None = None) -> bool:
        self._check()
        self.store[key] = value
        self.expiry[key] = ex
        return True

    def lpush(self, name: str, *values: bytes) -> int:
        self._check()
        items = self.lists.setdefault(name, [])
        for value in values:
            items.insert(0, value)
        return len(items)

    def brpop(self, keys: list[str], timeout: float = 0) -> tuple[bytes, bytes] | None:
        self._check()
        for key in keys:
            items = self.lists.get(key)
            if items:
                return key.encode(), items.pop()
        return None

    def llen(self, name: str) -> int:
        return len(self.lists.get(name, []))

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock() -> FakeClock:
    """Create a clock frozen at a fixed epoch."""
    return FakeClock()


@pytest.fixture
def transport() -> StubTransport:
    """Create a transport answering with a single payload."""
    return StubTransport([{"data": {"user": {"name": "Alice"}}}])


@pytest.fixture
def make_transport():
    """Factory for transports with custom scripts."""
    return StubTransport


@pytest.fixture
def channel() -> QueueChannel:
    """Create an in-process job channel."""
    return QueueChannel()


@pytest.fixture
def fake_redis() -> FakeRedis:
    """Create a fake Redis client."""
    return FakeRedis()
