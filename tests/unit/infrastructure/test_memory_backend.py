"""Tests for MemoryCacheAdapter."""

import pytest

from graphcms.core.builders.document import QUERY, Document
from graphcms.core.errors import TransportError
from graphcms.infrastructure.backends.memory import MemoryCacheAdapter


class TestMemoryCacheAdapter:
    """Tests for MemoryCacheAdapter."""

    @pytest.fixture
    def adapter(self, clock) -> MemoryCacheAdapter:
        """Create an adapter for testing."""
        return MemoryCacheAdapter(maxsize=100, ttl=300, clock=clock)

    def test_set_and_get(self, adapter: MemoryCacheAdapter) -> None:
        """Test basic set and get operations."""
        assert adapter.set("key1", {"data": 1}) is True
        assert adapter.get("key1") == ({"data": 1}, False)

    def test_get_missing_key(self, adapter: MemoryCacheAdapter) -> None:
        """Test getting a missing key reports a miss."""
        assert adapter.get("nonexistent") == (None, False)

    def test_staleness(self, adapter: MemoryCacheAdapter, clock) -> None:
        """Test that entries turn stale after the TTL but stay available."""
        adapter.set("key1", "value")

        clock.advance(300)
        assert adapter.get("key1") == ("value", False)

        clock.advance(1)
        assert adapter.get("key1") == ("value", True)

    def test_overwrite_resets_age(self, adapter: MemoryCacheAdapter, clock) -> None:
        """Test that a new write makes the entry fresh again."""
        adapter.set("key1", "old")
        clock.advance(400)
        adapter.set("key1", "new")

        assert adapter.get("key1") == ("new", False)
        assert adapter.entry("key1").updated_at == int(clock())

    def test_lru_eviction(self, clock) -> None:
        """Test LRU eviction when maxsize is reached."""
        adapter = MemoryCacheAdapter(maxsize=3, clock=clock)

        adapter.set("key1", 1)
        adapter.set("key2", 2)
        adapter.set("key3", 3)
        adapter.get("key1")
        adapter.set("key4", 4)

        assert adapter.get("key1") == (1, False)
        assert adapter.get("key2") == (None, False)
        assert len(adapter) == 3
        assert adapter.maxsize == 3

    def test_clear(self, adapter: MemoryCacheAdapter) -> None:
        """Test clearing all entries."""
        adapter.set("key1", 1)
        adapter.clear()
        assert len(adapter) == 0

    def test_refresh_runs_inline(self, adapter: MemoryCacheAdapter, transport, clock) -> None:
        """Test that refresh executes the document and overwrites the entry."""
        document = Document(QUERY, "user", ["name"]).bind(transport)
        adapter.set(document.build(), "old")
        clock.advance(301)

        assert adapter.refresh(document) is True
        assert adapter.get(document.build()) == ({"data": {"user": {"name": "Alice"}}}, False)

    def test_refresh_failure_keeps_entry(
        self, adapter: MemoryCacheAdapter, make_transport, clock
    ) -> None:
        """Test that a failed refresh leaves the stale entry in place."""
        document = Document(QUERY, "user", ["name"]).bind(make_transport(error=TransportError("down")))
        adapter.set("custom", "old")
        clock.advance(301)

        assert adapter.refresh(document, key="custom") is False
        assert adapter.get("custom") == ("old", True)
