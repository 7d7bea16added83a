"""Filesystem cache adapter implementation."""

import contextlib
import logging
import os
import tempfile
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from graphcms.core.builders.document import BaseDocument
from graphcms.core.entities.cache_entry import CacheEntry
from graphcms.core.errors import CacheIOError, SerializationError
from graphcms.core.interfaces.serializer import ISerializer
from graphcms.infrastructure.backends.inline import refresh_inline
from graphcms.infrastructure.serializers.json import JsonSerializer
from graphcms.utils.hashing import content_digest

logger = logging.getLogger(__name__)


class FileCacheAdapter:
    """Cache adapter storing one JSON file per document.

    Files are named after the SHA-1 digest of the key, so any document
    maps to a short, filesystem-safe name. Each file holds
    ``{"updated": <epoch seconds>, "data": <payload>}``. Writes go to a
    temporary file that is renamed over the record, so readers never see
    a partial record. Refreshes run inline.
    """

    def __init__(
        self,
        cache_dir: str | os.PathLike[str],
        ttl: int = 3600,
        serializer: ISerializer | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the adapter and create the cache directory.

        Args:
            cache_dir: Directory holding the record files.
            ttl: Seconds after which an entry is reported stale.
            serializer: Record serializer. Defaults to JSON.
            clock: Source of the current epoch time.
        """
        self._cache_dir = Path(cache_dir)
        self.ttl = ttl
        self._serializer = serializer or JsonSerializer()
        self._clock = clock
        self._cache_dir.mkdir(mode=0o755, parents=True, exist_ok=True)

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def path_for(self, key: str) -> Path:
        """Return the record path for a key."""
        return self._cache_dir / f"{content_digest(key)}.json"

    def get(self, key: str) -> tuple[Any | None, bool]:
        """Read the record stored for a key.

        Args:
            key: The cache key.

        Returns:
            A ``(payload, stale)`` tuple; ``(None, False)`` if no record exists.

        Raises:
            CacheIOError: If the record cannot be read or decoded.
        """
        path = self.path_for(key)
        if not path.is_file():
            return None, False

        try:
            data = path.read_bytes()
        except OSError as e:
            raise CacheIOError(f"Failed to read cache record {path.name}: {e}") from e

        try:
            entry = CacheEntry.from_record(self._serializer.deserialize(data))
        except (SerializationError, ValueError) as e:
            raise CacheIOError(f"Corrupt cache record {path.name}: {e}") from e

        return entry.payload, entry.is_stale(self.ttl, self._clock())

    def set(self, key: str, payload: Any) -> bool:
        """Write the record for a key, replacing any previous one.

        Args:
            key: The cache key.
            payload: The payload to store.

        Returns:
            True if the record was written, False on failure.
        """
        path = self.path_for(key)
        entry = CacheEntry.create(payload, self._clock())

        try:
            data = self._serializer.serialize(entry.to_record())
        except SerializationError as e:
            logger.warning("Not caching %s: %s", path.name, e)
            return False

        tmp_name: str | None = None
        try:
            with tempfile.NamedTemporaryFile(
                dir=self._cache_dir, prefix=".", suffix=".tmp", delete=False
            ) as handle:
                tmp_name = handle.name
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            logger.warning("Failed to write cache record %s: %s", path.name, e)
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            return False
        return True

    def refresh(
        self,
        document: BaseDocument,
        variables: dict[str, Any] | None = None,
        key: str | None = None,
    ) -> bool:
        """Recompute the entry for a document inline."""
        return refresh_inline(self, document, variables, key)
