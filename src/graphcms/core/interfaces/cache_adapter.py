"""Cache adapter interface."""

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from graphcms.core.builders.document import BaseDocument


class ICacheAdapter(Protocol):
    """Contract for cache adapters used by the GraphCMS client.

    Adapters store one payload per document key and report whether the
    stored payload is older than their TTL. How a stale entry gets
    refreshed is up to the adapter: synchronous adapters recompute inline,
    queue-backed adapters hand the work to a worker.
    """

    ttl: int

    def get(self, key: str) -> tuple[Any | None, bool]:
        """Retrieve the payload stored under a key.

        Args:
            key: The cache key.

        Returns:
            A ``(payload, stale)`` tuple. The payload is None on a miss.

        Raises:
            CacheIOError: If the backend cannot be read.
        """
        ...

    def set(self, key: str, payload: Any) -> bool:
        """Store a payload, stamped with the current time.

        Args:
            key: The cache key.
            payload: The decoded response to store.

        Returns:
            True if the payload was stored, False on backend failure.
        """
        ...

    def refresh(
        self,
        document: "BaseDocument",
        variables: dict[str, Any] | None = None,
        key: str | None = None,
    ) -> bool:
        """Recompute the entry for a document.

        Args:
            document: The document to execute again.
            variables: The variable values of the original execution.
            key: The cache key to overwrite. Defaults to ``document.build()``.

        Returns:
            True if the refresh was performed or queued, False on failure.
        """
        ...
