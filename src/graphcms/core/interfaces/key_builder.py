"""Key builder interface."""

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from graphcms.core.builders.document import BaseDocument


class IKeyBuilder(Protocol):
    """Contract for deriving cache keys from documents."""

    def build(
        self,
        document: "BaseDocument",
        variables: dict[str, Any] | None = None,
    ) -> str:
        """Build the cache key for a document execution.

        Args:
            document: The document being executed.
            variables: The variable values of this execution.

        Returns:
            The cache key string.
        """
        ...
