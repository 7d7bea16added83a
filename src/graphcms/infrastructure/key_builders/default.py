"""Default key builder implementation."""

from typing import Any

from graphcms.core.builders.document import BaseDocument
from graphcms.utils.hashing import hash_value


class DocumentKeyBuilder:
    """Key builder using the built document as the key.

    By default the key is the document string alone, so executions with
    different variable values share an entry. With ``vary_on_variables``
    a hash of the values is appended.
    """

    def __init__(
        self,
        prefix: str | None = None,
        vary_on_variables: bool = False,
    ) -> None:
        """Initialize the key builder.

        Args:
            prefix: Optional prefix for all cache keys.
            vary_on_variables: Whether variable values are part of the key.
        """
        self._prefix = prefix
        self._vary_on_variables = vary_on_variables

    def build(
        self,
        document: BaseDocument,
        variables: dict[str, Any] | None = None,
    ) -> str:
        """Build the cache key for a document execution.

        Args:
            document: The document being executed.
            variables: Variable values of this execution.

        Returns:
            The cache key string.
        """
        parts = []
        if self._prefix:
            parts.append(self._prefix)

        parts.append(document.build())

        if self._vary_on_variables and variables:
            parts.append(f"v:{hash_value(variables)}")

        return ":".join(parts)
