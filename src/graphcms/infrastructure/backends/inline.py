"""Inline refresh shared by the synchronous backends."""

import logging
from typing import Any

from graphcms.core.builders.document import BaseDocument
from graphcms.core.errors import GraphCMSError
from graphcms.core.interfaces.cache_adapter import ICacheAdapter

logger = logging.getLogger(__name__)


def refresh_inline(
    adapter: ICacheAdapter,
    document: BaseDocument,
    variables: dict[str, Any] | None = None,
    key: str | None = None,
) -> bool:
    """Execute a document and store the result, blocking the caller.

    Failures are logged and reported as False; the stale entry stays in
    place until the next refresh.

    Args:
        adapter: The adapter to write the fresh payload to.
        document: The document to execute.
        variables: Variable values of the original execution.
        key: Cache key to overwrite. Defaults to ``document.build()``.

    Returns:
        True if the entry was recomputed and stored.
    """
    try:
        cache_key = document.build() if key is None else key
        payload = document.execute(variables)
    except GraphCMSError as e:
        logger.warning("Inline refresh failed for %s: %s", document.name, e)
        return False
    return adapter.set(cache_key, payload)
