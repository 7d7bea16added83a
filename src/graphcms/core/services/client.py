"""GraphCMS client - binds documents, transport and cache together.

Mutations are not cached by default: unlike queries they always reach the
API unless ``CacheConfig.cache_mutations`` is set, so a stale or fresh
entry never stands in for a state change.
"""

import logging
from collections.abc import Mapping
from typing import Any

from graphcms.core.builders.document import (
    DEFAULT_OPERATION_NAME,
    QUERY,
    BaseDocument,
    Batch,
    Document,
)
from graphcms.core.builders.node import Entries
from graphcms.core.entities.cache_config import CacheConfig
from graphcms.core.entities.variable_type import Type
from graphcms.core.errors import CacheIOError, MalformedResponseError
from graphcms.core.interfaces.cache_adapter import ICacheAdapter
from graphcms.core.interfaces.key_builder import IKeyBuilder
from graphcms.core.interfaces.transport import ITransport
from graphcms.infrastructure.key_builders.default import DocumentKeyBuilder
from graphcms.infrastructure.transports.http import HttpTransport

logger = logging.getLogger(__name__)


class GraphCMS:
    """Client that executes documents through an optional cache.

    Documents created with :meth:`query` or :meth:`batch` are queued;
    :meth:`execute` runs the first queued document that has not been
    executed yet. With a cache adapter set, execution follows
    stale-while-revalidate:

    - miss: execute synchronously, store, return the fresh payload;
    - fresh hit: return the cached payload without calling the API;
    - stale hit: ask the adapter to refresh and return the stale payload
      immediately, whatever the refresh outcome.

    The cache key is the built document, so executions with different
    variable values share one entry unless the config sets
    ``vary_on_variables``.
    """

    def __init__(
        self,
        project_id: str,
        token: str,
        transport: ITransport | None = None,
        config: CacheConfig | None = None,
        key_builder: IKeyBuilder | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            project_id: The GraphCMS project id.
            token: The API token sent as bearer credential.
            transport: Transport used for all documents. Defaults to HTTP.
            config: Cache configuration. Uses defaults if not provided.
            key_builder: Cache key builder. Defaults to one built from config.
        """
        self._project_id = project_id
        self._token = token
        self._transport = transport or HttpTransport()
        self._config = config or CacheConfig()
        self._key_builder = key_builder or DocumentKeyBuilder(
            prefix=self._config.key_prefix,
            vary_on_variables=self._config.vary_on_variables,
        )
        self._cache: ICacheAdapter | None = None
        self._documents: list[BaseDocument] = []

        # Statistics
        self._hits = 0
        self._stale_hits = 0
        self._misses = 0

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def cache_adapter(self) -> ICacheAdapter | None:
        """Get the cache adapter, if one is set."""
        return self._cache

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dictionary with hits, stale hits, misses, and total lookups.
        """
        return {
            "hits": self._hits,
            "stale": self._stale_hits,
            "misses": self._misses,
            "total": self._hits + self._stale_hits + self._misses,
        }

    def set_cache_adapter(self, adapter: ICacheAdapter | None) -> "GraphCMS":
        """Set (or remove) the cache adapter.

        A ``ttl`` set on the config replaces the adapter's own freshness
        window.

        Returns:
            This client, for chaining.
        """
        if adapter is not None and self._config.ttl is not None:
            adapter.ttl = int(self._config.ttl)
        self._cache = adapter
        return self

    def query(
        self,
        operation: str,
        method: str,
        fields: Entries = None,
        variables: Mapping[str, Type | str] | None = None,
        params: Entries = None,
        name: str = DEFAULT_OPERATION_NAME,
    ) -> Document:
        """Create and queue a single-command document.

        Args:
            operation: ``query`` or ``mutation``.
            method: Root field to call, e.g. ``allPosts``.
            fields: Field selection.
            variables: Variable declarations.
            params: Root field arguments.
            name: Operation name.

        Returns:
            The queued document, for further building.
        """
        document = Document(operation, method, fields, variables, params, name)
        self.add(document)
        return document

    def batch(
        self,
        operation: str = QUERY,
        variables: Mapping[str, Type | str] | None = None,
        name: str = DEFAULT_OPERATION_NAME,
    ) -> Batch:
        """Create and queue a multi-command document.

        Returns:
            The queued batch; add commands with ``Batch.add``.
        """
        batch = Batch(operation, variables, name)
        self.add(batch)
        return batch

    def add(self, document: BaseDocument) -> BaseDocument:
        """Bind a document to this client and queue it."""
        document.bind(self._transport, self._project_id, self._token)
        self._documents.append(document)
        return document

    def pending(self) -> list[BaseDocument]:
        """Return the queued documents not executed yet."""
        return [document for document in self._documents if not document.executed()]

    def execute(self, values: dict[str, Any] | None = None) -> Any:
        """Execute the first queued document not executed yet.

        Args:
            values: Values for the document variables.

        Returns:
            The response payload, or None if nothing is pending or the
            response could not be decoded.
        """
        for document in self._documents:
            if not document.executed():
                return self.execute_document(document, values)
        logger.debug("No pending document to execute")
        return None

    def execute_document(
        self,
        document: BaseDocument,
        values: dict[str, Any] | None = None,
    ) -> Any:
        """Execute one document, consulting the cache if configured.

        Args:
            document: A bound document.
            values: Values for the document variables.

        Returns:
            The response payload, or None if the response could not be
            decoded.

        Raises:
            SerializationError: If the document cannot be built.
            TransportError: If the API call fails on a cache miss.
        """
        values = dict(values or {})

        cache = self._cache
        if cache is None or not self._should_cache(document):
            return self._dispatch(document, values)

        key = self._key_builder.build(document, values)

        try:
            payload, stale = cache.get(key)
        except CacheIOError as e:
            logger.warning("Cache read failed, executing directly: %s", e)
            payload, stale = None, False

        if payload is None:
            self._misses += 1
            logger.debug("MISS %s", document.name)
            payload = self._dispatch(document, values)
            if payload is not None and not cache.set(key, payload):
                logger.warning("Failed to store response for %s", document.name)
            return payload

        if stale:
            self._stale_hits += 1
            logger.debug("STALE %s, requesting refresh", document.name)
            if not cache.refresh(document, values, key=key):
                logger.warning("Refresh request failed for %s", document.name)
        else:
            self._hits += 1
            logger.debug("HIT %s", document.name)

        document.mark_cached()
        return payload

    def _should_cache(self, document: BaseDocument) -> bool:
        if self._cache is None or not self._config.enabled:
            return False
        if document.is_mutation and not self._config.cache_mutations:
            return False
        return True

    def _dispatch(self, document: BaseDocument, values: dict[str, Any]) -> Any:
        try:
            return document.execute(values)
        except MalformedResponseError as e:
            logger.warning("Discarding undecodable response for %s: %s", document.name, e)
            document.mark_cached()
            return None
