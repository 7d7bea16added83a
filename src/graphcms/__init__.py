"""graphcms - GraphCMS client with stale-while-revalidate caching.

Builds GraphQL documents from nested parameter and field structures and
executes them through a pluggable cache. The built document doubles as
the cache key. Stale entries are served immediately while a refresh runs
inline (file and memory adapters) or in a separate worker process (Redis
adapter, see the ``graphcms_redis`` extra).

Example:
    from graphcms import EnumValue, FileCacheAdapter, GraphCMS, QUERY, Type, Variable

    cms = GraphCMS("my-project-id", "my-token")
    cms.set_cache_adapter(FileCacheAdapter("/tmp/graphcms", ttl=600))

    posts = cms.query(
        QUERY,
        "allPosts",
        fields=["id", "title", {"author": ["name"]}],
        variables={"first": Type(Type.INT).required()},
        params={"first": Variable("first"), "orderBy": EnumValue("createdAt_DESC")},
    )
    posts.build()
    # query method($first:Int!){allPosts(first:$first,orderBy:createdAt_DESC)
    #   {id,title,author{name}}}

    data = cms.execute({"first": 10})
"""

from graphcms.core.builders import (
    DEFAULT_OPERATION_NAME,
    MUTATION,
    QUERY,
    BaseDocument,
    Batch,
    Command,
    Document,
    EnumValue,
    Node,
    RawDocument,
    Selection,
    Variable,
    VariableSet,
)
from graphcms.core.entities import CacheConfig, CacheEntry, RefreshJob, Type
from graphcms.core.errors import (
    CacheIOError,
    GraphCMSError,
    MalformedResponseError,
    SerializationError,
    TransportError,
)
from graphcms.core.interfaces import (
    ICacheAdapter,
    IJobChannel,
    IKeyBuilder,
    ISerializer,
    ITransport,
)
from graphcms.core.services import GraphCMS, RefreshWorker
from graphcms.infrastructure import (
    DocumentKeyBuilder,
    FileCacheAdapter,
    HttpTransport,
    JsonSerializer,
    MemoryCacheAdapter,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Client
    "GraphCMS",
    "RefreshWorker",
    # Documents
    "QUERY",
    "MUTATION",
    "DEFAULT_OPERATION_NAME",
    "BaseDocument",
    "Batch",
    "Command",
    "Document",
    "RawDocument",
    "Node",
    "Selection",
    "Variable",
    "EnumValue",
    "VariableSet",
    "Type",
    # Core entities
    "CacheConfig",
    "CacheEntry",
    "RefreshJob",
    # Errors
    "GraphCMSError",
    "SerializationError",
    "TransportError",
    "MalformedResponseError",
    "CacheIOError",
    # Core interfaces
    "ICacheAdapter",
    "IJobChannel",
    "IKeyBuilder",
    "ISerializer",
    "ITransport",
    # Infrastructure implementations
    "FileCacheAdapter",
    "MemoryCacheAdapter",
    "DocumentKeyBuilder",
    "JsonSerializer",
    "HttpTransport",
]
