"""Infrastructure layer implementations for graphcms."""

from graphcms.infrastructure.backends import FileCacheAdapter, MemoryCacheAdapter
from graphcms.infrastructure.key_builders import DocumentKeyBuilder
from graphcms.infrastructure.serializers import JsonSerializer
from graphcms.infrastructure.transports import HttpTransport

__all__ = [
    "FileCacheAdapter",
    "MemoryCacheAdapter",
    "DocumentKeyBuilder",
    "JsonSerializer",
    "HttpTransport",
]
