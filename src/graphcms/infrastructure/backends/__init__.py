"""Cache adapter implementations."""

from graphcms.infrastructure.backends.file import FileCacheAdapter
from graphcms.infrastructure.backends.memory import MemoryCacheAdapter

__all__ = [
    "FileCacheAdapter",
    "MemoryCacheAdapter",
]
