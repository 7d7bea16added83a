"""Domain entities for graphcms."""

from graphcms.core.entities.cache_config import CacheConfig
from graphcms.core.entities.cache_entry import CacheEntry
from graphcms.core.entities.refresh_job import RefreshJob
from graphcms.core.entities.variable_type import Type

__all__ = [
    "CacheEntry",
    "CacheConfig",
    "RefreshJob",
    "Type",
]
