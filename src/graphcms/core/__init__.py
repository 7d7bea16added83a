"""Core domain layer for graphcms."""

from graphcms.core.builders import Batch, Document, Node, RawDocument, VariableSet
from graphcms.core.entities import CacheConfig, CacheEntry, RefreshJob, Type
from graphcms.core.interfaces import (
    ICacheAdapter,
    IJobChannel,
    IKeyBuilder,
    ISerializer,
    ITransport,
)
from graphcms.core.services import GraphCMS, RefreshWorker
