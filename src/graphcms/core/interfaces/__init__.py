"""Core interfaces (Protocol classes) for graphcms."""

from graphcms.core.interfaces.cache_adapter import ICacheAdapter
from graphcms.core.interfaces.job_channel import IJobChannel
from graphcms.core.interfaces.key_builder import IKeyBuilder
from graphcms.core.interfaces.serializer import ISerializer
from graphcms.core.interfaces.transport import ITransport

__all__ = [
    "ICacheAdapter",
    "IJobChannel",
    "IKeyBuilder",
    "ISerializer",
    "ITransport",
]
