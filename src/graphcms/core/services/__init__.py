"""Domain services for graphcms."""

from graphcms.core.services.client import GraphCMS
from graphcms.core.services.refresh_worker import RefreshWorker

__all__ = [
    "GraphCMS",
    "RefreshWorker",
]
