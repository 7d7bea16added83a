"""Transport implementations."""

from graphcms.infrastructure.transports.http import SIMPLE_URL, HttpTransport

__all__ = ["HttpTransport", "SIMPLE_URL"]
