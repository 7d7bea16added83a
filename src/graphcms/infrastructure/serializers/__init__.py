"""Serializer implementations."""

from graphcms.infrastructure.serializers.json import JsonSerializer

__all__ = ["JsonSerializer"]
