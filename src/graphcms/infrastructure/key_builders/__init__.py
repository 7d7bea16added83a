"""Key builder implementations."""

from graphcms.infrastructure.key_builders.default import DocumentKeyBuilder

__all__ = ["DocumentKeyBuilder"]
