"""Hashing utilities for cache keys and record names."""

import hashlib
import json
from typing import Any


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a value.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    if value is None:
        return "none"

    # Normalize to JSON with sorted keys for determinism
    normalized = json.dumps(value, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def content_digest(key: str) -> str:
    """Return the SHA-1 hex digest used to name a stored record.

    Args:
        key: The logical cache key.

    Returns:
        A 40 character hexadecimal string.
    """
    return hashlib.sha1(key.encode("utf-8")).hexdigest()
