"""Serializer interface."""

from typing import Any, Protocol


class ISerializer(Protocol):
    """Contract for encoding cache records and job messages.

    Backends and job channels store plain structures (dicts, lists,
    scalars) through a serializer, so the same record format can be used
    on disk and in Redis.
    """

    def serialize(self, value: Any) -> bytes:
        """Serialize a record to bytes.

        Args:
            value: The record to serialize.

        Returns:
            The serialized record.

        Raises:
            SerializationError: If the value cannot be serialized.
        """
        ...

    def deserialize(self, data: bytes) -> Any:
        """Deserialize bytes to a record.

        Args:
            data: The bytes to deserialize.

        Returns:
            The decoded record.

        Raises:
            SerializationError: If the data cannot be deserialized.
        """
        ...
