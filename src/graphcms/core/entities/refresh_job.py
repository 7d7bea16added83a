"""Refresh job entity."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RefreshJob:
    """Instruction for a worker to recompute one cache entry.

    The job carries the built document string rather than the builder
    tree, which is enough to replay the request and reproduce the key.
    """

    key: str
    document: str
    operation_name: str = "method"
    endpoint_id: str | None = None
    variables: dict[str, Any] = field(default_factory=dict)

    def to_message(self) -> dict[str, Any]:
        """Return the channel message for this job."""
        return {
            "key": self.key,
            "document": self.document,
            "operation_name": self.operation_name,
            "endpoint_id": self.endpoint_id,
            "variables": self.variables,
        }

    @classmethod
    def from_message(cls, message: Any) -> "RefreshJob":
        """Rebuild a job from a channel message.

        Raises:
            ValueError: If required fields are missing.
        """
        if not isinstance(message, dict):
            raise ValueError("refresh job message must be an object")
        try:
            key = message["key"]
            document = message["document"]
        except KeyError as e:
            raise ValueError(f"refresh job message is missing {e}") from e
        variables = message.get("variables") or {}
        if not isinstance(variables, dict):
            raise ValueError("refresh job variables must be an object")
        if not isinstance(key, str) or not isinstance(document, str):
            raise ValueError("refresh job key and document must be strings")
        return cls(
            key=key,
            document=document,
            operation_name=message.get("operation_name") or "method",
            endpoint_id=message.get("endpoint_id"),
            variables=variables,
        )
