"""Exception hierarchy for graphcms.

All exceptions inherit from :class:`GraphCMSError`.

Subclass hierarchy::

    GraphCMSError
    +-- SerializationError      (document could not be built or encoded)
    +-- TransportError          (network failure, timeout, non-2xx status)
    +-- MalformedResponseError  (response body is not the expected JSON)
    +-- CacheIOError            (cache storage unreadable or unwritable)
"""


class GraphCMSError(Exception):
    """Base exception for all graphcms errors."""


class SerializationError(GraphCMSError):
    """Raised when a node tree or document cannot be serialized.

    Building is never retried: the same construction sequence always
    produces the same failure.
    """


class TransportError(GraphCMSError):
    """Raised when the remote API cannot be reached or rejects a request.

    Args:
        message: Human-readable error description.
        status_code: HTTP status code, when the server answered.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(GraphCMSError):
    """Raised when a response body cannot be decoded as JSON."""


class CacheIOError(GraphCMSError):
    """Raised when a cache backend fails to read or write a record."""
