"""HTTP transport implementation."""

import logging
from typing import Any

import httpx

from graphcms.core.errors import MalformedResponseError, TransportError
from graphcms.infrastructure.serializers.json import JsonSerializer

logger = logging.getLogger(__name__)

SIMPLE_URL = "https://api.graphcms.com/simple/v1/"


class HttpTransport:
    """Synchronous transport posting documents to the GraphCMS API.

    Each request is sent to ``base_url + project_id`` as
    ``{"operationName", "query", "variables"}`` with the credential as a
    bearer token.
    """

    def __init__(
        self,
        base_url: str = SIMPLE_URL,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: API root; the project id is appended to it.
            timeout: Request timeout in seconds.
            client: Optional preconfigured httpx client.
        """
        self._base_url = base_url
        self._client = client or httpx.Client(timeout=timeout)
        self._serializer = JsonSerializer()

    def execute(
        self,
        document: str,
        project_id: str | None,
        credential: str | None,
        variables: dict[str, Any],
        operation_name: str = "method",
    ) -> Any:
        """Post a document and decode the JSON response.

        Raises:
            TransportError: On network errors, timeouts and non-2xx status.
            MalformedResponseError: If the body is not JSON.
        """
        url = self._base_url + (project_id or "")
        headers = {"Content-Type": "application/json"}
        if credential:
            headers["Authorization"] = f"Bearer {credential}"
        body = self._serializer.serialize(
            {
                "operationName": operation_name,
                "query": document,
                "variables": variables,
            }
        )

        try:
            response = self._client.post(url, content=body, headers=headers)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            logger.debug("API answered %s: %s", response.status_code, response.text[:200])
            raise TransportError(
                f"API answered HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        self.close()
