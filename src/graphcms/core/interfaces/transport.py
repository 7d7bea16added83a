"""Transport interface."""

from typing import Any, Protocol


class ITransport(Protocol):
    """Contract for sending a built document to the remote API.

    Calls are synchronous: the method blocks until the decoded response
    is available or the request fails.
    """

    def execute(
        self,
        document: str,
        project_id: str | None,
        credential: str | None,
        variables: dict[str, Any],
        operation_name: str = "method",
    ) -> Any:
        """Execute a document.

        Args:
            document: The built document string.
            project_id: Identifier of the remote project (endpoint).
            credential: Opaque bearer credential.
            variables: Values for the document variables.
            operation_name: Name of the operation inside the document.

        Returns:
            The decoded JSON response.

        Raises:
            TransportError: If the request fails or is rejected.
            MalformedResponseError: If the response is not valid JSON.
        """
        ...
