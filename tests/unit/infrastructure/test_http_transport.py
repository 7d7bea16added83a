"""Tests for HttpTransport."""

import json

import httpx
import pytest

from graphcms.core.errors import MalformedResponseError, TransportError
from graphcms.infrastructure.transports.http import SIMPLE_URL, HttpTransport


def make_transport(handler) -> HttpTransport:
    """Create a transport answering through ``handler``."""
    return HttpTransport(client=httpx.Client(transport=httpx.MockTransport(handler)))


class TestHttpTransport:
    """Tests for HttpTransport."""

    def test_request_shape(self) -> None:
        """Test the URL, headers and body of a request."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": {"user": {"name": "Alice"}}})

        transport = make_transport(handler)

        result = transport.execute(
            "query method{user{name}}", "project-1", "secret", {"id": 1}, operation_name="GetUser"
        )

        assert result == {"data": {"user": {"name": "Alice"}}}
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == SIMPLE_URL + "project-1"
        assert request.headers["Authorization"] == "Bearer secret"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {
            "operationName": "GetUser",
            "query": "query method{user{name}}",
            "variables": {"id": 1},
        }

    def test_no_credential_no_header(self) -> None:
        """Test that anonymous requests send no Authorization header."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        make_transport(handler).execute("query method{a{b}}", "p", None, {})

        assert "Authorization" not in seen[0].headers

    def test_custom_base_url(self) -> None:
        """Test that the project id is appended to the base URL."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        client = httpx.Client(transport=httpx.MockTransport(handler))
        transport = HttpTransport(base_url="https://cms.example.com/v2/", client=client)
        transport.execute("query method{a{b}}", "abc", None, {})

        assert str(seen[0].url) == "https://cms.example.com/v2/abc"

    def test_error_status(self) -> None:
        """Test that non-2xx responses raise with the status code."""
        transport = make_transport(lambda request: httpx.Response(401, text="Unauthorized"))

        with pytest.raises(TransportError) as exc_info:
            transport.execute("query method{a{b}}", "p", "bad", {})

        assert exc_info.value.status_code == 401

    def test_network_error(self) -> None:
        """Test that connection failures raise TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            make_transport(handler).execute("query method{a{b}}", "p", None, {})

        assert exc_info.value.status_code is None

    def test_malformed_body(self) -> None:
        """Test that a non-JSON body raises MalformedResponseError."""
        transport = make_transport(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(MalformedResponseError):
            transport.execute("query method{a{b}}", "p", None, {})

    def test_context_manager_closes_client(self) -> None:
        """Test that leaving the context closes the client."""
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))

        with HttpTransport(client=client):
            pass

        assert client.is_closed
