"""Tests for the HTTP transport and request executor."""

import httpx
import pytest
import respx
from httpx import Response

from xdiff.errors import TransportError
from xdiff.modules.request import ExtraArgs, RequestExecutor, RequestProfile
from xdiff.tools import HTTPClient, HTTPResponse


class TestHTTPClient:
    """Test HTTPClient functionality."""

    @respx.mock
    async def test_get_request(self):
        """Test basic GET request."""
        respx.get("https://example.com/").mock(return_value=Response(200, text="Hello World"))

        async with HTTPClient() as client:
            response = await client.execute("GET", "https://example.com/")

        assert response.status_code == 200
        assert response.text == "Hello World"
        assert response.url == "https://example.com/"
        assert response.http_version == "HTTP/1.1"
        assert response.reason == "OK"

    @respx.mock
    async def test_sends_headers_and_content(self):
        route = respx.post("https://example.com/api").mock(return_value=Response(201))

        async with HTTPClient() as client:
            response = await client.execute(
                "POST",
                "https://example.com/api",
                headers=httpx.Headers({"content-type": "application/json"}),
                content=b'{"a":1}',
            )

        assert response.status_code == 201
        assert response.reason == "Created"
        request = route.calls.last.request
        assert request.headers["content-type"] == "application/json"
        assert request.content == b'{"a":1}'

    @respx.mock
    async def test_header_order_preserved(self):
        respx.get("https://example.com/").mock(
            return_value=Response(200, headers=[("b-header", "1"), ("a-header", "2")])
        )

        async with HTTPClient() as client:
            response = await client.execute("GET", "https://example.com/")

        keys = response.header_keys()
        assert keys.index("b-header") < keys.index("a-header")

    @respx.mock
    async def test_unknown_status_has_empty_reason(self):
        respx.get("https://example.com/").mock(return_value=Response(599))

        async with HTTPClient() as client:
            response = await client.execute("GET", "https://example.com/")

        assert response.reason == ""

    @respx.mock
    async def test_connection_error_becomes_transport_error(self):
        respx.get("https://down.example.com/").mock(side_effect=httpx.ConnectError("refused"))

        async with HTTPClient() as client:
            with pytest.raises(TransportError, match="refused"):
                await client.execute("GET", "https://down.example.com/")

    async def test_requires_context_manager(self):
        client = HTTPClient()
        with pytest.raises(RuntimeError):
            await client.execute("GET", "https://example.com/")

    def test_settings_from_environment(self, monkeypatch):
        monkeypatch.setenv("XDIFF_TIMEOUT", "5")
        monkeypatch.setenv("XDIFF_VERIFY_SSL", "false")
        monkeypatch.setenv("XDIFF_FOLLOW_REDIRECTS", "yes")
        client = HTTPClient()
        assert client.timeout == 5.0
        assert client.verify_ssl is False
        assert client.follow_redirects is True

    def test_explicit_settings_win(self, monkeypatch):
        monkeypatch.setenv("XDIFF_TIMEOUT", "5")
        assert HTTPClient(timeout=1.5).timeout == 1.5


class TestHTTPResponse:
    """Test response helpers."""

    def test_text_uses_encoding(self):
        response = HTTPResponse(
            url="https://example.com", status_code=200, content="é".encode("latin-1"),
            encoding="latin-1",
        )
        assert response.text == "é"

    def test_content_type(self):
        response = HTTPResponse(
            url="https://example.com",
            status_code=200,
            headers=httpx.Headers({"Content-Type": "application/json"}),
        )
        assert response.content_type == "application/json"

    def test_header_keys_deduplicated(self):
        response = HTTPResponse(
            url="https://example.com",
            status_code=200,
            headers=httpx.Headers([("set-cookie", "a"), ("set-cookie", "b"), ("date", "x")]),
        )
        assert response.header_keys() == ["set-cookie", "date"]


class FakeTransport:
    """Records calls and returns a canned response."""

    def __init__(self, error: Exception | None = None):
        self.calls: list[tuple[str, str, httpx.Headers, bytes]] = []
        self.error = error

    async def execute(self, method, url, headers=None, content=None):
        self.calls.append((method, url, headers, content))
        if self.error:
            raise self.error
        return HTTPResponse(url=url, status_code=200, reason="OK")


class TestRequestExecutor:
    """Test dispatch through an injected transport."""

    async def test_send_profile_uses_full_url(self):
        transport = FakeTransport()
        executor = RequestExecutor(transport)
        profile = RequestProfile(url="https://example.com/todos", params={"a": 1})

        response = await executor.send_profile(profile, ExtraArgs.parse(["b=2", "%x=y"]))

        assert response.status_code == 200
        method, url, headers, content = transport.calls[0]
        assert method == "GET"
        assert url == "https://example.com/todos?a=1&b=2"
        assert headers["x"] == "y"
        assert content == b""

    async def test_transport_error_propagates(self):
        error = TransportError("boom")
        executor = RequestExecutor(FakeTransport(error=error))

        with pytest.raises(TransportError) as exc_info:
            await executor.send_profile(RequestProfile(url="https://example.com/"))

        assert exc_info.value is error

    @respx.mock
    async def test_with_http_client(self):
        route = respx.get("https://example.com/todos?a=1").mock(
            return_value=Response(200, json={"ok": True})
        )

        async with HTTPClient() as client:
            response = await RequestExecutor(client).send_profile(
                RequestProfile(url="https://example.com/todos", params={"a": 1})
            )

        assert route.called
        assert response.content_type == "application/json"
