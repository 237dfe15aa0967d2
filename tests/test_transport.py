"""Unit tests for the transport module."""
import httpx
import pytest

from playpath import ClientConfig, HTTPXTransport, PlayPathError, Transport
from playpath.config import API_KEY_HEADER

BASE_URL = "http://playpath.test"
API_KEY = "test-key"


@pytest.fixture
def config():
    return ClientConfig(base_url=BASE_URL, api_key=API_KEY)


@pytest.fixture
def transport(config, http_client):
    return HTTPXTransport(config, http_client=http_client)


class TestTransportInterface:
    """Tests for the abstract Transport interface."""

    def test_transport_is_abstract(self):
        """Test that Transport cannot be instantiated directly."""
        with pytest.raises(TypeError):
            Transport()  # type: ignore


class TestRequestHeaders:
    """Tests for header assembly and merging."""

    @pytest.mark.asyncio
    async def test_default_headers_sent(self, transport, backend):
        """Test that content type and API key go out on every request."""
        backend.add("GET", "/api/items", json=[])

        await transport.request("GET", "/api/items")

        request = backend.last_request
        assert str(request.url) == f"{BASE_URL}/api/items"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers[API_KEY_HEADER] == API_KEY

    @pytest.mark.asyncio
    async def test_per_call_headers_override_defaults(self, transport, backend):
        """Test that per-call headers win only where keys collide."""
        backend.add("GET", "/api/items", json=[])

        await transport.request("GET", "/api/items", headers={"Content-Type": "text/plain", "X-Trace": "1"})

        request = backend.last_request
        assert request.headers["Content-Type"] == "text/plain"
        assert request.headers["X-Trace"] == "1"
        assert request.headers[API_KEY_HEADER] == API_KEY

    @pytest.mark.asyncio
    async def test_instance_headers_override_content_type(self, http_client, backend):
        """Test that configured extra headers can replace the default content type."""
        backend.add("GET", "/api/items", json=[])
        config = ClientConfig(base_url=BASE_URL, headers={"Content-Type": "application/vnd.playpath+json"})
        transport = HTTPXTransport(config, http_client=http_client)

        await transport.request("GET", "/api/items")

        assert backend.last_request.headers["Content-Type"] == "application/vnd.playpath+json"
        assert API_KEY_HEADER not in backend.last_request.headers

    @pytest.mark.asyncio
    async def test_config_changes_apply_to_later_requests(self, transport, config, backend):
        """Test that a changed credential is used from the next request on."""
        backend.add("GET", "/api/items", json=[])

        await transport.request("GET", "/api/items")
        config.api_key = "rotated-key"
        await transport.request("GET", "/api/items")

        assert backend.requests[0].headers[API_KEY_HEADER] == API_KEY
        assert backend.requests[1].headers[API_KEY_HEADER] == "rotated-key"

    @pytest.mark.asyncio
    async def test_body_serialized_as_json(self, transport, backend):
        """Test that the payload is sent as a JSON body."""
        backend.add("POST", "/api/items", json={"id": 1})

        data = await transport.request("POST", "/api/items", body={"title": "Scrum"})

        assert data == {"id": 1}
        assert backend.last_json() == {"title": "Scrum"}


class TestRequestErrors:
    """Tests for failure classification."""

    @pytest.mark.asyncio
    async def test_http_error_uses_body_message(self, transport, backend):
        """Test that a non-2xx status carries the server's error message."""
        backend.add("GET", "/api/items/missing", status=404, json={"error": "not found"})

        with pytest.raises(PlayPathError) as exc_info:
            await transport.request("GET", "/api/items/missing")

        assert exc_info.value.status == 404
        assert exc_info.value.message == "not found"
        assert exc_info.value.data == {"error": "not found"}

    @pytest.mark.asyncio
    async def test_http_error_without_message(self, transport, backend):
        """Test the generic message when the body has no error field."""
        backend.add("GET", "/api/items", status=500, json={"detail": "boom"})

        with pytest.raises(PlayPathError) as exc_info:
            await transport.request("GET", "/api/items")

        assert str(exc_info.value) == "HTTP 500"
        assert exc_info.value.status == 500
        assert exc_info.value.data == {"detail": "boom"}

    @pytest.mark.asyncio
    async def test_http_error_exposes_field_errors(self, transport, backend):
        """Test that validation details from the server are reachable."""
        backend.add(
            "POST",
            "/api/items",
            status=422,
            json={"error": "Validation failed", "errors": ["Title is too long"]},
        )

        with pytest.raises(PlayPathError) as exc_info:
            await transport.request("POST", "/api/items", body={"title": "x" * 1000})

        assert exc_info.value.errors == ["Title is too long"]

    @pytest.mark.asyncio
    async def test_network_failure(self, config):
        """Test that a connection failure has no status and keeps the cause."""
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(refuse))
        transport = HTTPXTransport(config, http_client=http_client)

        with pytest.raises(PlayPathError) as exc_info:
            await transport.request("GET", "/api/items")

        assert exc_info.value.status is None
        assert exc_info.value.message == "Connection refused"
        assert isinstance(exc_info.value.data, httpx.ConnectError)
        assert exc_info.value.__cause__ is exc_info.value.data

    @pytest.mark.asyncio
    async def test_unparseable_body(self, transport, backend):
        """Test that a non-JSON body is a transport failure, even on error status."""
        backend.add("GET", "/api/items", status=502, text="<html>Bad Gateway</html>")

        with pytest.raises(PlayPathError) as exc_info:
            await transport.request("GET", "/api/items")

        assert exc_info.value.status is None
        assert isinstance(exc_info.value.data, ValueError)


class TestStreamLines:
    """Tests for event-stream line delivery."""

    @pytest.mark.asyncio
    async def test_lines_yielded(self, transport, backend):
        """Test that response lines arrive in order with the SSE accept header."""
        backend.add("GET", "/stream", text="data: a\n\ndata: b\n\n", headers={"Content-Type": "text/event-stream"})

        lines = [line async for line in transport.stream_lines("/stream", params={"message": "hi"})]

        assert [line for line in lines if line] == ["data: a", "data: b"]
        request = backend.last_request
        assert request.headers["Accept"] == "text/event-stream"
        assert request.url.params["message"] == "hi"

    @pytest.mark.asyncio
    async def test_stream_http_error(self, transport, backend):
        """Test that a non-2xx stream response raises with status and body."""
        backend.add("GET", "/stream", status=401, json={"error": "Invalid API key"})

        with pytest.raises(PlayPathError) as exc_info:
            async for _ in transport.stream_lines("/stream"):
                pass

        assert exc_info.value.status == 401
        assert exc_info.value.message == "Invalid API key"

    @pytest.mark.asyncio
    async def test_stream_network_failure(self, config):
        """Test that a failed stream connection has no status."""
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        transport = HTTPXTransport(config, http_client=httpx.AsyncClient(transport=httpx.MockTransport(refuse)))

        with pytest.raises(PlayPathError) as exc_info:
            async for _ in transport.stream_lines("/stream"):
                pass

        assert exc_info.value.status is None


class TestTransportLifecycle:
    """Tests for client ownership."""

    @pytest.mark.asyncio
    async def test_injected_client_left_open(self, config, http_client):
        """Test that closing the transport does not close an injected client."""
        async with HTTPXTransport(config, http_client=http_client):
            pass

        assert not http_client.is_closed

    @pytest.mark.asyncio
    async def test_owned_client_closed(self, config):
        """Test that an owned client is closed with the transport."""
        transport = HTTPXTransport(config)
        await transport.close()

        assert transport._client.is_closed
