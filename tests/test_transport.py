"""
Behavioral tests for HttpxTransport.

Uses httpx.MockTransport so the real httpx client stack runs without a
network.
"""

import asyncio
import json

import httpx
import pytest

from openrouter_gateway import (
    GatewayAPIError,
    GatewayNetworkError,
    GatewayTimeoutError,
    HttpxTransport,
    ResponseFormatError,
)
from openrouter_gateway.core.classification import NETWORK_ERROR_MESSAGE

URL = "https://openrouter.ai/api/v1/chat/completions"
HEADERS = {"Authorization": "Bearer sk-test", "Content-Type": "application/json"}
BODY = {"model": "openai/gpt-4o-mini", "messages": [{"role": "user", "content": "Hi"}]}


def make_transport(handler) -> HttpxTransport:
    return HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


class TestHttpxTransport:
    """Behavioral tests for HttpxTransport.execute()."""

    @pytest.mark.asyncio
    async def test_posts_json_body_with_headers(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True})

        transport = make_transport(handler)
        result = await transport.execute(URL, BODY, HEADERS, 5.0)

        assert result == {"ok": True}
        assert seen["method"] == "POST"
        assert seen["url"] == URL
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"] == BODY

    @pytest.mark.asyncio
    async def test_provider_error_body_parsed(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                401,
                json={"error": {"message": "Invalid API key", "type": "authentication_error"}},
            )

        with pytest.raises(GatewayAPIError) as exc_info:
            await make_transport(handler).execute(URL, BODY, HEADERS, 5.0)

        error = exc_info.value
        assert error.status_code == 401
        assert error.message == "Invalid API key"
        assert error.provider_type == "authentication_error"
        assert error.details == {"message": "Invalid API key", "type": "authentication_error"}

    @pytest.mark.asyncio
    async def test_unparseable_error_body_gets_generic_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, text="<html>Service Unavailable</html>")

        with pytest.raises(GatewayAPIError) as exc_info:
            await make_transport(handler).execute(URL, BODY, HEADERS, 5.0)

        error = exc_info.value
        assert error.status_code == 503
        assert error.message == "API request failed with status 503"
        assert error.provider_type == "API_ERROR"
        assert error.details is None

    @pytest.mark.asyncio
    async def test_error_body_without_message_gets_generic_message(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, json={"error": {"code": 429}})

        with pytest.raises(GatewayAPIError) as exc_info:
            await make_transport(handler).execute(URL, BODY, HEADERS, 5.0)

        assert exc_info.value.message == "API request failed with status 429"
        assert exc_info.value.provider_type == "API_ERROR"

    @pytest.mark.asyncio
    async def test_connect_error_is_network_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GatewayNetworkError) as exc_info:
            await make_transport(handler).execute(URL, BODY, HEADERS, 5.0)

        assert exc_info.value.message == NETWORK_ERROR_MESSAGE
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_httpx_timeout_is_timeout_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(GatewayTimeoutError) as exc_info:
            await make_transport(handler).execute(URL, BODY, HEADERS, 2.5)

        assert exc_info.value.message == "Request timeout after 2500ms"
        assert exc_info.value.timeout == 2.5

    @pytest.mark.asyncio
    async def test_deadline_bounds_slow_handler(self):
        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return httpx.Response(200, json={})

        with pytest.raises(GatewayTimeoutError, match="Request timeout after 50ms"):
            await make_transport(handler).execute(URL, BODY, HEADERS, 0.05)

    @pytest.mark.asyncio
    async def test_invalid_json_success_body(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="not json")

        with pytest.raises(ResponseFormatError, match="not valid JSON") as exc_info:
            await make_transport(handler).execute(URL, BODY, HEADERS, 5.0)

        assert exc_info.value.details == "not json"


class TestTransportLifecycle:
    """Tests for lazy client creation and close()."""

    @pytest.mark.asyncio
    async def test_client_created_lazily_and_closed(self):
        transport = HttpxTransport()
        assert transport.client is None

        client = transport._ensure_client()
        assert isinstance(client, httpx.AsyncClient)

        await transport.close()
        assert transport.client is None
        assert client.is_closed

        # Second close is a no-op
        await transport.close()

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        transport = HttpxTransport(client=client)

        await transport.close()

        assert not client.is_closed
        await client.aclose()
