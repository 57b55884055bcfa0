"""
Tests for HttpxTransport — httpx mocked with pytest-httpx, no network.

Test plan:
- Success: JSON object returned, body sent as JSON, headers merged
- Failures mapped to NodeTransportError: timeout, connect error,
  HTTP 4xx/5xx, non-JSON body, non-UTF-8 body, JSON that is not an object
- Exception chaining preserved
- FakeTransport satisfies the NodeTransport protocol
"""

from __future__ import annotations

import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from trc20_sender.config import TransferConfig
from trc20_sender.errors import NodeTransportError
from trc20_sender.transport import HttpxTransport, NodeTransport

URL = "https://node.test/wallet/triggersmartcontract"


class TestHttpxTransportSuccess:
    @pytest.mark.asyncio
    async def test_returns_object(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=URL, json={"result": {"result": True}})

        result = await HttpxTransport().post_json(URL, {"visible": True})

        assert result == {"result": {"result": True}}

    @pytest.mark.asyncio
    async def test_sends_json_body(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=URL, json={})

        await HttpxTransport().post_json(URL, {"fee_limit": 1000000, "visible": True})

        requests = httpx_mock.get_requests()
        assert len(requests) == 1
        assert json.loads(requests[0].content) == {"fee_limit": 1000000, "visible": True}
        assert requests[0].headers["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_sends_api_key_header(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=URL, json={})
        config = TransferConfig(node_url="https://node.test", api_key="secret")

        await HttpxTransport(headers=config.headers).post_json(URL, {})

        assert httpx_mock.get_requests()[0].headers["TRON-PRO-API-KEY"] == "secret"


class TestHttpxTransportFailures:
    @pytest.mark.asyncio
    async def test_timeout(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"), method="POST", url=URL)

        with pytest.raises(NodeTransportError) as exc:
            await HttpxTransport(timeout=5.0).post_json(URL, {})

        assert exc.value.error_code == "TIMEOUT"
        assert exc.value.details["timeout_s"] == 5.0
        assert exc.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_connection_refused(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_exception(httpx.ConnectError("Connection refused"), method="POST", url=URL)

        with pytest.raises(NodeTransportError) as exc:
            await HttpxTransport().post_json(URL, {})

        assert exc.value.error_code == "CONNECTION_FAILED"
        assert isinstance(exc.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_http_error_status(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=URL, status_code=503, text="unavailable")

        with pytest.raises(NodeTransportError) as exc:
            await HttpxTransport().post_json(URL, {})

        assert exc.value.error_code == "HTTP_ERROR"
        assert exc.value.details["status_code"] == 503
        assert "503" in str(exc.value)

    @pytest.mark.asyncio
    async def test_invalid_json(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=URL, text="<html>busy</html>")

        with pytest.raises(NodeTransportError) as exc:
            await HttpxTransport().post_json(URL, {})

        assert exc.value.error_code == "INVALID_JSON"

    @pytest.mark.asyncio
    async def test_body_not_utf8(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=URL, content=b"\x80\x81{}")

        with pytest.raises(NodeTransportError) as exc:
            await HttpxTransport().post_json(URL, {})

        assert exc.value.error_code == "INVALID_JSON"
        assert isinstance(exc.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_json_not_object(self, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(method="POST", url=URL, json=[1, 2, 3])

        with pytest.raises(NodeTransportError) as exc:
            await HttpxTransport().post_json(URL, {})

        assert exc.value.error_code == "INVALID_JSON"
        assert exc.value.details["type"] == "list"


class TestProtocol:
    def test_httpx_transport_is_node_transport(self) -> None:
        assert isinstance(HttpxTransport(), NodeTransport)

    def test_fake_transport_is_node_transport(self, fake_transport) -> None:
        assert isinstance(fake_transport(), NodeTransport)
