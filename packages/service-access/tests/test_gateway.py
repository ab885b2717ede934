"""Tests for the Third-Party Gateway.

All HTTP calls go through MockTransport — no real network access.
"""

from __future__ import annotations

import json

import httpx
from gatehouse_service_access.gateway import (
    ThirdPartyGateway,
    get_gateway,
    reset_gateway,
    set_gateway,
)
from gatehouse_shared.credential_models import ApiKeyCredential, BasicAuthCredential

KEY = ApiKeyCredential(api_key="tok")


class TestCall:
    async def test_returns_status_and_json(self, gateway, transport) -> None:
        transport.responses.append(httpx.Response(201, json={"id": 7}))
        reply = await gateway.call("https://api.example.com/x", "POST", {}, {"a": 1})

        assert reply.status == 201
        assert reply.body == {"id": 7}
        assert json.loads(transport.requests[0].content) == {"a": 1}

    async def test_get_sends_no_body(self, gateway, transport) -> None:
        await gateway.call("https://api.example.com/x", "GET", {}, {"ignored": True})
        assert transport.requests[0].content == b""

    async def test_empty_body_is_none(self, gateway, transport) -> None:
        transport.responses.append(httpx.Response(204))
        reply = await gateway.call("https://api.example.com/x", "DELETE", {})
        assert reply.body is None

    async def test_text_body_kept(self, gateway, transport) -> None:
        transport.responses.append(httpx.Response(200, text="plain"))
        reply = await gateway.call("https://api.example.com/x", "GET", {})
        assert reply.body == "plain"


class TestCallExternalEndpoint:
    async def test_success(self, gateway, transport) -> None:
        transport.responses.append(httpx.Response(200, json=[{"name": "repo"}]))
        result = await gateway.call_external_endpoint("GET", "https://api.example.com/r", KEY)

        assert result.success is True
        assert result.data == [{"name": "repo"}]
        request = transport.requests[0]
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.headers["Content-Type"] == "application/json"

    async def test_basic_credential_header(self, gateway, transport) -> None:
        cred = BasicAuthCredential(username="u", password="p")
        await gateway.call_external_endpoint("GET", "https://api.example.com/r", cred)
        assert transport.requests[0].headers["Authorization"].startswith("Basic ")

    async def test_extra_headers_merged(self, gateway, transport) -> None:
        await gateway.call_external_endpoint(
            "GET", "https://api.example.com/r", KEY, headers={"Accept": "application/vnd.x+json"}
        )
        assert transport.requests[0].headers["Accept"] == "application/vnd.x+json"

    async def test_non_2xx_is_failed_result(self, gateway, transport) -> None:
        transport.responses.append(httpx.Response(404, json={"message": "Not Found"}))
        result = await gateway.call_external_endpoint("GET", "https://api.example.com/r", KEY)

        assert result.success is False
        assert result.message == "Third-party service responded with status: 404"
        assert result.data is None

    async def test_transport_error_is_failed_result(self, gateway, transport) -> None:
        transport.error = httpx.ConnectError("refused")
        result = await gateway.call_external_endpoint("GET", "https://api.example.com/r", KEY)

        assert result.success is False
        assert "ConnectError" in result.message

    async def test_exactly_one_attempt(self, gateway, transport) -> None:
        transport.responses.append(httpx.Response(503))
        await gateway.call_external_endpoint("GET", "https://api.example.com/r", KEY)
        assert len(transport.requests) == 1


class TestGatewaySingleton:
    def setup_method(self) -> None:
        reset_gateway()

    def teardown_method(self) -> None:
        reset_gateway()

    def test_lazy_singleton(self) -> None:
        assert get_gateway() is get_gateway()

    def test_injected_gateway(self) -> None:
        injected = ThirdPartyGateway()
        set_gateway(injected)
        assert get_gateway() is injected
