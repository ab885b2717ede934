"""Third-Party Gateway — the one primitive every service handler calls.

Two layers:

  call()                   — raw HTTP exchange: method, URL, headers, optional
                             JSON body → GatewayReply(status, body). Transport
                             errors propagate as httpx.HTTPError.
  call_external_endpoint() — adds the credential-derived Authorization header
                             and folds every outcome into a ServiceResponse.
                             Expected failures (non-2xx, unreachable host)
                             come back as failed results, not exceptions.

Each request is made exactly once. There is no retry layer here; a transient
failure is reported to the caller as-is.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from gatehouse_shared.credential_models import ApiKeyCredential, BasicAuthCredential
from gatehouse_shared.models import ServiceResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = 30.0


class GatewayReply(BaseModel):
    """Status and decoded body of one third-party HTTP exchange."""

    status: int
    body: Any = None


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ThirdPartyGateway:
    """Outbound HTTP to named third-party REST APIs."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    async def call(
        self,
        url: str,
        method: str,
        headers: dict[str, str],
        body: Any = None,
    ) -> GatewayReply:
        kwargs: dict[str, Any] = {"headers": headers}
        if body is not None and method != "GET":
            kwargs["json"] = body

        async with httpx.AsyncClient(
            timeout=REQUEST_TIMEOUT_SECONDS, transport=self._transport
        ) as client:
            response = await client.request(method, url, **kwargs)
        return GatewayReply(status=response.status_code, body=_decode_body(response))

    async def call_external_endpoint(
        self,
        method: str,
        url: str,
        credential: ApiKeyCredential | BasicAuthCredential,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> ServiceResponse:
        request_headers = {
            "Content-Type": "application/json",
            "Authorization": credential.authorization_header(),
            **(headers or {}),
        }
        try:
            reply = await self.call(url, method, request_headers, body)
        except httpx.HTTPError as e:
            logger.error(f"Third-party call {method} {url} failed: {type(e).__name__}: {e}")
            return ServiceResponse.fail(f"Third-party service request failed: {type(e).__name__}")

        logger.info(f"Third-party call {method} {url} → {reply.status}")
        if not 200 <= reply.status < 300:
            return ServiceResponse.fail(
                f"Third-party service responded with status: {reply.status}"
            )
        return ServiceResponse.ok(reply.body)


# ============================================================================
# Singleton management
# ============================================================================

_gateway: ThirdPartyGateway | None = None


def get_gateway() -> ThirdPartyGateway:
    global _gateway
    if _gateway is None:
        _gateway = ThirdPartyGateway()
    return _gateway


def reset_gateway() -> None:
    """Reset the gateway singleton — used in tests."""
    global _gateway
    _gateway = None


def set_gateway(gateway: ThirdPartyGateway) -> None:
    """Inject a gateway (e.g. one over a mock transport) — used in tests."""
    global _gateway
    _gateway = gateway
