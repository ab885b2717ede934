"""Test fixtures for the Request Manager.

Backends are replaced at their access-layer seams:
  - Profile Store: a RedisAdapter over in-memory fakeredis
  - Identity Provider: AsyncMocks for register_account / sign_in
  - Token verification: a real TokenVerifier over a KeyCache whose fetcher
    serves a JWKS built from a freshly generated RSA key
  - Vault: EnvironmentVault, with bundles placed in os.environ per test
  - Gateway: ThirdPartyGateway over httpx.MockTransport
"""

from __future__ import annotations

import json
import os
import time
from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import jwt as pyjwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from fakeredis.aioredis import FakeRedis
from gatehouse_auth.jwt import TokenVerifier
from gatehouse_auth.keys import KeyCache
from gatehouse_profile_access.client import RedisAdapter
from gatehouse_service_access.gateway import ThirdPartyGateway
from gatehouse_shared.auth_models import AuthTokens
from gatehouse_vault_access.client import EnvironmentVault, reset_client, set_client

KID = "rm-key-1"

# ============================================================================
# Tokens
# ============================================================================


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def verifier(rsa_private_key):
    """Install a TokenVerifier that trusts rsa_private_key."""
    jwk = pyjwt.algorithms.RSAAlgorithm.to_jwk(rsa_private_key.public_key(), as_dict=True)
    jwk["kid"] = KID

    async def fetcher() -> dict[str, Any]:
        return {"keys": [jwk]}

    token_verifier = TokenVerifier(KeyCache(fetcher))
    with patch("gatehouse_request_manager.authn.get_verifier", return_value=token_verifier):
        yield token_verifier


@pytest.fixture
def make_token(rsa_private_key):
    def _make(sub: str = "user-123", exp: int | None = None) -> str:
        payload = {"sub": sub, "exp": exp or int(time.time()) + 3600, "token_use": "access"}
        return pyjwt.encode(payload, rsa_private_key, algorithm="RS256", headers={"kid": KID})

    return _make


@pytest.fixture
def auth_headers(make_token, verifier):
    """Factory — Authorization headers for a subject."""

    def _headers(sub: str = "user-123") -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(sub)}"}

    return _headers


# ============================================================================
# Backends
# ============================================================================


@pytest.fixture
def profile_store() -> RedisAdapter:
    adapter = RedisAdapter(FakeRedis(decode_responses=True))
    with patch("gatehouse_profile_access.profiles.get_client", return_value=adapter):
        yield adapter


@pytest.fixture
def cognito():
    """Patch the Identity Access verbs used by signup."""
    tokens = AuthTokens(
        id_token="id-token",
        access_token="access-token",
        refresh_token="refresh-token",
        expires_in=3600,
        token_type="Bearer",
    )
    with (
        patch(
            "gatehouse_request_manager.signup.register_account",
            new=AsyncMock(return_value="sub-new"),
        ) as register,
        patch(
            "gatehouse_request_manager.signup.sign_in",
            new=AsyncMock(return_value=tokens),
        ) as sign_in,
    ):
        yield {"register_account": register, "sign_in": sign_in}


@pytest.fixture
def vault():
    """EnvironmentVault; returns a setter that stores a bundle under a locator."""
    set_client(EnvironmentVault())

    with patch.dict("os.environ", {}):
        def _put(locator: str, bundle: dict[str, Any]) -> str:
            os.environ[locator] = json.dumps(bundle)
            return locator

        yield _put

    reset_client()


@pytest.fixture
def http():
    """Gateway over a MockTransport; exposes captured requests and queued replies."""
    requests: list[httpx.Request] = []
    replies: list[httpx.Response] = []

    def respond(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if replies:
            return replies.pop(0)
        return httpx.Response(200, json={"ok": True})

    gateway = ThirdPartyGateway(transport=httpx.MockTransport(respond))
    with patch("gatehouse_request_manager.proxy.get_gateway", return_value=gateway):
        yield {"requests": requests, "replies": replies}


# ============================================================================
# Events
# ============================================================================


@pytest.fixture
def make_event():
    """Factory — build an API Gateway proxy event."""

    def _event(
        method: str = "GET",
        body: Any = None,
        headers: dict[str, str] | None = None,
        path_params: dict[str, str] | None = None,
        query_params: dict[str, str] | None = None,
        path: str = "/",
        resource: str = "/",
    ) -> dict[str, Any]:
        return {
            "httpMethod": method,
            "path": path,
            "resource": resource,
            "headers": headers or {},
            "pathParameters": path_params,
            "queryStringParameters": query_params,
            "body": body if body is None or isinstance(body, str) else json.dumps(body),
        }

    return _event
