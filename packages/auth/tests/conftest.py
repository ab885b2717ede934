"""Test fixtures for the auth package.

Provides an RSA signing key published as a JWKS document, a token factory
that signs Cognito-shaped claims with it, and a counting fetcher + fake clock
for driving KeyCache freshness without sleeping.
"""

from __future__ import annotations

import time
from typing import Any

import jwt as pyjwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

ISSUER = "https://cognito-idp.us-east-1.amazonaws.com/us-east-1_TestPool"
KID = "test-key-1"


# ============================================================================
# Keys and tokens
# ============================================================================


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_private_key() -> rsa.RSAPrivateKey:
    """A key that is NOT in the published JWKS."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def jwks(rsa_private_key) -> dict[str, Any]:
    jwk = pyjwt.algorithms.RSAAlgorithm.to_jwk(rsa_private_key.public_key(), as_dict=True)
    jwk.update({"kid": KID, "alg": "RS256", "use": "sig"})
    return {"keys": [jwk]}


@pytest.fixture
def make_token(rsa_private_key):
    """Factory — sign a Cognito access-token-shaped JWT."""

    def _make(
        sub: str | None = "user-123",
        exp: int | None = None,
        kid: str | None = KID,
        key: Any = None,
        algorithm: str = "RS256",
        issuer: str = ISSUER,
        **extra: Any,
    ) -> str:
        payload: dict[str, Any] = {
            "exp": exp if exp is not None else int(time.time()) + 3600,
            "iss": issuer,
            "token_use": "access",
            "client_id": "client-123",
            **extra,
        }
        if sub is not None:
            payload["sub"] = sub
        headers = {"kid": kid} if kid is not None else {}
        return pyjwt.encode(
            payload, key or rsa_private_key, algorithm=algorithm, headers=headers
        )

    return _make


# ============================================================================
# KeyCache drivers
# ============================================================================


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingFetcher:
    """Async JWKS fetcher that records calls and can be told to fail."""

    def __init__(self, jwks: Any) -> None:
        self.jwks = jwks
        self.calls = 0
        self.error: Exception | None = None

    async def __call__(self) -> Any:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.jwks


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fetcher(jwks) -> CountingFetcher:
    return CountingFetcher(jwks)
