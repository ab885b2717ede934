"""Auth domain models — identity claims, signing keys and pool configuration."""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel

from gatehouse_shared.errors import ConfigurationError


class IdentityClaim(BaseModel):
    """Verified claims from a Cognito bearer token.

    Only TokenVerifier.verify builds these — never construct one from
    request input.
    """

    subject: str
    expires_at: int
    email: str | None = None
    token_use: str | None = None
    raw_claims: dict[str, Any] = {}


class SigningKeySet(BaseModel):
    """The identity provider's published JWKs, keyed by kid."""

    keys: dict[str, dict[str, Any]]
    fetched_at: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return now - self.fetched_at < ttl_seconds

    @classmethod
    def from_jwks(cls, jwks: Any, fetched_at: float) -> SigningKeySet:
        """Index a raw JWKS document by key id. Raises ValueError on bad shape."""
        if not isinstance(jwks, dict) or not isinstance(jwks.get("keys"), list):
            raise ValueError("JWKS document has no 'keys' list")
        keys = {
            key["kid"]: key
            for key in jwks["keys"]
            if isinstance(key, dict) and key.get("kid")
        }
        return cls(keys=keys, fetched_at=fetched_at)


class AuthTokens(BaseModel):
    """Session tokens returned by a successful sign-in."""

    id_token: str
    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str | None = None

    def to_response(self) -> dict[str, Any]:
        return {
            "idToken": self.id_token,
            "accessToken": self.access_token,
            "refreshToken": self.refresh_token,
            "expiresIn": self.expires_in,
            "tokenType": self.token_type,
        }


class IdentityPoolConfig(BaseModel):
    """Where the Cognito user pool lives."""

    region: str
    user_pool_id: str
    client_id: str

    @property
    def issuer(self) -> str:
        return f"https://cognito-idp.{self.region}.amazonaws.com/{self.user_pool_id}"

    @classmethod
    def from_env(cls) -> IdentityPoolConfig:
        """Read AWS_REGION, COGNITO_USER_POOL_ID and COGNITO_CLIENT_ID.

        Pool ids carry their region as a prefix (``us-east-1_AbC``), so
        AWS_REGION is optional.
        """
        user_pool_id = os.environ.get("COGNITO_USER_POOL_ID", "")
        client_id = os.environ.get("COGNITO_CLIENT_ID", "")
        if not user_pool_id or not client_id:
            raise ConfigurationError("Cognito configuration missing")
        region = os.environ.get("AWS_REGION") or user_pool_id.split("_", 1)[0]
        return cls(region=region, user_pool_id=user_pool_id, client_id=client_id)
