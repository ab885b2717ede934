"""Cognito JWT verification for the request handlers.

Handlers use this to turn an ``Authorization: Bearer <token>`` header into a
verified IdentityClaim. Keys come from the injected KeyCache; the verifier
never refreshes or invalidates the cache itself.

Verification is pinned to a single asymmetric algorithm (RS256 by default).
A token whose header names any other algorithm is rejected before a key is
even looked up, which closes off algorithm-substitution tricks such as
HS256 signed with the public key.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import jwt as pyjwt
from gatehouse_shared.auth_models import IdentityClaim, IdentityPoolConfig
from gatehouse_shared.errors import AuthRequiredError, InvalidTokenError

from gatehouse_auth.keys import KeyCache, get_key_cache

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "RS256"


class TokenVerifier:
    """Verify bearer tokens against the user pool's current signing keys."""

    def __init__(
        self,
        key_cache: KeyCache,
        algorithm: str = DEFAULT_ALGORITHM,
        issuer: str | None = None,
    ) -> None:
        self.key_cache = key_cache
        self.algorithm = algorithm
        self.issuer = issuer

    async def verify(self, token: str) -> IdentityClaim:
        """Decode and validate a bearer token.

        Raises:
            InvalidTokenError: malformed token, unknown kid, wrong algorithm,
                bad signature, expired or missing claims.
            KeyFetchError: the signing keys could not be refreshed.
        """
        try:
            header = pyjwt.get_unverified_header(token)
        except pyjwt.PyJWTError as e:
            raise InvalidTokenError("Invalid token") from e

        if header.get("alg") != self.algorithm:
            raise InvalidTokenError(f"Unexpected token algorithm {header.get('alg')!r}")

        kid = header.get("kid")
        if not kid:
            raise InvalidTokenError("Token missing key identifier")

        key_set = await self.key_cache.get_keys()
        jwk = key_set.keys.get(kid)
        if jwk is None:
            raise InvalidTokenError("No matching key found")

        try:
            public_key = pyjwt.PyJWK(jwk, algorithm=self.algorithm).key
            payload = pyjwt.decode(
                token,
                public_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                # Cognito access tokens carry client_id instead of aud.
                options={"require": ["exp", "sub"], "verify_aud": False},
            )
        except pyjwt.PyJWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        return IdentityClaim(
            subject=payload["sub"],
            expires_at=payload["exp"],
            email=payload.get("email"),
            token_use=payload.get("token_use"),
            raw_claims=payload,
        )


def extract_bearer_token(headers: Mapping[str, str]) -> str:
    """Pull the token out of the Authorization header.

    A bare token without the ``Bearer`` prefix is accepted as-is.
    """
    auth_header = headers.get("Authorization") or headers.get("authorization")
    if not auth_header:
        raise AuthRequiredError("Authorization header required")
    if auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):]
    return auth_header


# ============================================================================
# Singleton management
# ============================================================================

_verifier: TokenVerifier | None = None


def get_verifier() -> TokenVerifier:
    """Return a lazily-initialized TokenVerifier over the process-wide KeyCache."""
    global _verifier
    if _verifier is not None:
        return _verifier

    config = IdentityPoolConfig.from_env()
    _verifier = TokenVerifier(get_key_cache(), issuer=config.issuer)
    return _verifier


def reset_verifier() -> None:
    """Reset the verifier singleton — used in tests."""
    global _verifier
    _verifier = None
