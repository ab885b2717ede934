"""Process-wide cache of the identity provider's signing keys.

The cache holds one SigningKeySet and a freshness window (default one hour,
JWKS_CACHE_TTL_SECONDS). Within the window get_keys() never touches the
network; past it, the next call fetches a fresh set and replaces the cached
one wholesale.

There is no lock. Two invocations that find the cache stale at the same time
both fetch, and the last write wins; any fetched set is as good as another.

A failed fetch raises KeyFetchError and leaves the previous set in place.
Expired keys are never served as a fallback.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Awaitable, Callable
from typing import Any

from gatehouse_identity_access.jwks import fetch_signing_keys
from gatehouse_shared.auth_models import IdentityPoolConfig, SigningKeySet
from gatehouse_shared.errors import KeyFetchError

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 3600.0

KeyFetcher = Callable[[], Awaitable[Any]]


class KeyCache:
    """TTL cache around a JWKS fetcher."""

    def __init__(
        self,
        fetcher: KeyFetcher,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetcher = fetcher
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._key_set: SigningKeySet | None = None

    @property
    def cached(self) -> SigningKeySet | None:
        return self._key_set

    async def get_keys(self) -> SigningKeySet:
        """Return the cached key set, refreshing it first if stale or absent."""
        now = self._clock()
        current = self._key_set
        if current is not None and current.is_fresh(now, self.ttl_seconds):
            return current

        try:
            jwks = await self._fetcher()
            key_set = SigningKeySet.from_jwks(jwks, fetched_at=now)
        except Exception as e:
            logger.error(f"Signing key refresh failed: {e}")
            raise KeyFetchError("Failed to fetch JWK keys") from e

        self._key_set = key_set
        logger.info(f"Signing keys refreshed ({len(key_set.keys)} keys)")
        return key_set


# ============================================================================
# Singleton management
# ============================================================================

_cache: KeyCache | None = None


def get_key_cache() -> KeyCache:
    """Return the process-wide KeyCache, wired to the configured user pool."""
    global _cache
    if _cache is not None:
        return _cache

    config = IdentityPoolConfig.from_env()
    ttl = float(os.environ.get("JWKS_CACHE_TTL_SECONDS", DEFAULT_TTL_SECONDS))

    async def _fetch() -> Any:
        return await fetch_signing_keys(config.region, config.user_pool_id)

    _cache = KeyCache(_fetch, ttl_seconds=ttl)
    return _cache


def reset_key_cache() -> None:
    """Reset the cache singleton — used in tests."""
    global _cache
    _cache = None


def set_key_cache(cache: KeyCache) -> None:
    """Inject a cache — used in tests."""
    global _cache
    _cache = cache
