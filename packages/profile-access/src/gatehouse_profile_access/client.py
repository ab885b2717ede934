"""Redis client adapter for the Profile Store.

Normalizes the interface between the Upstash SDK (cloud) and fakeredis
(local dev). Both support get/set/delete, but differ on transactions:
  - Upstash: multi() → tx.exec()
  - redis-py/fakeredis: pipeline(transaction=True) → pipe.execute()

The RedisAdapter wraps this difference so profiles.py never touches raw
clients.

Environment detection:
  - UPSTASH_REDIS_REST_URL set → Upstash SDK (staging/prod)
  - Otherwise → fakeredis (local dev, no Docker, no cloud dependency)
"""

from __future__ import annotations

import logging
import os
from typing import Any

logger = logging.getLogger(__name__)


class RedisTransaction:
    """Wraps either an Upstash multi or a fakeredis pipeline for uniform tx API."""

    def __init__(self, raw_tx: Any, is_upstash: bool) -> None:
        self._tx = raw_tx
        self._is_upstash = is_upstash

    def set(self, key: str, value: str) -> RedisTransaction:
        self._tx.set(key, value)
        return self

    def delete(self, key: str) -> RedisTransaction:
        self._tx.delete(key)
        return self

    async def execute(self) -> list[Any]:
        if self._is_upstash:
            return await self._tx.exec()
        return await self._tx.execute()


class RedisAdapter:
    """Unified async Redis interface over Upstash SDK or fakeredis."""

    def __init__(self, raw_client: Any, is_upstash: bool = False) -> None:
        self._client = raw_client
        self._is_upstash = is_upstash

    async def get(self, key: str) -> str | None:
        value = await self._client.get(key)
        if isinstance(value, bytes):
            return value.decode()
        return value

    async def set(self, key: str, value: str) -> None:
        await self._client.set(key, value)

    async def delete(self, *keys: str) -> None:
        await self._client.delete(*keys)

    def multi(self) -> RedisTransaction:
        if self._is_upstash:
            return RedisTransaction(self._client.multi(), is_upstash=True)
        return RedisTransaction(self._client.pipeline(transaction=True), is_upstash=False)


# ============================================================================
# Singleton management
# ============================================================================

_client: RedisAdapter | None = None


def get_client() -> RedisAdapter:
    """Return a lazily-initialized RedisAdapter singleton.

    Environment detection:
      - UPSTASH_REDIS_REST_URL set → Upstash SDK
      - Otherwise → fakeredis (in-memory, no external dependency)
    """
    global _client
    if _client is not None:
        return _client

    if os.environ.get("UPSTASH_REDIS_REST_URL"):
        from upstash_redis.asyncio import Redis

        raw = Redis.from_env()
        _client = RedisAdapter(raw, is_upstash=True)
    else:
        from fakeredis.aioredis import FakeRedis

        if os.environ.get("AWS_LAMBDA_FUNCTION_NAME"):
            logger.warning(
                "UPSTASH_REDIS_REST_URL is not set; profiles are kept in an "
                "in-memory store and are lost when this instance is recycled"
            )
        raw = FakeRedis(decode_responses=True)
        _client = RedisAdapter(raw, is_upstash=False)

    return _client


def reset_client() -> None:
    """Reset the client singleton — used in tests to inject mocks."""
    global _client
    _client = None


def set_client(adapter: RedisAdapter) -> None:
    """Inject a client — used in tests."""
    global _client
    _client = adapter
