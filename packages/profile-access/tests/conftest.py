"""Test fixtures for Profile Access.

Provides a MockRedis adapter that mirrors the RedisAdapter interface,
recording every operation. Transactions apply their queued writes to the
same in-memory store on execute(), so tests can assert on the end state.
Profile verbs call get_client(); tests patch it to return the mock.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import patch

import pytest

# ============================================================================
# MockRedis: mirrors RedisAdapter interface
# ============================================================================


class MockRedisTransaction:
    """Queues transaction operations and applies them on execute()."""

    def __init__(self, redis: MockRedis) -> None:
        self._redis = redis
        self.ops: list[tuple[str, tuple]] = []

    def set(self, key: str, value: str) -> MockRedisTransaction:
        self.ops.append(("set", (key, value)))
        return self

    def delete(self, key: str) -> MockRedisTransaction:
        self.ops.append(("delete", (key,)))
        return self

    async def execute(self) -> list[Any]:
        self._redis.transactions.append(list(self.ops))
        for op, args in self.ops:
            if op == "set":
                self._redis.store[args[0]] = args[1]
            else:
                self._redis.store.pop(args[0], None)
        return [None] * len(self.ops)


class MockRedis:
    """In-memory Redis mock that mirrors RedisAdapter's async interface."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.calls: list[tuple[str, tuple]] = []
        self.transactions: list[list[tuple[str, tuple]]] = []
        self.fail_with: Exception | None = None

    async def get(self, key: str) -> str | None:
        self.calls.append(("get", (key,)))
        if self.fail_with is not None:
            raise self.fail_with
        return self.store.get(key)

    async def set(self, key: str, value: str) -> None:
        self.calls.append(("set", (key, value)))
        if self.fail_with is not None:
            raise self.fail_with
        self.store[key] = value

    async def delete(self, *keys: str) -> None:
        self.calls.append(("delete", keys))
        for key in keys:
            self.store.pop(key, None)

    def multi(self) -> MockRedisTransaction:
        self.calls.append(("multi", ()))
        return MockRedisTransaction(self)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_redis() -> MockRedis:
    """Provide a fresh MockRedis, installed as the Profile Store client."""
    redis = MockRedis()
    with patch("gatehouse_profile_access.profiles.get_client", return_value=redis):
        yield redis
