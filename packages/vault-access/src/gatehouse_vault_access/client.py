"""Secret backends for Vault Access.

Two backends behind one async interface, get_secret_string(locator):

  - SecretsManagerVault: AWS Secrets Manager via boto3. The locator is the
    secret name or ARN. boto3 is synchronous, so the call runs in a thread.
  - EnvironmentVault: the locator names an environment variable holding the
    bundle's JSON. This is how local dev and Railway-style deployments keep
    secrets out of the profile store.

Environment detection:
  - SECRETS_BACKEND=aws|env wins when set
  - Otherwise AWS_REGION set (always true inside Lambda) → Secrets Manager
  - Otherwise → environment variables
"""

from __future__ import annotations

import asyncio
import os
from typing import Any, Protocol

import boto3


class SecretBackend(Protocol):
    async def get_secret_string(self, locator: str) -> str: ...


class SecretsManagerVault:
    """AWS Secrets Manager backend."""

    def __init__(self, raw_client: Any) -> None:
        self._client = raw_client

    async def get_secret_string(self, locator: str) -> str:
        response = await asyncio.to_thread(self._client.get_secret_value, SecretId=locator)
        value = response.get("SecretString")
        if value is None:
            raise ValueError("Secret value is not a string")
        return value


class EnvironmentVault:
    """Environment-variable backend — the locator is the variable name."""

    async def get_secret_string(self, locator: str) -> str:
        value = os.environ.get(locator, "")
        if not value:
            raise KeyError(f"Environment variable '{locator}' is not set or empty")
        return value


# ============================================================================
# Singleton management
# ============================================================================

_client: SecretBackend | None = None


def get_client() -> SecretBackend:
    """Return a lazily-initialized secret backend singleton."""
    global _client
    if _client is not None:
        return _client

    backend = os.environ.get("SECRETS_BACKEND", "").lower()
    region = os.environ.get("AWS_REGION")
    if backend == "aws" or (not backend and region):
        _client = SecretsManagerVault(boto3.client("secretsmanager", region_name=region))
    else:
        _client = EnvironmentVault()
    return _client


def reset_client() -> None:
    """Reset the client singleton — used in tests to inject mocks."""
    global _client
    _client = None


def set_client(backend: SecretBackend) -> None:
    """Inject a backend — used in tests."""
    global _client
    _client = backend
