"""Cognito client adapter for Identity Access.

Wraps the boto3 ``cognito-idp`` client behind an async interface. boto3 is
synchronous, so every call runs in a worker thread; the rest of the platform
only ever awaits.

The adapter speaks Cognito's vocabulary and lets botocore's ClientError
propagate. Translating those errors into the platform taxonomy is the job of
accounts.py.

Usage:
    from gatehouse_identity_access.client import get_client

    client = get_client()
    user_id = await client.create_account("a@b.com", "password1")
"""

from __future__ import annotations

import asyncio
from typing import Any

import boto3
from gatehouse_shared.auth_models import IdentityPoolConfig


class CognitoAdapter:
    """Async facade over the admin user-pool APIs used at signup."""

    def __init__(self, raw_client: Any, config: IdentityPoolConfig) -> None:
        self._client = raw_client
        self.config = config

    async def create_account(self, email: str, temp_password: str) -> str:
        """Create a confirmed user without sending the welcome email.

        Returns the provider user id: the ``sub`` attribute when Cognito
        reports one (it is what bearer tokens carry as their subject),
        otherwise the Cognito username.
        """
        response = await asyncio.to_thread(
            self._client.admin_create_user,
            UserPoolId=self.config.user_pool_id,
            Username=email,
            UserAttributes=[
                {"Name": "email", "Value": email},
                {"Name": "email_verified", "Value": "true"},
            ],
            MessageAction="SUPPRESS",
            TemporaryPassword=temp_password,
        )
        user = response.get("User") or {}
        attributes = {a["Name"]: a["Value"] for a in user.get("Attributes", [])}
        return attributes.get("sub") or user.get("Username", "")

    async def set_permanent_password(self, email: str, password: str) -> None:
        await asyncio.to_thread(
            self._client.admin_set_user_password,
            UserPoolId=self.config.user_pool_id,
            Username=email,
            Password=password,
            Permanent=True,
        )

    async def sign_in(self, email: str, password: str) -> dict[str, Any] | None:
        """Run the ADMIN_USER_PASSWORD_AUTH flow; returns AuthenticationResult."""
        response = await asyncio.to_thread(
            self._client.admin_initiate_auth,
            UserPoolId=self.config.user_pool_id,
            ClientId=self.config.client_id,
            AuthFlow="ADMIN_USER_PASSWORD_AUTH",
            AuthParameters={"USERNAME": email, "PASSWORD": password},
        )
        return response.get("AuthenticationResult")


# ============================================================================
# Singleton management
# ============================================================================

_client: CognitoAdapter | None = None


def get_client() -> CognitoAdapter:
    """Return a lazily-initialized CognitoAdapter singleton.

    Raises ConfigurationError when the pool or app client id is missing.
    """
    global _client
    if _client is not None:
        return _client

    config = IdentityPoolConfig.from_env()
    raw = boto3.client("cognito-idp", region_name=config.region)
    _client = CognitoAdapter(raw, config)
    return _client


def reset_client() -> None:
    """Reset the client singleton — used in tests to inject mocks."""
    global _client
    _client = None


def set_client(adapter: CognitoAdapter) -> None:
    """Inject a client — used in tests."""
    global _client
    _client = adapter
