"""Identity Access business verbs — account registration and sign-in.

Each verb talks to Cognito through the adapter from get_client() and turns
botocore failures into the platform taxonomy:

  UsernameExistsException → ConflictError
  anything else           → ExternalServiceError

No compensation is attempted: if set_permanent_password fails after the user
was created, the Cognito account is left behind and the error is reported.
"""

from __future__ import annotations

import logging

from botocore.exceptions import BotoCoreError, ClientError
from gatehouse_shared.auth_models import AuthTokens
from gatehouse_shared.errors import ConflictError, ExternalServiceError

from gatehouse_identity_access.client import get_client

logger = logging.getLogger(__name__)


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


async def register_account(email: str, password: str) -> str:
    """Create a Cognito user with a permanent password; return its user id."""
    client = get_client()
    try:
        user_id = await client.create_account(email, password)
        if not user_id:
            raise ExternalServiceError("Failed to create user in Cognito")
        await client.set_permanent_password(email, password)
    except ClientError as e:
        if _error_code(e) == "UsernameExistsException":
            raise ConflictError("User already exists. Please use a different email.") from e
        raise ExternalServiceError(f"Failed to create user: {e}") from e
    except BotoCoreError as e:
        raise ExternalServiceError(f"Failed to create user: {e}") from e

    logger.info(f"Registered Cognito account {user_id}")
    return user_id


async def sign_in(email: str, password: str) -> AuthTokens:
    """Authenticate with the user's password and return the session tokens."""
    client = get_client()
    try:
        result = await client.sign_in(email, password)
    except (ClientError, BotoCoreError) as e:
        raise ExternalServiceError(f"Authentication failed: {e}") from e

    if not result:
        raise ExternalServiceError("Failed to authenticate user after creation")

    return AuthTokens(
        id_token=result["IdToken"],
        access_token=result["AccessToken"],
        refresh_token=result.get("RefreshToken"),
        expires_in=result.get("ExpiresIn"),
        token_type=result.get("TokenType"),
    )
