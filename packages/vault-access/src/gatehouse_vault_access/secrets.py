"""Vault Access business verbs — fetch and parse credential bundles.

Secret material only lives in memory for the duration of one proxied call;
nothing here caches it or logs it.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import pydantic
from gatehouse_shared.credential_models import CredentialBundle
from gatehouse_shared.errors import ExternalServiceError, ValidationError

from gatehouse_vault_access.client import get_client

logger = logging.getLogger(__name__)


async def get_secret(locator: str) -> dict[str, Any]:
    """Return the JSON object stored under a locator."""
    try:
        raw = await get_client().get_secret_string(locator)
        secret = json.loads(raw)
    except Exception as e:
        logger.error(f"Error retrieving secret '{locator}': {type(e).__name__}: {e}")
        raise ExternalServiceError(
            f"Failed to retrieve credentials from Secrets Manager: {locator}"
        ) from e

    if not isinstance(secret, dict):
        raise ExternalServiceError(f"Secret '{locator}' is not a JSON object")
    return secret


async def load_credential_bundle(locator: str) -> CredentialBundle:
    """Fetch a secret and parse it into a tagged CredentialBundle.

    A bundle that does not parse raises ExternalServiceError. Field errors can
    echo secret values, so only the error type is logged.
    """
    secret = await get_secret(locator)
    try:
        bundle = CredentialBundle.from_secret(secret)
    except (ValidationError, pydantic.ValidationError) as e:
        logger.error(f"Malformed credential bundle '{locator}': {type(e).__name__}")
        raise ExternalServiceError(f"Malformed credential bundle: {locator}") from e
    logger.info(
        f"Loaded {bundle.credential.kind} credential for service '{bundle.service}'"
    )
    return bundle
