"""Fetch the user pool's published signing keys (JWKS).

One GET per call — caching lives in gatehouse_auth.keys.KeyCache, which
decides when a fetch is needed.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


def jwks_url(region: str, pool_id: str) -> str:
    return f"https://cognito-idp.{region}.amazonaws.com/{pool_id}/.well-known/jwks.json"


async def fetch_signing_keys(
    region: str,
    pool_id: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Return the raw JWKS document for the pool.

    Raises httpx.HTTPError on transport failure or a non-2xx response and
    ValueError when the body is not JSON.
    """
    url = jwks_url(region, pool_id)
    logger.info(f"Fetching signing keys from {url}")
    async with httpx.AsyncClient(timeout=5.0, transport=transport) as client:
        response = await client.get(url)
        response.raise_for_status()
        return response.json()
