"""Profile Store business verbs.

Each verb uses the RedisAdapter from get_client(), with JSON serialization
for the profile document and a string index from email to user id.

Email uniqueness is only as strong as the check-then-put done by callers:
put_profile overwrites the email index unconditionally, so two concurrent
signups for the same email can both succeed.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

import pydantic

from gatehouse_shared.errors import ExternalServiceError, NotFoundError, ValidationError
from gatehouse_shared.profile_models import UserProfile

from gatehouse_profile_access.client import get_client
from gatehouse_profile_access.keys import profile_idx_email, profile_key

logger = logging.getLogger(__name__)


def _load(raw: str | None) -> UserProfile | None:
    if raw is None:
        return None
    return UserProfile.model_validate_json(raw)


def _revise(profile: UserProfile, changes: dict[str, Any]) -> UserProfile:
    """Return a copy of profile with changes applied and re-validated."""
    try:
        return UserProfile.model_validate({**profile.model_dump(), **changes})
    except pydantic.ValidationError as e:
        raise ValidationError.from_pydantic(e) from e


async def get_profile_by_user_id(user_id: str) -> UserProfile | None:
    try:
        return _load(await get_client().get(profile_key(user_id)))
    except Exception as e:
        raise ExternalServiceError(f"Profile lookup failed for {user_id}: {e}") from e


async def get_profile_by_email(email: str) -> UserProfile | None:
    client = get_client()
    try:
        user_id = await client.get(profile_idx_email(email))
        if not user_id:
            return None
        return _load(await client.get(profile_key(user_id)))
    except Exception as e:
        raise ExternalServiceError(f"Profile lookup by email failed: {e}") from e


async def put_profile(profile: UserProfile) -> UserProfile:
    """Store a profile, stamping created_at (if unset) and updated_at.

    Replaces any existing document for the user id wholesale and moves the
    email index if the email changed.
    """
    now = datetime.now(UTC)
    stored = _revise(profile, {"created_at": profile.created_at or now, "updated_at": now})
    client = get_client()
    try:
        previous = _load(await client.get(profile_key(stored.user_id)))
        tx = client.multi()
        if previous is not None and previous.email.lower() != stored.email.lower():
            tx.delete(profile_idx_email(previous.email))
        tx.set(profile_key(stored.user_id), stored.model_dump_json())
        tx.set(profile_idx_email(stored.email), stored.user_id)
        await tx.execute()
    except Exception as e:
        raise ExternalServiceError(f"Profile write failed for {stored.user_id}: {e}") from e

    logger.info(f"Stored profile {stored.user_id}")
    return stored


async def update_credential_locator(
    user_id: str,
    locator: str,
    service_id: str | None = None,
) -> UserProfile:
    """Point a profile at a credential bundle in the vault."""
    profile = await get_profile_by_user_id(user_id)
    if profile is None:
        raise NotFoundError("User not found")

    changes: dict[str, Any] = {
        "credential_locator": locator,
        "updated_at": datetime.now(UTC),
    }
    if service_id is not None:
        changes["service_id"] = service_id
    updated = _revise(profile, changes)

    try:
        await get_client().set(profile_key(user_id), updated.model_dump_json())
    except Exception as e:
        raise ExternalServiceError(f"Credential update failed for {user_id}: {e}") from e

    logger.info(f"Updated credential locator for {user_id}")
    return updated
