"""Profile management: read a profile and attach a credential locator.

Two entry points share these verbs:

  profile            — every method requires a verified bearer token, and a
                       userId in the path must be the caller's own.
  profile-bootstrap  — as above, except a POST naming an email with no
                       profile yet creates one under a temporary id without
                       any identity check. A POST for an existing profile
                       still requires the owner's token.

Temporary ids are never reconciled with the Cognito subject; a bootstrap
record stays under its temp_ id.
"""

from __future__ import annotations

import logging
import time
import uuid

import pydantic

from gatehouse_profile_access.profiles import (
    get_profile_by_email,
    get_profile_by_user_id,
    put_profile,
    update_credential_locator,
)
from gatehouse_shared.errors import (
    ForbiddenError,
    NotFoundError,
    UnsupportedMethodError,
    ValidationError,
)
from gatehouse_shared.models import HandlerResult
from gatehouse_shared.profile_models import UserProfile, is_valid_email

from gatehouse_request_manager.authn import authenticate, authenticate_owner
from gatehouse_request_manager.requests import InboundRequest

logger = logging.getLogger(__name__)

CREDENTIALS_UPDATED = "User credentials updated successfully"


def new_temp_user_id() -> str:
    return f"temp_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


async def read_profile(request: InboundRequest) -> HandlerResult:
    claim = await authenticate_owner(request)
    profile = await get_profile_by_user_id(claim.subject)
    if profile is None:
        raise NotFoundError("User not found")
    return HandlerResult(payload=profile.to_response())


def _optional_string(body: dict, field: str) -> str | None:
    value = body.get(field)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value


async def _store_locator(user_id: str, body: dict) -> HandlerResult:
    locator = _optional_string(body, "thirdPartyServiceCredentials")
    if not locator:
        raise ValidationError("No credentials provided for update")
    service_id = _optional_string(body, "thirdPartyServiceId")
    await update_credential_locator(user_id, locator, service_id)
    return HandlerResult(payload={"message": CREDENTIALS_UPDATED})


async def update_profile(request: InboundRequest) -> HandlerResult:
    claim = await authenticate_owner(request)
    return await _store_locator(claim.subject, request.body)


async def bootstrap_profile(request: InboundRequest) -> HandlerResult:
    email = request.body.get("email")
    if not email:
        raise ValidationError("Email is required")
    if not isinstance(email, str) or not is_valid_email(email):
        raise ValidationError("Invalid email format")

    existing = await get_profile_by_email(email)
    if existing is not None:
        claim = await authenticate(request)
        if claim.subject != existing.user_id:
            raise ForbiddenError("Unauthorized access to user data")
        return await _store_locator(claim.subject, request.body)

    temp_user_id = new_temp_user_id()
    try:
        profile = UserProfile(
            user_id=temp_user_id,
            email=email,
            service_id=request.body.get("thirdPartyServiceId"),
            credential_locator=request.body.get("thirdPartyServiceCredentials"),
        )
    except pydantic.ValidationError as e:
        raise ValidationError.from_pydantic(e) from e
    await put_profile(profile)
    logger.warning(f"Created profile {temp_user_id} without identity verification")
    return HandlerResult(
        created=True,
        payload={
            "message": "User created successfully. Please authenticate to complete setup.",
            "tempUserId": temp_user_id,
            "email": email,
        },
    )


async def manage_profile(request: InboundRequest) -> HandlerResult:
    if request.method == "GET":
        return await read_profile(request)
    if request.method in ("POST", "PUT"):
        return await update_profile(request)
    raise UnsupportedMethodError(f'Unsupported method "{request.method}"')


async def manage_profile_with_bootstrap(request: InboundRequest) -> HandlerResult:
    if request.method == "POST":
        return await bootstrap_profile(request)
    return await manage_profile(request)
