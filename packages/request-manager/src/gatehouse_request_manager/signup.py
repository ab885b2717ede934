"""Signup: validate → conflict check → Cognito account → profile → sign in.

Validation runs before any backend is touched. If a step after account
creation fails, the Cognito account is left in place and the error is
reported; nothing is rolled back.
"""

from __future__ import annotations

import logging

from gatehouse_identity_access.accounts import register_account, sign_in
from gatehouse_profile_access.profiles import get_profile_by_email, put_profile
from gatehouse_shared.errors import ConflictError, ValidationError
from gatehouse_shared.models import HandlerResult
from gatehouse_shared.profile_models import UserProfile, is_valid_email

from gatehouse_request_manager.requests import InboundRequest

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def validate_signup(body: dict) -> tuple[str, str]:
    """Return (email, password) or raise ValidationError."""
    email = body.get("email")
    password = body.get("password")

    if not email:
        raise ValidationError("Email is required")
    if not isinstance(email, str) or not is_valid_email(email):
        raise ValidationError("Invalid email format")
    if not password:
        raise ValidationError("Password is required")
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    return email, password


async def signup(request: InboundRequest) -> HandlerResult:
    email, password = validate_signup(request.body)

    if await get_profile_by_email(email) is not None:
        raise ConflictError("User already exists. Please use a different email.")

    user_id = await register_account(email, password)
    await put_profile(UserProfile(user_id=user_id, email=email))
    tokens = await sign_in(email, password)

    logger.info(f"Signed up user {user_id}")
    return HandlerResult(
        created=True,
        payload={
            "message": "User created successfully",
            "userId": user_id,
            "email": email,
            "tokens": tokens.to_response(),
        },
    )
