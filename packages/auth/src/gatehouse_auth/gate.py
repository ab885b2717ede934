"""Ownership check for path-addressed resources.

Routes like ``/users/{userId}`` name the user whose data is being touched.
A caller may only address themselves; with no user id in the path the
operation is implicitly scoped to the caller and always allowed.
"""

from __future__ import annotations

from enum import Enum

from gatehouse_shared.errors import ForbiddenError


class AccessDecision(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"


def authorize(caller_subject: str, target_resource_id: str | None) -> AccessDecision:
    if not target_resource_id:
        return AccessDecision.ALLOWED
    if target_resource_id == caller_subject:
        return AccessDecision.ALLOWED
    return AccessDecision.DENIED


def require_owner(caller_subject: str, target_resource_id: str | None) -> None:
    """Raise ForbiddenError unless the caller owns the addressed resource."""
    if authorize(caller_subject, target_resource_id) is AccessDecision.DENIED:
        raise ForbiddenError("Unauthorized access to user data")
