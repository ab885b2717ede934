"""Request dispatcher: entry point + proxy event → HTTP-style response.

handle_event() is the one place failures are caught. Everything below it
raises taxonomy errors; the response translator turns them into status codes.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from gatehouse_shared.models import HandlerResult

from gatehouse_request_manager.profiles import manage_profile, manage_profile_with_bootstrap
from gatehouse_request_manager.proxy import proxy
from gatehouse_request_manager.requests import InboundRequest
from gatehouse_request_manager.responses import error_response, success_response
from gatehouse_request_manager.signup import signup

logger = logging.getLogger(__name__)

Handler = Callable[[InboundRequest], Awaitable[HandlerResult]]

ENTRY_POINTS: dict[str, Handler] = {
    "signup": signup,
    "profile": manage_profile,
    "profile-bootstrap": manage_profile_with_bootstrap,
    "third-party": proxy,
}


async def dispatch(entry_point: str, request: InboundRequest) -> HandlerResult:
    handler = ENTRY_POINTS.get(entry_point)
    if handler is None:
        raise KeyError(f"Unknown entry point '{entry_point}'")
    return await handler(request)


async def handle_event(entry_point: str, event: dict[str, Any]) -> dict[str, Any]:
    """Run one API Gateway proxy event through an entry point."""
    try:
        request = InboundRequest.from_event(event)
        result = await dispatch(entry_point, request)
    except Exception as e:
        return error_response(e)

    logger.info(f"{entry_point} {request.method} succeeded (created={result.created})")
    return success_response(result)
