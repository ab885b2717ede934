"""Lambda handlers — (event, context) → API Gateway proxy response.

A warm Lambda container reuses this module, so the event loop is created once
and kept: the process-wide clients (httpx, Upstash, the key cache) are bound
to it and stay usable across invocations.

Set DEBUG=true to log each raw event on arrival.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any

from gatehouse_request_manager.dispatch import handle_event

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

_loop: asyncio.AbstractEventLoop | None = None


def _get_loop() -> asyncio.AbstractEventLoop:
    global _loop
    if _loop is None or _loop.is_closed():
        _loop = asyncio.new_event_loop()
    return _loop


def _debug_enabled() -> bool:
    return os.environ.get("DEBUG", "").lower() == "true"


def run_entry_point(entry_point: str, event: dict[str, Any]) -> dict[str, Any]:
    if _debug_enabled():
        logger.info(f"Event received for {entry_point}: {json.dumps(event, default=str)}")
    return _get_loop().run_until_complete(handle_event(entry_point, event))


def signup_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    return run_entry_point("signup", event)


def user_management_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    return run_entry_point("profile", event)


def user_bootstrap_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    return run_entry_point("profile-bootstrap", event)


def third_party_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    return run_entry_point("third-party", event)
