"""Slack handler — the messaging service.

Auth: bot token (Bearer) only.
Base URL: https://slack.com/api
"""

from __future__ import annotations

from typing import Any

from gatehouse_shared.errors import ValidationError
from gatehouse_shared.models import ServiceResponse

from gatehouse_service_access.handlers.base import PathIndicators, Route, ServiceHandler

INVALID_ENDPOINT = "Invalid Slack endpoint"


class SlackHandler(ServiceHandler):
    """Channel listing and message posting on the Slack Web API."""

    service_name = "slack"
    display_name = "Slack"
    accepts = ("api_key",)
    routes = (
        Route("GET", "list_channels", action="channels"),
        Route("GET", error=INVALID_ENDPOINT),
        Route("POST", "send_message", action="message"),
        Route("POST", error=INVALID_ENDPOINT),
    )

    def _default_base_url(self) -> str:
        return "https://slack.com/api"

    async def list_channels(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        return await self._call("GET", "conversations.list")

    async def send_message(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        channel = body.get("channel")
        text = body.get("text")
        if not channel or not text:
            raise ValidationError("Channel and text are required for Slack message")
        return await self._call("POST", "chat.postMessage", {"channel": channel, "text": text})
