"""Inbound request model built from an API Gateway proxy event."""

from __future__ import annotations

import json
from typing import Any

from gatehouse_shared.errors import ValidationError
import pydantic
from pydantic import BaseModel, Field


class InboundRequest(BaseModel):
    """The parts of a proxy event the handlers look at.

    Header names are stored lower-cased so lookups are case-insensitive.
    """

    method: str = "GET"
    path: str = ""
    resource: str = ""
    path_params: dict[str, str] = Field(default_factory=dict)
    query_params: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    body: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_event(cls, event: dict[str, Any]) -> InboundRequest:
        raw_body = event.get("body")
        body: Any = {}
        if raw_body:
            try:
                body = json.loads(raw_body)
            except json.JSONDecodeError as e:
                raise ValidationError("Request body must be valid JSON") from e
            if not isinstance(body, dict):
                raise ValidationError("Request body must be a JSON object")

        headers = {k.lower(): v for k, v in (event.get("headers") or {}).items() if v is not None}

        try:
            return cls(
                method=(event.get("httpMethod") or "GET").upper(),
                path=event.get("path") or "",
                resource=event.get("resource") or "",
                path_params=event.get("pathParameters") or {},
                query_params=event.get("queryStringParameters") or {},
                headers=headers,
                body=body,
            )
        except pydantic.ValidationError as e:
            raise ValidationError.from_pydantic(e) from e
