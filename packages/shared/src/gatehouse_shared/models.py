"""Pydantic base models shared across components.

ServiceResponse is the tagged result every third-party call produces.
Like the platform's other result envelopes it lets callers check
success/failure without catching exceptions for expected business failures.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, model_validator


class ServiceResponse(BaseModel):
    """Result of one call through the Third-Party Gateway.

    Success carries the decoded payload; failure carries a human-readable
    message. The two are never populated together.
    """

    success: bool
    data: Any = None
    message: str | None = None

    @model_validator(mode="after")
    def _check_tag(self) -> ServiceResponse:
        if self.success and self.message is not None:
            raise ValueError("a successful ServiceResponse cannot carry a message")
        if not self.success and not self.message:
            raise ValueError("a failed ServiceResponse requires a message")
        if not self.success and self.data is not None:
            raise ValueError("a failed ServiceResponse cannot carry data")
        return self

    @classmethod
    def ok(cls, data: Any = None) -> ServiceResponse:
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, message: str) -> ServiceResponse:
        return cls(success=False, message=message)


class HandlerResult(BaseModel):
    """What the request dispatcher hands to the response translator."""

    payload: Any = None
    created: bool = False
