"""Error taxonomy shared by every component.

Resource-access components catch library exceptions (botocore, httpx, PyJWT)
at their boundary and re-raise one of these. The request manager's response
translator owns the mapping from these types to HTTP status codes, so nothing
below the manager needs to know about HTTP.

Only ValidationError and ConflictError messages are written with the caller
in mind; everything else may carry internal detail and is logged, not
returned.
"""

from __future__ import annotations

import pydantic


class PlatformError(Exception):
    """Base class for all expected failures."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(PlatformError):
    """Request input is missing or malformed."""

    @classmethod
    def from_pydantic(cls, error: pydantic.ValidationError) -> ValidationError:
        """Join a model's error messages, one per line."""
        # pydantic prefixes messages raised from validators.
        messages = [detail["msg"].removeprefix("Value error, ") for detail in error.errors()]
        return cls("\n".join(messages))


class ConflictError(PlatformError):
    """The resource being created already exists."""


class AuthRequiredError(PlatformError):
    """No bearer token was presented for an operation that needs one."""


class InvalidTokenError(PlatformError):
    """The bearer token failed structural, signature or claim checks."""


class ForbiddenError(PlatformError):
    """The caller is authenticated but does not own the addressed resource."""


class NotFoundError(PlatformError):
    """The addressed record does not exist."""


class UnsupportedMethodError(PlatformError):
    """The HTTP method has no route for this entry point or service."""


class ConfigurationError(PlatformError):
    """Required provider configuration is missing from the environment."""


class ExternalServiceError(PlatformError):
    """A backend collaborator (Cognito, Redis, Secrets Manager) failed."""


class KeyFetchError(ExternalServiceError):
    """The identity provider's signing keys could not be fetched or parsed."""
