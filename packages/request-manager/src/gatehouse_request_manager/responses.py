"""Response translator: HandlerResult or exception → API Gateway response.

The status table is walked along the exception's MRO, so a subclass such as
KeyFetchError inherits its parent's mapping. Anything not in the table is a
500 with a generic message. Model validation errors count as unclassified:
request handlers convert the ones caused by caller input to ValidationError
before they get here.

Which messages reach the caller:
  - ValidationError / ConflictError: the error's own message
  - auth, forbidden, not-found, unsupported-method: the error's fixed message
  - InvalidTokenError: "Unauthorized", never the verification detail
  - configuration: "Service configuration error"
  - everything else: "Internal server error"
"""

from __future__ import annotations

import json
import logging
from typing import Any

from gatehouse_shared.errors import (
    AuthRequiredError,
    ConfigurationError,
    ConflictError,
    ExternalServiceError,
    ForbiddenError,
    InvalidTokenError,
    NotFoundError,
    UnsupportedMethodError,
    ValidationError,
)
from gatehouse_shared.models import HandlerResult

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"

CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
}

# status, fixed message (None = surface the error's own message)
STATUS_TABLE: dict[type[Exception], tuple[int, str | None]] = {
    ValidationError: (400, None),
    ConflictError: (409, None),
    AuthRequiredError: (401, None),
    InvalidTokenError: (401, "Unauthorized"),
    ForbiddenError: (403, None),
    NotFoundError: (404, None),
    UnsupportedMethodError: (405, None),
    ConfigurationError: (500, "Service configuration error"),
    ExternalServiceError: (500, INTERNAL_ERROR),
}


def build_response(status_code: int, payload: Any) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "body": json.dumps(payload),
        "headers": dict(CORS_HEADERS),
    }


def success_response(result: HandlerResult) -> dict[str, Any]:
    return build_response(201 if result.created else 200, result.payload)


def classify(error: Exception) -> tuple[int, str]:
    """Map an exception to (status code, caller-facing message)."""
    for cls in type(error).__mro__:
        if cls in STATUS_TABLE:
            status, fixed = STATUS_TABLE[cls]
            return status, fixed if fixed is not None else str(error)
    return 500, INTERNAL_ERROR


def error_response(error: Exception) -> dict[str, Any]:
    status, message = classify(error)
    if status >= 500:
        logger.exception(f"Request failed with {status}: {type(error).__name__}: {error}")
    else:
        logger.warning(f"Request rejected with {status}: {type(error).__name__}: {error}")
    return build_response(status, {"message": message})
