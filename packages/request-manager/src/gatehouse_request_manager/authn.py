"""Bearer-token authentication plus the ownership gate on path user ids."""

from __future__ import annotations

from gatehouse_auth.gate import require_owner
from gatehouse_auth.jwt import extract_bearer_token, get_verifier
from gatehouse_shared.auth_models import IdentityClaim

from gatehouse_request_manager.requests import InboundRequest


async def authenticate(request: InboundRequest) -> IdentityClaim:
    """Verify the caller's token; raise AuthRequiredError/InvalidTokenError."""
    token = extract_bearer_token(request.headers)
    return await get_verifier().verify(token)


async def authenticate_owner(request: InboundRequest) -> IdentityClaim:
    """Authenticate, then require the caller to own the path's userId."""
    claim = await authenticate(request)
    require_owner(claim.subject, request.path_params.get("userId"))
    return claim
