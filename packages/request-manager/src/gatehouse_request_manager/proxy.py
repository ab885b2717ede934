"""Third-party proxy: caller's profile → credential bundle → service handler.

Service selection:
  1. The bundle's own ``service`` field (``generic`` when absent).
  2. A repository-shaped path (``/repos`` in the resource or path, or a
     ``repoName`` path parameter) selects github, but only when the bundle
     already names a specific service. A generic bundle stays generic.
  3. Names with no dedicated handler use the generic handler.
"""

from __future__ import annotations

import logging

from gatehouse_profile_access.profiles import get_profile_by_user_id
from gatehouse_service_access.gateway import get_gateway
from gatehouse_service_access.handlers import PathIndicators, get_service_handler
from gatehouse_shared.credential_models import GENERIC_SERVICE, CredentialBundle
from gatehouse_shared.errors import NotFoundError, ValidationError
from gatehouse_shared.models import HandlerResult, ServiceResponse
from gatehouse_vault_access.secrets import load_credential_bundle

from gatehouse_request_manager.authn import authenticate_owner
from gatehouse_request_manager.requests import InboundRequest

logger = logging.getLogger(__name__)


def is_repository_request(request: InboundRequest) -> bool:
    return (
        "/repos" in request.resource
        or "/repos" in request.path
        or bool(request.path_params.get("repoName"))
    )


def select_service(bundle: CredentialBundle, request: InboundRequest) -> str:
    service = bundle.service or GENERIC_SERVICE
    if service != GENERIC_SERVICE and is_repository_request(request):
        return "github"
    return service


async def proxy_request(request: InboundRequest) -> ServiceResponse:
    """Run the caller's request against their configured third-party service."""
    claim = await authenticate_owner(request)

    profile = await get_profile_by_user_id(claim.subject)
    if profile is None:
        raise NotFoundError("User not found")
    if not profile.credential_locator:
        raise ValidationError("Service not configured for user")

    bundle = await load_credential_bundle(profile.credential_locator)
    service = select_service(bundle, request)
    handler = get_service_handler(service, bundle, get_gateway())

    logger.info(f"Proxying {request.method} for {claim.subject} to {handler.service_name}")
    indicators = PathIndicators.from_params(request.path_params, request.query_params)
    return await handler.handle(request.method, indicators, request.body)


async def proxy(request: InboundRequest) -> HandlerResult:
    result = await proxy_request(request)
    if not result.success:
        raise ValidationError(result.message or "Third-party request failed")
    return HandlerResult(payload=result.data)
