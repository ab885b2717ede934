"""Service handler registry — maps service names to handler classes.

Adding a new third-party service:
  1. Create a new subclass of ServiceHandler in this package
  2. Add one entry to _HANDLER_CLASSES below
  3. Its routing table is validated when this module is imported

Unknown service names fall back to the generic REST passthrough.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gatehouse_shared.credential_models import GENERIC_SERVICE

from gatehouse_service_access.handlers.base import PathIndicators, Route, ServiceHandler
from gatehouse_service_access.handlers.generic import GenericHandler
from gatehouse_service_access.handlers.github import GitHubHandler
from gatehouse_service_access.handlers.jira import JiraHandler
from gatehouse_service_access.handlers.slack import SlackHandler

if TYPE_CHECKING:
    from gatehouse_shared.credential_models import CredentialBundle

    from gatehouse_service_access.gateway import ThirdPartyGateway

_HANDLER_CLASSES: dict[str, type[ServiceHandler]] = {
    "github": GitHubHandler,
    "slack": SlackHandler,
    "jira": JiraHandler,
    GENERIC_SERVICE: GenericHandler,
}

for _cls in _HANDLER_CLASSES.values():
    _cls.validate_routes()

SERVICE_NAMES = frozenset(_HANDLER_CLASSES)


def get_service_handler(
    service: str,
    bundle: CredentialBundle,
    gateway: ThirdPartyGateway,
) -> ServiceHandler:
    """Instantiate the handler for a service, falling back to generic."""
    cls = _HANDLER_CLASSES.get(service, GenericHandler)
    return cls(bundle, gateway)


__all__ = [
    "SERVICE_NAMES",
    "PathIndicators",
    "Route",
    "ServiceHandler",
    "get_service_handler",
]
