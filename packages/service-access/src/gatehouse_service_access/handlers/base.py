"""Base service handler — shared behavior for all third-party services.

Every handler declares an explicit routing table instead of nested
method/path conditionals. A Route matches on HTTP method, an optional
``action`` keyword and a set of path indicators that must be present; the
first matching route wins. A route either names an operation (an async
method on the handler) or carries a fixed error message that becomes a
ValidationError. A method that appears in no route is unsupported (405).

validate_routes() checks a table at import time:
  - every operation a route names exists on the handler
  - each route names exactly one of operation / error
  - every routed method ends in a catch-all route, so no request for a
    supported method can fall through unmatched

A new service = a new subclass + one line in the registry dict.
"""

from __future__ import annotations

import inspect
from abc import ABC
from dataclasses import dataclass
from typing import Any, ClassVar

from gatehouse_shared.credential_models import CredentialBundle
from gatehouse_shared.errors import UnsupportedMethodError, ValidationError
from gatehouse_shared.models import ServiceResponse
from pydantic import BaseModel

from gatehouse_service_access.gateway import ThirdPartyGateway


class PathIndicators(BaseModel):
    """The path/query values that steer routing inside a service."""

    resource_id: str | None = None
    action: str | None = None
    project_key: str | None = None
    query: str | None = None

    @classmethod
    def from_params(
        cls,
        path_params: dict[str, str] | None,
        query_params: dict[str, str] | None = None,
    ) -> PathIndicators:
        path_params = path_params or {}
        query_params = query_params or {}
        return cls(
            resource_id=path_params.get("resourceId") or path_params.get("repoName"),
            action=path_params.get("action"),
            project_key=path_params.get("projectKey"),
            query=path_params.get("jql") or query_params.get("jql"),
        )


@dataclass(frozen=True)
class Route:
    method: str
    operation: str | None = None
    error: str | None = None
    action: str | None = None
    requires: tuple[str, ...] = ()

    @property
    def is_catch_all(self) -> bool:
        return self.action is None and not self.requires

    def matches(self, method: str, indicators: PathIndicators) -> bool:
        if method != self.method:
            return False
        if self.action is not None and indicators.action != self.action:
            return False
        return all(getattr(indicators, name) for name in self.requires)


class ServiceHandler(ABC):
    """Abstract base for third-party service handlers.

    Subclasses set service_name, display_name and routes, and implement one
    async method per operation with the signature
    ``(self, indicators, body) -> ServiceResponse``.
    """

    service_name: ClassVar[str]
    display_name: ClassVar[str]
    routes: ClassVar[tuple[Route, ...]]
    accepts: ClassVar[tuple[str, ...]] = ("api_key", "basic")

    def __init__(self, bundle: CredentialBundle, gateway: ThirdPartyGateway) -> None:
        self.bundle = bundle
        self.gateway = gateway

    def _default_base_url(self) -> str | None:
        """Default API base URL; None means the bundle must supply one."""
        return None

    def _extra_headers(self) -> dict[str, str]:
        return {}

    def _get_base_url(self) -> str:
        base_url = self.bundle.base_url or self._default_base_url()
        if not base_url:
            raise ValidationError(f"No base URL configured for {self.display_name}")
        return base_url.rstrip("/")

    @property
    def methods(self) -> set[str]:
        return {route.method for route in self.routes}

    def resolve(self, method: str, indicators: PathIndicators) -> Route:
        method = method.upper()
        if method not in self.methods:
            raise UnsupportedMethodError(self._unsupported_message(method))
        for route in self.routes:
            if route.matches(method, indicators):
                return route
        # validate_routes() guarantees a catch-all per routed method.
        raise UnsupportedMethodError(self._unsupported_message(method))

    def _unsupported_message(self, method: str) -> str:
        return f'Unsupported method "{method}" for {self.display_name}'

    async def handle(
        self,
        method: str,
        indicators: PathIndicators,
        body: dict[str, Any] | None = None,
    ) -> ServiceResponse:
        """Route a request and run the matching operation."""
        if self.bundle.credential.kind not in self.accepts:
            raise ValidationError(
                f"{self.display_name} does not accept {self.bundle.credential.kind} credentials"
            )
        route = self.resolve(method, indicators)
        if route.error is not None:
            raise ValidationError(route.error)
        operation = getattr(self, route.operation)
        return await operation(indicators, body or {})

    async def _call(self, method: str, path: str, body: Any = None) -> ServiceResponse:
        url = f"{self._get_base_url()}/{path.lstrip('/')}"
        return await self.gateway.call_external_endpoint(
            method,
            url,
            self.bundle.credential,
            body=body,
            headers=self._extra_headers(),
        )

    @classmethod
    def validate_routes(cls) -> None:
        """Raise ValueError describing every problem in the routing table."""
        problems: list[str] = []
        for route in cls.routes:
            if (route.operation is None) == (route.error is None):
                problems.append(f"{route} must name exactly one of operation/error")
            if route.operation is not None:
                target = getattr(cls, route.operation, None)
                if target is None or not inspect.iscoroutinefunction(target):
                    problems.append(f"{route.method} route names missing operation '{route.operation}'")
        for method in {route.method for route in cls.routes}:
            method_routes = [r for r in cls.routes if r.method == method]
            if not method_routes[-1].is_catch_all:
                problems.append(f"{method} routes do not end in a catch-all route")
        if problems:
            raise ValueError(f"{cls.__name__} routing table is invalid: " + "; ".join(problems))
