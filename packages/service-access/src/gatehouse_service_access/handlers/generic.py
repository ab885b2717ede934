"""Generic handler — REST passthrough for any service without its own handler.

Resources live under the bundle's baseUrl:
  GET    /resources             list
  GET    /resource/{id}         fetch
  POST   /resource              create
  PUT    /resource/{id}         replace
  DELETE /resource/{id}         delete
"""

from __future__ import annotations

from typing import Any

from gatehouse_shared.credential_models import GENERIC_SERVICE
from gatehouse_shared.models import ServiceResponse

from gatehouse_service_access.handlers.base import PathIndicators, Route, ServiceHandler


class GenericHandler(ServiceHandler):
    """Passthrough against the bundle's base URL."""

    service_name = GENERIC_SERVICE
    display_name = "generic service"
    routes = (
        Route("GET", "get_resource", requires=("resource_id",)),
        Route("GET", "list_resources"),
        Route("POST", "create_resource"),
        Route("PUT", "update_resource", requires=("resource_id",)),
        Route("PUT", error="Resource ID required for PUT requests"),
        Route("DELETE", "delete_resource", requires=("resource_id",)),
        Route("DELETE", error="Resource ID required for DELETE requests"),
    )

    def _unsupported_message(self, method: str) -> str:
        return f'Unsupported method "{method}"'

    async def get_resource(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        return await self._call("GET", f"resource/{indicators.resource_id}")

    async def list_resources(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        return await self._call("GET", "resources")

    async def create_resource(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        return await self._call("POST", "resource", body)

    async def update_resource(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        return await self._call("PUT", f"resource/{indicators.resource_id}", body)

    async def delete_resource(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        return await self._call("DELETE", f"resource/{indicators.resource_id}")
