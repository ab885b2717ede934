"""GitHub handler — the source-hosting service.

Repositories are addressed as {owner}/{name}; the owner is the account name
stored in the credential bundle, the name comes from the path.

Auth: personal access token (Bearer) or username + token (Basic).
Base URL: https://api.github.com
"""

from __future__ import annotations

from typing import Any

from gatehouse_shared.errors import ValidationError
from gatehouse_shared.models import ServiceResponse

from gatehouse_service_access.handlers.base import PathIndicators, Route, ServiceHandler


class GitHubHandler(ServiceHandler):
    """Repository access on GitHub's REST API."""

    service_name = "github"
    display_name = "GitHub"
    routes = (
        Route("GET", "get_repository", requires=("resource_id",)),
        Route("GET", "get_account", action="user"),
        Route("GET", "list_repositories"),
        Route("POST", "create_repository"),
    )

    def _default_base_url(self) -> str:
        return "https://api.github.com"

    def _extra_headers(self) -> dict[str, str]:
        return {"Accept": "application/vnd.github+json"}

    async def get_repository(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        owner = self.bundle.username
        if not owner:
            raise ValidationError("GitHub credentials need a username to address repositories")
        return await self._call("GET", f"repos/{owner}/{indicators.resource_id}")

    async def get_account(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        return await self._call("GET", "user")

    async def list_repositories(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        return await self._call("GET", "user/repos")

    async def create_repository(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        return await self._call("POST", "user/repos", body)
