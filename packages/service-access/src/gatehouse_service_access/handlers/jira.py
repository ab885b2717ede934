"""Jira handler — the issue-tracking service.

Jira Cloud sites each have their own host, so the bundle must carry baseUrl.

Auth: email + API token (Basic) or a personal access token (Bearer).
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlencode

from gatehouse_shared.models import ServiceResponse

from gatehouse_service_access.handlers.base import PathIndicators, Route, ServiceHandler

INVALID_ENDPOINT = "Invalid Jira endpoint"


class JiraHandler(ServiceHandler):
    """Issue search, project lookup and issue creation on Jira's REST API v3."""

    service_name = "jira"
    display_name = "Jira"
    routes = (
        Route("GET", "list_issues", action="issues"),
        Route("GET", "get_project", action="project", requires=("project_key",)),
        Route("GET", error=INVALID_ENDPOINT),
        Route("POST", "create_issue", action="issue"),
        Route("POST", error=INVALID_ENDPOINT),
    )

    async def list_issues(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        path = "rest/api/3/search"
        if indicators.query:
            path = f"{path}?{urlencode({'jql': indicators.query})}"
        return await self._call("GET", path)

    async def get_project(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        return await self._call("GET", f"rest/api/3/project/{quote(indicators.project_key or '')}")

    async def create_issue(self, indicators: PathIndicators, body: dict[str, Any]) -> ServiceResponse:
        return await self._call("POST", "rest/api/3/issue", body)
