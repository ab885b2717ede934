"""Shared test fixtures for Service Access tests.

Provides:
  - Mock HTTP transport for httpx (intercepts all requests)
  - A ThirdPartyGateway wired to that transport
  - Credential bundles for each service
"""

from __future__ import annotations

import httpx
import pytest
from gatehouse_service_access.gateway import ThirdPartyGateway
from gatehouse_shared.credential_models import CredentialBundle


class MockTransport(httpx.AsyncBaseTransport):
    """Mock HTTP transport that returns preconfigured responses.

    Each request pops the next response from the list; once the list is
    exhausted every request gets a 200 with an empty JSON object. Setting
    ``error`` makes every request raise it instead.
    """

    def __init__(self, responses: list[httpx.Response] | None = None) -> None:
        self.responses = list(responses or [])
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.responses:
            response = self.responses.pop(0)
            response.stream = httpx.ByteStream(response.content)
            return response
        return httpx.Response(200, json={})


@pytest.fixture
def transport() -> MockTransport:
    return MockTransport()


@pytest.fixture
def gateway(transport) -> ThirdPartyGateway:
    return ThirdPartyGateway(transport=transport)


@pytest.fixture
def github_bundle() -> CredentialBundle:
    return CredentialBundle.from_secret(
        {"service": "github", "apiKey": "ghp_test", "username": "octocat"}
    )


@pytest.fixture
def slack_bundle() -> CredentialBundle:
    return CredentialBundle.from_secret({"service": "slack", "apiKey": "xoxb-test"})


@pytest.fixture
def jira_bundle() -> CredentialBundle:
    return CredentialBundle.from_secret(
        {
            "service": "jira",
            "username": "me@example.com",
            "password": "jira-token",
            "baseUrl": "https://acme.atlassian.net/",
        }
    )


@pytest.fixture
def generic_bundle() -> CredentialBundle:
    return CredentialBundle.from_secret(
        {"apiKey": "generic-key", "baseUrl": "https://api.example.com/v1"}
    )
