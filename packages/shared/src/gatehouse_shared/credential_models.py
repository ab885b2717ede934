"""Credential bundle models — what the vault hands back for a locator.

The vault stores free-form JSON (``service``, ``apiKey`` or
``username``/``password``, ``baseUrl``). from_secret() turns that into a
tagged Credential so service handlers can declare which kinds they accept
instead of sniffing fields.
"""

from __future__ import annotations

import base64
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field

from gatehouse_shared.errors import ValidationError

GENERIC_SERVICE = "generic"


class ApiKeyCredential(BaseModel):
    """Token-style credential, sent as a Bearer authorization header."""

    kind: Literal["api_key"] = "api_key"
    api_key: str = Field(repr=False)

    def authorization_header(self) -> str:
        return f"Bearer {self.api_key}"


class BasicAuthCredential(BaseModel):
    """Username/password pair, sent as HTTP Basic auth."""

    kind: Literal["basic"] = "basic"
    username: str
    password: str = Field(repr=False)

    def authorization_header(self) -> str:
        raw = f"{self.username}:{self.password}".encode()
        return f"Basic {base64.b64encode(raw).decode('ascii')}"


Credential = Annotated[ApiKeyCredential | BasicAuthCredential, Field(discriminator="kind")]


class CredentialBundle(BaseModel):
    """A named third-party service's credential plus where to reach it."""

    service: str = GENERIC_SERVICE
    credential: Credential
    base_url: str | None = None
    # Account name on the service; GitHub uses it as the repository owner.
    username: str | None = None

    @classmethod
    def from_secret(cls, secret: dict[str, Any]) -> CredentialBundle:
        """Build a bundle from the vault's JSON. An API key wins over username/password."""
        credential: ApiKeyCredential | BasicAuthCredential
        if secret.get("apiKey"):
            credential = ApiKeyCredential(api_key=secret["apiKey"])
        elif secret.get("username") and secret.get("password"):
            credential = BasicAuthCredential(
                username=secret["username"], password=secret["password"]
            )
        else:
            raise ValidationError("Credential bundle has no API key or username/password")

        return cls(
            service=(secret.get("service") or GENERIC_SERVICE).lower(),
            credential=credential,
            base_url=secret.get("baseUrl"),
            username=secret.get("username"),
        )
