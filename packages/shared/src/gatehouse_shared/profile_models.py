"""Profile Store boundary models.

UserProfile is this system's own record of a user, separate from the Cognito
account. It is stored as a JSON document and keeps the legacy wire field
names (UserId, Email, ...) so existing clients keep working; Python code uses
the snake_case attribute names.
"""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


class UserProfile(BaseModel):
    """A user record keyed by the identity provider's user id."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="UserId", min_length=1)
    email: str = Field(alias="Email")
    service_id: str | None = Field(default=None, alias="ThirdPartyServiceId")
    # Locator of the credential bundle in the vault, never the secret itself.
    credential_locator: str | None = Field(default=None, alias="ThirdPartyServiceCredentials")
    created_at: datetime | None = Field(default=None, alias="CreatedAt")
    updated_at: datetime | None = Field(default=None, alias="UpdatedAt")

    @field_validator("email")
    @classmethod
    def _email_shape(cls, value: str) -> str:
        if not is_valid_email(value):
            raise ValueError("Invalid email")
        return value

    def to_response(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
