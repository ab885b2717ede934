"""Function registry: maps deployable function names to their handlers.

The runner uses this to invoke a function locally by name. Each entry
records the dispatcher entry point it serves and the Lambda handler path the
deployment points at.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from gatehouse_functions.handlers import (
    signup_handler,
    third_party_handler,
    user_bootstrap_handler,
    user_management_handler,
)


@dataclass
class FunctionConfig:
    """One deployable Lambda function."""

    entry_point: str
    handler: Callable[[dict[str, Any], Any], dict[str, Any]]

    @property
    def handler_path(self) -> str:
        return f"{self.handler.__module__}.{self.handler.__name__}"


FUNCTIONS: dict[str, FunctionConfig] = {
    "auth-signup": FunctionConfig(entry_point="signup", handler=signup_handler),
    "user-management": FunctionConfig(entry_point="profile", handler=user_management_handler),
    "user-bootstrap": FunctionConfig(
        entry_point="profile-bootstrap",
        handler=user_bootstrap_handler,
    ),
    "third-party": FunctionConfig(entry_point="third-party", handler=third_party_handler),
}
