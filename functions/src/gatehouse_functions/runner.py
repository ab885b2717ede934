"""Local function runner.

Usage:
  python -m gatehouse_functions.runner <function-name> [event.json]
  echo '{"httpMethod": "POST", ...}' | python -m gatehouse_functions.runner auth-signup

Reads an API Gateway proxy event from the file (or stdin when omitted),
invokes the named function the way Lambda would and prints the response.
Without UPSTASH_REDIS_REST_URL the Profile Store is an in-memory fakeredis,
so state lasts only for the one invocation.
"""

import json
import logging
import sys

from gatehouse_functions.registry import FUNCTIONS

logger = logging.getLogger(__name__)


def load_event(path: str | None) -> dict:
    if path is None:
        return json.load(sys.stdin)
    with open(path) as f:
        return json.load(f)


def invoke(function_name: str, event: dict) -> dict:
    """Invoke a registered function with an event."""
    if function_name not in FUNCTIONS:
        available = ", ".join(sorted(FUNCTIONS.keys()))
        logger.error(f"Unknown function '{function_name}'. Available: {available}")
        sys.exit(1)
    return FUNCTIONS[function_name].handler(event, None)


def main() -> None:
    """CLI entrypoint — parse the function name and event source, then invoke."""
    if len(sys.argv) < 2:
        print("Usage: python -m gatehouse_functions.runner <function> [event.json]")
        print(f"Functions: {', '.join(sorted(FUNCTIONS.keys()))}")
        sys.exit(1)

    function_name = sys.argv[1]
    event = load_event(sys.argv[2] if len(sys.argv) >= 3 else None)
    response = invoke(function_name, event)
    print(json.dumps(response, indent=2))


if __name__ == "__main__":
    main()
