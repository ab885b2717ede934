"""Redis key patterns for the Profile Store.

All keys use the `usr:` prefix. Profiles are JSON strings; the email index is
a plain string lookup. Key functions are pure — they compute key names,
never touch Redis.
"""


def profile_key(user_id: str) -> str:
    """Profile document for a user id."""
    return f"usr:profile:{user_id}"


def profile_idx_email(email: str) -> str:
    """String lookup: normalized email → user id."""
    return f"usr:profile:idx:email:{email.strip().lower()}"
