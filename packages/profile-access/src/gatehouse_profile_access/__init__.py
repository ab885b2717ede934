"""Profile Store — user profile documents in Redis."""
