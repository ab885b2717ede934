"""Service Access — outbound calls to third-party REST APIs on a user's behalf."""
