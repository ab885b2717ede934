"""Identity Access — Cognito user pool operations and signing-key retrieval."""
