"""Request Manager: turns API Gateway events into calls on the access layers.

Four entry points share one dispatcher:
- signup: validate → Identity Access → Profile Access → sign in
- profile: authenticate → gate → Profile Access
- profile-bootstrap: profile, plus unauthenticated first-time record creation
- third-party: authenticate → gate → Profile Access → Vault Access → Service Access

The response translator owns every status code.
"""
