"""Shared contract types for the Gatehouse request handlers.

Provides the error taxonomy and the Pydantic models that flow between the
request manager and the resource-access components (identity, profiles,
vault, third-party services).
"""
