"""Vault Access — credential bundles from Secrets Manager or the environment."""
