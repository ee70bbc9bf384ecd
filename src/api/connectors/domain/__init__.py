"""Connectors domain: PKCE, OAuth state, normalization and sync outcomes."""
