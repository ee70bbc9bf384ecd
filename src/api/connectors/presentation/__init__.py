"""Connectors presentation layer."""

from connectors.presentation.routes import integrations_router, oauth_router

__all__ = ["integrations_router", "oauth_router"]
