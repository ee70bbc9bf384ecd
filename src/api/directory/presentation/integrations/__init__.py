"""Integration presentation package."""

from directory.presentation.integrations.routes import router

__all__ = ["router"]
