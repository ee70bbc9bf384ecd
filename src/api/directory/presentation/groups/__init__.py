"""Group presentation package."""

from directory.presentation.groups.routes import router

__all__ = ["router"]
