"""Employee presentation package."""

from directory.presentation.employees.routes import router

__all__ = ["router"]
