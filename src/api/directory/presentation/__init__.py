"""Directory presentation layer, organized by aggregate.

Each aggregate package contains its own routes and models. Routers are
mounted at the application root.
"""

from __future__ import annotations

from fastapi import APIRouter

from directory.presentation import employees, groups, integrations

router = APIRouter()

router.include_router(employees.router)
router.include_router(groups.router)
router.include_router(integrations.router)

__all__ = ["router"]
