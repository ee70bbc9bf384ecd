"""Pydantic models for integration API responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from directory.domain.aggregates import Integration
from directory.domain.value_objects import (
    EmployeeStatus,
    IntegrationStatus,
    IntegrationType,
)


class IntegrationResponse(BaseModel):
    """Response model for an integration.

    Credentials in ``auth_data`` are never exposed.
    """

    id: str = Field(..., description="Integration ID (ULID format)")
    name: str
    type: IntegrationType
    status: IntegrationStatus
    config: dict = Field(default_factory=dict)
    last_sync_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, integration: Integration) -> IntegrationResponse:
        """Convert domain Integration aggregate to API response."""
        return cls(
            id=integration.id.value,
            name=integration.name,
            type=integration.type,
            status=integration.status,
            config=integration.config,
            last_sync_at=integration.last_sync_at,
            created_at=integration.created_at,
            updated_at=integration.updated_at,
        )


class IntegrationStatsResponse(BaseModel):
    """Employee and group counts for one integration."""

    integration_id: str
    name: str
    type: IntegrationType
    total_employees: int
    employees_by_status: dict[EmployeeStatus, int]
    total_groups: int
