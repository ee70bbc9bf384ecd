"""Pydantic models for group API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from directory.domain.aggregates import Group


class CreateGroupRequest(BaseModel):
    """Request model for creating a group by hand."""

    name: str | None = Field(None, description="Group name", max_length=255)
    description: str | None = None
    external_id: str | None = Field(None, max_length=255)


class GroupResponse(BaseModel):
    """Response model for a group."""

    id: str = Field(..., description="Group ID (ULID format)")
    name: str
    description: str | None = None
    external_id: str | None = None
    integration_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, group: Group) -> GroupResponse:
        """Convert domain Group aggregate to API response."""
        return cls(
            id=group.id.value,
            name=group.name,
            description=group.description,
            external_id=group.external_id,
            integration_id=group.integration_id.value if group.integration_id else None,
            created_at=group.created_at,
            updated_at=group.updated_at,
        )
