"""Pydantic models for connection API requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from directory.domain.value_objects import IntegrationType


class ConnectIntegrationRequest(BaseModel):
    """Request model for starting an OAuth connection."""

    integration_type: IntegrationType = Field(
        ..., description="Provider to connect (google_workspace or microsoft_entra)"
    )
    integration_name: str = Field(
        ..., description="Display name for the integration", min_length=1, max_length=255
    )


class AuthorizationUrlResponse(BaseModel):
    """Absolute URL the browser should be sent to."""

    authorization_url: str


class CsvImportResponse(BaseModel):
    """Response model for a CSV upload."""

    integration_id: str = Field(..., description="Created integration (ULID format)")
    integration_name: str
    rows: int = Field(..., description="Data rows in the upload")
    skipped_rows: int = Field(..., description="Rows without an email")
    inserted: int
    updated: int
    persist_error: str | None = None
