"""HTTP routes for listing integrations and their statistics."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from directory.application.services import IntegrationService
from directory.dependencies.integration import get_integration_service
from directory.domain.value_objects import IntegrationId
from directory.ports.exceptions import IntegrationNotFoundError
from directory.presentation.integrations.models import (
    IntegrationResponse,
    IntegrationStatsResponse,
)

router = APIRouter(
    prefix="/integrations",
    tags=["integrations"],
)


@router.get("", summary="List integrations")
async def list_integrations(
    service: Annotated[IntegrationService, Depends(get_integration_service)],
) -> list[IntegrationResponse]:
    """List all integrations, newest first."""
    integrations = await service.list_integrations()
    return [IntegrationResponse.from_domain(i) for i in integrations]


@router.get("/{integration_id}/stats")
async def get_integration_stats(
    integration_id: str,
    service: Annotated[IntegrationService, Depends(get_integration_service)],
) -> IntegrationStatsResponse:
    """Employee counts by status and group count for one integration.

    Raises:
        HTTPException: 400 if the ID is malformed
        HTTPException: 404 if the integration does not exist
    """
    try:
        parsed_id = IntegrationId.from_string(integration_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid integration ID format",
        )

    try:
        stats = await service.get_stats(parsed_id)
    except IntegrationNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Integration not found",
        )
    return IntegrationStatsResponse(**stats)
