from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from directory.application.observability import (
    DefaultIntegrationServiceProbe,
    IntegrationServiceProbe,
)
from directory.application.services import IntegrationService
from directory.infrastructure.integration_repository import IntegrationRepository
from infrastructure.database.dependencies import get_session


def get_integration_service_probe() -> IntegrationServiceProbe:
    """Get IntegrationServiceProbe instance."""
    return DefaultIntegrationServiceProbe()


def get_integration_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> IntegrationRepository:
    """Get IntegrationRepository instance."""
    return IntegrationRepository(session=session)


def get_integration_service(
    integration_repo: Annotated[
        IntegrationRepository, Depends(get_integration_repository)
    ],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[IntegrationServiceProbe, Depends(get_integration_service_probe)],
) -> IntegrationService:
    """Get IntegrationService instance.

    Args:
        integration_repo: Integration repository (shares session via FastAPI dependency caching)
        session: Database session for transaction management
        probe: Integration service probe for observability

    Returns:
        IntegrationService instance
    """
    return IntegrationService(
        integration_repository=integration_repo,
        session=session,
        probe=probe,
    )
