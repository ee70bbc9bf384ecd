"""Integration application service for the directory bounded context.

Owns the transactions around integration writes. The OAuth callback and
CSV import use it to store a freshly connected integration and to stamp
it after a sync pass.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from directory.application.observability import (
    DefaultIntegrationServiceProbe,
    IntegrationServiceProbe,
)
from directory.domain.aggregates import Integration
from directory.domain.value_objects import IntegrationId, IntegrationType
from directory.ports.exceptions import (
    IntegrationCreationError,
    IntegrationNotFoundError,
)
from directory.ports.repositories import IIntegrationRepository


class IntegrationService:
    """Application service for integration lifecycle and reporting."""

    def __init__(
        self,
        integration_repository: IIntegrationRepository,
        session: AsyncSession,
        probe: IntegrationServiceProbe | None = None,
    ):
        """Initialize IntegrationService with dependencies.

        Args:
            integration_repository: Repository for integration persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._integration_repository = integration_repository
        self._session = session
        self._probe = probe or DefaultIntegrationServiceProbe()

    async def create_connected(
        self,
        name: str,
        type: IntegrationType,
        config: dict[str, Any] | None = None,
        auth_data: dict[str, Any] | None = None,
        created_by: str | None = None,
    ) -> Integration:
        """Store a newly connected integration with status ``active``.

        The insert commits on its own; a later sync failure does not undo it.

        Raises:
            IntegrationCreationError: If the integration cannot be stored
        """
        try:
            integration = Integration.connect(
                name=name,
                type=type,
                config=config,
                auth_data=auth_data,
                created_by=created_by,
            )
            async with self._session.begin():
                stored = await self._integration_repository.add(integration)
        except IntegrationCreationError as e:
            self._probe.integration_connect_failed(name, type.value, str(e))
            raise
        except (ValueError, SQLAlchemyError) as e:
            self._probe.integration_connect_failed(name, type.value, str(e))
            raise IntegrationCreationError(str(e)) from e

        self._probe.integration_connected(stored.id.value, stored.name, type.value)
        return stored

    async def mark_synced(
        self, integration_id: IntegrationId, at: datetime | None = None
    ) -> datetime:
        """Stamp last_sync_at and reassert status ``active``.

        Returns:
            The timestamp written
        """
        stamped_at = at or datetime.now(UTC)
        async with self._session.begin():
            await self._integration_repository.mark_synced(integration_id, stamped_at)
        return stamped_at

    async def list_integrations(self) -> list[Integration]:
        """List all integrations, newest first."""
        async with self._session.begin():
            return await self._integration_repository.list_all()

    async def get_stats(self, integration_id: IntegrationId) -> dict[str, Any]:
        """Employee and group counts for one integration.

        Raises:
            IntegrationNotFoundError: If the integration does not exist
        """
        async with self._session.begin():
            integration = await self._integration_repository.get_by_id(integration_id)
            if integration is None:
                raise IntegrationNotFoundError(
                    f"Integration {integration_id} not found"
                )
            stats = await self._integration_repository.get_stats(integration_id)

        return {**stats, "name": integration.name, "type": integration.type.value}
