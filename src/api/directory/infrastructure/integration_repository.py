"""PostgreSQL implementation of IIntegrationRepository."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from directory.domain.aggregates import Integration
from directory.domain.value_objects import (
    EmployeeStatus,
    IntegrationId,
    IntegrationStatus,
)
from directory.infrastructure.models import (
    EmployeeModel,
    GroupModel,
    IntegrationModel,
)
from directory.infrastructure.observability import (
    DefaultIntegrationRepositoryProbe,
    IntegrationRepositoryProbe,
)
from directory.ports.exceptions import IntegrationCreationError
from directory.ports.repositories import IIntegrationRepository


class IntegrationRepository(IIntegrationRepository):
    """PostgreSQL-backed repository for Integration aggregates.

    Does not open transactions itself; the calling service wraps each
    unit of work in ``async with session.begin()``.
    """

    def __init__(
        self, session: AsyncSession, probe: IntegrationRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultIntegrationRepositoryProbe()

    async def add(self, integration: Integration) -> Integration:
        """Insert a new integration and return it as stored.

        Raises:
            IntegrationCreationError: If the insert fails
        """
        model = IntegrationModel(
            id=integration.id.value,
            name=integration.name,
            type=integration.type,
            status=integration.status,
            config=integration.config,
            auth_data=integration.auth_data,
            last_sync_at=integration.last_sync_at,
            created_by=integration.created_by,
        )
        try:
            self._session.add(model)
            # Flush so constraint violations surface here rather than at commit
            await self._session.flush()
        except SQLAlchemyError as e:
            self._probe.integration_creation_failed(integration.type.value, str(e))
            raise IntegrationCreationError(
                f"Failed to create integration '{integration.name}': {e}"
            ) from e

        self._probe.integration_created(model.id, integration.type.value)
        return _to_domain(model)

    async def mark_synced(self, integration_id: IntegrationId, at: datetime) -> None:
        """Stamp last_sync_at and reassert status ``active``."""
        stmt = (
            update(IntegrationModel)
            .where(IntegrationModel.id == integration_id.value)
            .values(last_sync_at=at, status=IntegrationStatus.ACTIVE)
        )
        await self._session.execute(stmt)
        self._probe.integration_sync_stamped(integration_id.value)

    async def get_by_id(self, integration_id: IntegrationId) -> Integration | None:
        """Retrieve an integration by its ID.

        Returns:
            The Integration aggregate, or None if not found
        """
        stmt = select(IntegrationModel).where(
            IntegrationModel.id == integration_id.value
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.integration_not_found(integration_id.value)
            return None

        return _to_domain(model)

    async def list_all(self) -> list[Integration]:
        """List all integrations, newest first."""
        stmt = select(IntegrationModel).order_by(IntegrationModel.created_at.desc())
        result = await self._session.execute(stmt)
        return [_to_domain(model) for model in result.scalars().all()]

    async def get_stats(self, integration_id: IntegrationId) -> dict[str, Any]:
        """Employee counts by status and group count for one integration."""
        status_stmt = (
            select(EmployeeModel.status, func.count())
            .where(EmployeeModel.integration_id == integration_id.value)
            .group_by(EmployeeModel.status)
        )
        status_rows = (await self._session.execute(status_stmt)).all()
        by_status = {status.value: 0 for status in EmployeeStatus}
        for status, count in status_rows:
            by_status[EmployeeStatus(status).value] = count

        groups_stmt = (
            select(func.count())
            .select_from(GroupModel)
            .where(GroupModel.integration_id == integration_id.value)
        )
        total_groups = (await self._session.execute(groups_stmt)).scalar_one()

        return {
            "integration_id": integration_id.value,
            "total_employees": sum(by_status.values()),
            "employees_by_status": by_status,
            "total_groups": total_groups,
        }


def _to_domain(model: IntegrationModel) -> Integration:
    return Integration(
        id=IntegrationId(value=model.id),
        name=model.name,
        type=model.type,
        status=model.status,
        config=dict(model.config or {}),
        auth_data=dict(model.auth_data or {}),
        last_sync_at=model.last_sync_at,
        created_by=model.created_by,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
