"""PostgreSQL implementation of IGroupRepository."""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from directory.domain.aggregates import Group
from directory.domain.records import GroupRecord, MergeSummary
from directory.domain.value_objects import GroupId, IntegrationId
from directory.infrastructure.bulk_upsert import execute_upsert, prepare_rows
from directory.infrastructure.models import GroupModel
from directory.infrastructure.observability import (
    DefaultGroupRepositoryProbe,
    GroupRepositoryProbe,
)
from directory.ports.repositories import IGroupRepository

UPSERT_COLUMNS = ("name", "description")


class GroupRepository(IGroupRepository):
    """PostgreSQL-backed repository for Group aggregates.

    Manually created groups are plain inserts. Synced groups go through
    ``upsert_from_integration``, whose conflict target is the
    (external_id, integration_id) unique constraint.
    """

    def __init__(
        self, session: AsyncSession, probe: GroupRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultGroupRepositoryProbe()

    async def add(self, group: Group) -> Group:
        """Insert a single group."""
        model = GroupModel(
            id=group.id.value,
            name=group.name,
            description=group.description,
            external_id=group.external_id,
            integration_id=group.integration_id.value if group.integration_id else None,
            created_by=group.created_by,
        )
        self._session.add(model)
        await self._session.flush()

        self._probe.group_saved(model.id)
        return _to_domain(model)

    async def search(
        self,
        search: str | None = None,
        integration_id: IntegrationId | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Group]:
        """List groups whose name or description matches ``search``."""
        stmt = select(GroupModel)
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    GroupModel.name.ilike(pattern),
                    GroupModel.description.ilike(pattern),
                )
            )
        if integration_id is not None:
            stmt = stmt.where(GroupModel.integration_id == integration_id.value)

        stmt = stmt.order_by(GroupModel.name).limit(limit).offset(offset)
        result = await self._session.execute(stmt)
        return [_to_domain(model) for model in result.scalars().all()]

    async def upsert_from_integration(
        self,
        integration_id: IntegrationId,
        records: Sequence[GroupRecord],
    ) -> MergeSummary:
        """Upsert a provider batch, overwriting name/description on conflict."""
        if not records:
            return MergeSummary()

        rows = prepare_rows(
            integration_id.value, (record.as_row() for record in records)
        )
        summary = await execute_upsert(self._session, GroupModel, rows, UPSERT_COLUMNS)

        self._probe.groups_upserted(
            integration_id.value, summary.inserted, summary.updated
        )
        return summary


def _to_domain(model: GroupModel) -> Group:
    return Group(
        id=GroupId(value=model.id),
        name=model.name,
        description=model.description,
        external_id=model.external_id,
        integration_id=(
            IntegrationId(value=model.integration_id) if model.integration_id else None
        ),
        created_by=model.created_by,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
