"""Group application service for the directory bounded context."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from directory.application.observability import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)
from directory.domain.aggregates import Group
from directory.domain.exceptions import InvalidGroupError
from directory.domain.value_objects import IntegrationId
from directory.ports.repositories import IGroupRepository


class GroupService:
    """Application service for manual group management and listing."""

    def __init__(
        self,
        group_repository: IGroupRepository,
        session: AsyncSession,
        probe: GroupServiceProbe | None = None,
    ):
        self._group_repository = group_repository
        self._session = session
        self._probe = probe or DefaultGroupServiceProbe()

    async def create_group(
        self,
        name: str | None,
        description: str | None = None,
        external_id: str | None = None,
        created_by: str | None = None,
    ) -> Group:
        """Create a group by hand.

        Raises:
            InvalidGroupError: If the name is missing
        """
        try:
            group = Group.create_manual(
                name=name,
                description=description,
                external_id=external_id,
                created_by=created_by,
            )
        except InvalidGroupError as e:
            self._probe.group_creation_failed(name, str(e))
            raise

        async with self._session.begin():
            stored = await self._group_repository.add(group)

        self._probe.group_created(stored.id.value, stored.name)
        return stored

    async def list_groups(
        self,
        search: str | None = None,
        integration_id: IntegrationId | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Group]:
        """Search groups by name or description."""
        async with self._session.begin():
            return await self._group_repository.search(
                search=search,
                integration_id=integration_id,
                limit=limit,
                offset=offset,
            )
