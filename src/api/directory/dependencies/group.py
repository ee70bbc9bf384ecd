from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from directory.application.observability import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)
from directory.application.services import GroupService
from directory.infrastructure.group_repository import GroupRepository
from infrastructure.database.dependencies import get_session


def get_group_service_probe() -> GroupServiceProbe:
    """Get GroupServiceProbe instance."""
    return DefaultGroupServiceProbe()


def get_group_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> GroupRepository:
    """Get GroupRepository instance."""
    return GroupRepository(session=session)


def get_group_service(
    group_repo: Annotated[GroupRepository, Depends(get_group_repository)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[GroupServiceProbe, Depends(get_group_service_probe)],
) -> GroupService:
    """Get GroupService instance."""
    return GroupService(group_repository=group_repo, session=session, probe=probe)
