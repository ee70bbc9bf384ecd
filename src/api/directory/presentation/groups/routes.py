"""HTTP routes for group management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from directory.application.services import GroupService
from directory.dependencies.group import get_group_service
from directory.domain.exceptions import InvalidGroupError
from directory.domain.value_objects import IntegrationId
from directory.presentation.groups.models import CreateGroupRequest, GroupResponse

router = APIRouter(
    prefix="/groups",
    tags=["groups"],
)


@router.get("", summary="List groups")
async def list_groups(
    service: Annotated[GroupService, Depends(get_group_service)],
    search: str | None = None,
    integration_id: str | None = None,
    limit: Annotated[int, Query(ge=1, le=1000)] = 100,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[GroupResponse]:
    """List groups, optionally filtered by a name/description search."""
    integration = None
    if integration_id:
        try:
            integration = IntegrationId.from_string(integration_id)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid integration ID format",
            )

    groups = await service.list_groups(
        search=search, integration_id=integration, limit=limit, offset=offset
    )
    return [GroupResponse.from_domain(group) for group in groups]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_group(
    request: CreateGroupRequest,
    service: Annotated[GroupService, Depends(get_group_service)],
) -> GroupResponse:
    """Create a group by hand.

    Raises:
        HTTPException: 422 if the name is missing
    """
    try:
        group = await service.create_group(
            name=request.name,
            description=request.description,
            external_id=request.external_id,
        )
    except InvalidGroupError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=str(e),
        )
    return GroupResponse.from_domain(group)
