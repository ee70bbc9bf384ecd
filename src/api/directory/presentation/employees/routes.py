"""HTTP routes for employee management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from directory.application.services import EmployeeService
from directory.dependencies.employee import get_employee_service
from directory.domain.exceptions import InvalidEmployeeError
from directory.domain.value_objects import EmployeeId, EmployeeStatus, IntegrationId
from directory.ports.exceptions import EmployeeNotFoundError
from directory.presentation.employees.models import (
    CreateEmployeeRequest,
    EmployeeResponse,
    UpdateEmployeeRequest,
)

router = APIRouter(
    prefix="/employees",
    tags=["employees"],
)


def _parse_employee_id(employee_id: str) -> EmployeeId:
    try:
        return EmployeeId.from_string(employee_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid employee ID format",
        )


@router.get(
    "",
    summary="List employees",
    description="Search employees by name, email, title or department",
)
async def list_employees(
    service: Annotated[EmployeeService, Depends(get_employee_service)],
    search: str | None = None,
    employee_status: Annotated[EmployeeStatus | None, Query(alias="status")] = None,
    integration_id: str | None = None,
    limit: Annotated[int, Query(ge=1, le=1000)] = 100,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> list[EmployeeResponse]:
    """List employees with optional search and filters."""
    integration = None
    if integration_id:
        try:
            integration = IntegrationId.from_string(integration_id)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid integration ID format",
            )

    employees = await service.list_employees(
        search=search,
        status=employee_status,
        integration_id=integration,
        limit=limit,
        offset=offset,
    )
    return [EmployeeResponse.from_domain(employee) for employee in employees]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_employee(
    request: CreateEmployeeRequest,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Create an employee by hand.

    Raises:
        HTTPException: 422 if first name, last name or email is missing
    """
    try:
        employee = await service.create_employee(**request.model_dump())
    except InvalidEmployeeError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=str(e),
        )
    return EmployeeResponse.from_domain(employee)


@router.get("/{employee_id}")
async def get_employee(
    employee_id: str,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Get one employee.

    Raises:
        HTTPException: 400 if the ID is malformed
        HTTPException: 404 if the employee does not exist
    """
    employee = await service.get_employee(_parse_employee_id(employee_id))
    if employee is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )
    return EmployeeResponse.from_domain(employee)


@router.patch("/{employee_id}")
async def update_employee(
    employee_id: str,
    request: UpdateEmployeeRequest,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Edit an employee. Omitted fields keep their value."""
    parsed_id = _parse_employee_id(employee_id)
    try:
        employee = await service.update_employee(
            parsed_id, **request.model_dump(exclude_unset=True)
        )
    except EmployeeNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Employee not found",
        )
    except InvalidEmployeeError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=str(e),
        )
    return EmployeeResponse.from_domain(employee)
