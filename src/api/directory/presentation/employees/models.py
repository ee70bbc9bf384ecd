"""Pydantic models for employee API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from directory.domain.aggregates import Employee
from directory.domain.value_objects import EmployeeStatus


class CreateEmployeeRequest(BaseModel):
    """Request model for creating an employee by hand.

    Required fields are validated by the domain so that blank strings are
    rejected the same way as missing ones.
    """

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    employee_id: str | None = None
    job_title: str | None = None
    department: str | None = None
    manager_email: str | None = None
    phone: str | None = None
    status: EmployeeStatus | None = None


class UpdateEmployeeRequest(BaseModel):
    """Partial update. Only fields present in the body are changed."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    employee_id: str | None = None
    job_title: str | None = None
    department: str | None = None
    manager_email: str | None = None
    phone: str | None = None
    status: EmployeeStatus | None = None


class EmployeeResponse(BaseModel):
    """Response model for an employee."""

    id: str = Field(..., description="Employee ID (ULID format)")
    first_name: str
    last_name: str
    full_name: str
    email: str
    external_id: str | None = None
    employee_id: str | None = None
    job_title: str | None = None
    department: str | None = None
    manager_email: str | None = None
    phone: str | None = None
    status: EmployeeStatus
    integration_id: str | None = Field(
        None, description="Source integration, null for manual employees"
    )
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, employee: Employee) -> EmployeeResponse:
        """Convert domain Employee aggregate to API response."""
        return cls(
            id=employee.id.value,
            first_name=employee.first_name,
            last_name=employee.last_name,
            full_name=employee.full_name,
            email=employee.email,
            external_id=employee.external_id,
            employee_id=employee.employee_id,
            job_title=employee.job_title,
            department=employee.department,
            manager_email=employee.manager_email,
            phone=employee.phone,
            status=employee.status,
            integration_id=(
                employee.integration_id.value if employee.integration_id else None
            ),
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )
