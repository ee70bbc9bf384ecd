"""PostgreSQL implementation of IEmployeeRepository.

Besides single-row writes for manually managed employees, this repository
owns the bulk merge used by sync passes. The merge is keyed on
(integration_id, external_id): rows already present are updated in place,
new ones inserted, and rows missing from the batch are left untouched.
"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from directory.domain.aggregates import Employee
from directory.domain.records import EmployeeRecord, MergeSummary
from directory.domain.value_objects import (
    EmployeeId,
    EmployeeStatus,
    IntegrationId,
)
from directory.infrastructure.bulk_upsert import execute_upsert, prepare_rows
from directory.infrastructure.models import EmployeeModel
from directory.infrastructure.observability import (
    DefaultEmployeeRepositoryProbe,
    EmployeeRepositoryProbe,
)
from directory.ports.exceptions import EmployeeNotFoundError
from directory.ports.repositories import IEmployeeRepository

MERGE_COLUMNS = (
    "first_name",
    "last_name",
    "email",
    "employee_id",
    "job_title",
    "department",
    "manager_email",
    "phone",
    "status",
)


class EmployeeRepository(IEmployeeRepository):
    """PostgreSQL-backed repository for Employee aggregates."""

    def __init__(
        self, session: AsyncSession, probe: EmployeeRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultEmployeeRepositoryProbe()

    async def add(self, employee: Employee) -> Employee:
        """Insert a single employee.

        Args:
            employee: The Employee aggregate to persist

        Returns:
            The stored employee (with timestamps)
        """
        model = EmployeeModel(
            id=employee.id.value,
            integration_id=(
                employee.integration_id.value if employee.integration_id else None
            ),
            created_by=employee.created_by,
        )
        _apply(model, employee)
        self._session.add(model)
        await self._session.flush()

        self._probe.employee_saved(model.id)
        return _to_domain(model)

    async def update(self, employee: Employee) -> Employee:
        """Persist edits to an existing employee.

        Raises:
            EmployeeNotFoundError: If the employee no longer exists
        """
        stmt = select(EmployeeModel).where(EmployeeModel.id == employee.id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            self._probe.employee_not_found(employee.id.value)
            raise EmployeeNotFoundError(f"Employee {employee.id} not found")

        _apply(model, employee)
        await self._session.flush()

        self._probe.employee_saved(model.id)
        return _to_domain(model)

    async def get_by_id(self, employee_id: EmployeeId) -> Employee | None:
        """Retrieve an employee by ID.

        Returns:
            The Employee aggregate, or None if not found
        """
        stmt = select(EmployeeModel).where(EmployeeModel.id == employee_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.employee_not_found(employee_id.value)
            return None

        return _to_domain(model)

    async def search(
        self,
        search: str | None = None,
        status: EmployeeStatus | None = None,
        integration_id: IntegrationId | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Employee]:
        """List employees matching a free-text search and filters.

        The search term matches case-insensitively against name, email,
        job title and department.
        """
        stmt = select(EmployeeModel)
        if search:
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    EmployeeModel.first_name.ilike(pattern),
                    EmployeeModel.last_name.ilike(pattern),
                    EmployeeModel.email.ilike(pattern),
                    EmployeeModel.job_title.ilike(pattern),
                    EmployeeModel.department.ilike(pattern),
                )
            )
        if status is not None:
            stmt = stmt.where(EmployeeModel.status == status)
        if integration_id is not None:
            stmt = stmt.where(EmployeeModel.integration_id == integration_id.value)

        stmt = (
            stmt.order_by(EmployeeModel.last_name, EmployeeModel.first_name)
            .limit(limit)
            .offset(offset)
        )
        result = await self._session.execute(stmt)
        return [_to_domain(model) for model in result.scalars().all()]

    async def merge_from_integration(
        self,
        integration_id: IntegrationId,
        records: Sequence[EmployeeRecord],
    ) -> MergeSummary:
        """Idempotently merge a provider batch.

        Args:
            integration_id: Integration the batch was fetched from
            records: Normalized employee records

        Returns:
            MergeSummary with inserted/updated counts
        """
        if not records:
            return MergeSummary()

        rows = prepare_rows(
            integration_id.value, (record.as_row() for record in records)
        )
        summary = await execute_upsert(
            self._session, EmployeeModel, rows, MERGE_COLUMNS
        )

        self._probe.employees_merged(
            integration_id.value, summary.inserted, summary.updated
        )
        return summary


def _apply(model: EmployeeModel, employee: Employee) -> None:
    model.external_id = employee.external_id
    model.first_name = employee.first_name
    model.last_name = employee.last_name
    model.email = employee.email
    model.employee_id = employee.employee_id
    model.job_title = employee.job_title
    model.department = employee.department
    model.manager_email = employee.manager_email
    model.phone = employee.phone
    model.status = employee.status


def _to_domain(model: EmployeeModel) -> Employee:
    return Employee(
        id=EmployeeId(value=model.id),
        first_name=model.first_name,
        last_name=model.last_name,
        email=model.email,
        external_id=model.external_id,
        employee_id=model.employee_id,
        job_title=model.job_title,
        department=model.department,
        manager_email=model.manager_email,
        phone=model.phone,
        status=EmployeeStatus(model.status),
        integration_id=(
            IntegrationId(value=model.integration_id) if model.integration_id else None
        ),
        created_by=model.created_by,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
