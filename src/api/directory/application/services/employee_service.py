"""Employee application service for the directory bounded context.

Handles manual employee management: creation, edits and search. Synced
employees are written by the sync pipeline through the repository merge,
not through this service.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from directory.application.observability import (
    DefaultEmployeeServiceProbe,
    EmployeeServiceProbe,
)
from directory.domain.aggregates import Employee
from directory.domain.exceptions import InvalidEmployeeError
from directory.domain.value_objects import EmployeeId, EmployeeStatus, IntegrationId
from directory.ports.exceptions import EmployeeNotFoundError
from directory.ports.repositories import IEmployeeRepository


class EmployeeService:
    """Application service for manual employee management."""

    def __init__(
        self,
        employee_repository: IEmployeeRepository,
        session: AsyncSession,
        probe: EmployeeServiceProbe | None = None,
    ):
        """Initialize EmployeeService with dependencies.

        Args:
            employee_repository: Repository for employee persistence
            session: Database session for transaction management
            probe: Optional domain probe for observability
        """
        self._employee_repository = employee_repository
        self._session = session
        self._probe = probe or DefaultEmployeeServiceProbe()

    async def create_employee(
        self,
        first_name: str | None,
        last_name: str | None,
        email: str | None,
        employee_id: str | None = None,
        job_title: str | None = None,
        department: str | None = None,
        manager_email: str | None = None,
        phone: str | None = None,
        status: EmployeeStatus | str | None = None,
        created_by: str | None = None,
    ) -> Employee:
        """Create an employee by hand.

        Validation happens on the aggregate before the repository is
        touched, so an invalid request never opens a transaction.

        Returns:
            The stored Employee

        Raises:
            InvalidEmployeeError: If a required field is missing
        """
        try:
            employee = Employee.create_manual(
                first_name=first_name,
                last_name=last_name,
                email=email,
                employee_id=employee_id,
                job_title=job_title,
                department=department,
                manager_email=manager_email,
                phone=phone,
                status=status,
                created_by=created_by,
            )
        except InvalidEmployeeError as e:
            self._probe.employee_rejected(str(e))
            raise

        async with self._session.begin():
            stored = await self._employee_repository.add(employee)

        self._probe.employee_created(stored.id.value, created_by)
        return stored

    async def get_employee(self, employee_id: EmployeeId) -> Employee | None:
        """Fetch one employee, or None when it does not exist."""
        async with self._session.begin():
            return await self._employee_repository.get_by_id(employee_id)

    async def update_employee(
        self, employee_id: EmployeeId, **changes: object
    ) -> Employee:
        """Apply a partial edit to an employee.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            InvalidEmployeeError: If the edit is invalid
        """
        async with self._session.begin():
            existing = await self._employee_repository.get_by_id(employee_id)
            if existing is None:
                raise EmployeeNotFoundError(f"Employee {employee_id} not found")

            try:
                edited = existing.with_changes(**changes)
            except InvalidEmployeeError as e:
                self._probe.employee_rejected(str(e))
                raise

            stored = await self._employee_repository.update(edited)

        self._probe.employee_updated(stored.id.value, sorted(changes))
        return stored

    async def list_employees(
        self,
        search: str | None = None,
        status: EmployeeStatus | None = None,
        integration_id: IntegrationId | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Employee]:
        """Search employees by free text and filters."""
        async with self._session.begin():
            return await self._employee_repository.search(
                search=search,
                status=status,
                integration_id=integration_id,
                limit=limit,
                offset=offset,
            )
