from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from directory.application.observability import (
    DefaultEmployeeServiceProbe,
    EmployeeServiceProbe,
)
from directory.application.services import EmployeeService
from directory.infrastructure.employee_repository import EmployeeRepository
from infrastructure.database.dependencies import get_session


def get_employee_service_probe() -> EmployeeServiceProbe:
    """Get EmployeeServiceProbe instance."""
    return DefaultEmployeeServiceProbe()


def get_employee_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> EmployeeRepository:
    """Get EmployeeRepository instance.

    Args:
        session: Async database session

    Returns:
        EmployeeRepository bound to the request session
    """
    return EmployeeRepository(session=session)


def get_employee_service(
    employee_repo: Annotated[EmployeeRepository, Depends(get_employee_repository)],
    session: Annotated[AsyncSession, Depends(get_session)],
    probe: Annotated[EmployeeServiceProbe, Depends(get_employee_service_probe)],
) -> EmployeeService:
    """Get EmployeeService instance.

    Args:
        employee_repo: Employee repository (shares session via FastAPI dependency caching)
        session: Database session for transaction management
        probe: Employee service probe for observability

    Returns:
        EmployeeService instance
    """
    return EmployeeService(
        employee_repository=employee_repo,
        session=session,
        probe=probe,
    )
