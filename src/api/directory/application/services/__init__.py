"""Application services for the directory bounded context."""

from directory.application.services.employee_service import EmployeeService
from directory.application.services.group_service import GroupService
from directory.application.services.integration_service import IntegrationService

__all__ = [
    "EmployeeService",
    "GroupService",
    "IntegrationService",
]
