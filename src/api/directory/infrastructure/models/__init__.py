"""SQLAlchemy ORM models for the directory bounded context.

These models map to database tables and are used by repository implementations.
"""

from directory.infrastructure.models.employee import EmployeeModel
from directory.infrastructure.models.group import GroupModel
from directory.infrastructure.models.integration import IntegrationModel

__all__ = [
    "EmployeeModel",
    "GroupModel",
    "IntegrationModel",
]
