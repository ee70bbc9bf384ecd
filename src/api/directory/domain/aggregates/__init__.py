"""Domain aggregates for the directory context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from directory.domain.aggregates.employee import Employee
from directory.domain.aggregates.group import Group
from directory.domain.aggregates.integration import Integration

__all__ = [
    "Employee",
    "Group",
    "Integration",
]
