"""Domain-Oriented Observability for the directory application layer."""

from directory.application.observability.employee_service_probe import (
    DefaultEmployeeServiceProbe,
    EmployeeServiceProbe,
)
from directory.application.observability.group_service_probe import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)
from directory.application.observability.integration_service_probe import (
    DefaultIntegrationServiceProbe,
    IntegrationServiceProbe,
)

__all__ = [
    "DefaultEmployeeServiceProbe",
    "DefaultGroupServiceProbe",
    "DefaultIntegrationServiceProbe",
    "EmployeeServiceProbe",
    "GroupServiceProbe",
    "IntegrationServiceProbe",
]
