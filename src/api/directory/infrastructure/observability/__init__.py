"""Domain-Oriented Observability for directory infrastructure."""

from directory.infrastructure.observability.repository_probe import (
    DefaultEmployeeRepositoryProbe,
    DefaultGroupRepositoryProbe,
    DefaultIntegrationRepositoryProbe,
    EmployeeRepositoryProbe,
    GroupRepositoryProbe,
    IntegrationRepositoryProbe,
)

__all__ = [
    "DefaultEmployeeRepositoryProbe",
    "DefaultGroupRepositoryProbe",
    "DefaultIntegrationRepositoryProbe",
    "EmployeeRepositoryProbe",
    "GroupRepositoryProbe",
    "IntegrationRepositoryProbe",
]
