"""Ports for the directory bounded context."""

from directory.ports.repositories import (
    IEmployeeRepository,
    IGroupRepository,
    IIntegrationRepository,
)

__all__ = [
    "IEmployeeRepository",
    "IGroupRepository",
    "IIntegrationRepository",
]
