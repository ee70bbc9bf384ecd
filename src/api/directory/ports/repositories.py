"""Repository protocols (ports) for the directory bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates, and for reconciling provider batches against stored rows.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, Sequence, runtime_checkable

from directory.domain.aggregates import Employee, Group, Integration
from directory.domain.records import EmployeeRecord, GroupRecord, MergeSummary
from directory.domain.value_objects import (
    EmployeeId,
    EmployeeStatus,
    IntegrationId,
)


@runtime_checkable
class IIntegrationRepository(Protocol):
    """Repository for Integration aggregate persistence."""

    async def add(self, integration: Integration) -> Integration:
        """Insert a new integration and return it as stored.

        Raises:
            IntegrationCreationError: If the row cannot be inserted
        """
        ...

    async def mark_synced(self, integration_id: IntegrationId, at: datetime) -> None:
        """Stamp last_sync_at and reassert status ``active``."""
        ...

    async def get_by_id(self, integration_id: IntegrationId) -> Integration | None:
        """Retrieve an integration by its ID."""
        ...

    async def list_all(self) -> list[Integration]:
        """List all integrations, newest first."""
        ...

    async def get_stats(self, integration_id: IntegrationId) -> dict[str, Any]:
        """Employee counts by status and group count for one integration."""
        ...


@runtime_checkable
class IEmployeeRepository(Protocol):
    """Repository for Employee aggregate persistence and reconciliation."""

    async def add(self, employee: Employee) -> Employee:
        """Insert a single (manually created) employee."""
        ...

    async def update(self, employee: Employee) -> Employee:
        """Persist edits to an existing employee."""
        ...

    async def get_by_id(self, employee_id: EmployeeId) -> Employee | None:
        """Retrieve an employee by ID."""
        ...

    async def search(
        self,
        search: str | None = None,
        status: EmployeeStatus | None = None,
        integration_id: IntegrationId | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Employee]:
        """List employees matching a free-text search and filters."""
        ...

    async def merge_from_integration(
        self,
        integration_id: IntegrationId,
        records: Sequence[EmployeeRecord],
    ) -> MergeSummary:
        """Idempotently merge a provider batch keyed by (integration_id, external_id).

        Existing rows are updated in place, new ones inserted, and rows
        absent from the batch are left untouched.
        """
        ...


@runtime_checkable
class IGroupRepository(Protocol):
    """Repository for Group aggregate persistence and reconciliation."""

    async def add(self, group: Group) -> Group:
        """Insert a single (manually created) group."""
        ...

    async def search(
        self,
        search: str | None = None,
        integration_id: IntegrationId | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Group]:
        """List groups matching a free-text search."""
        ...

    async def upsert_from_integration(
        self,
        integration_id: IntegrationId,
        records: Sequence[GroupRecord],
    ) -> MergeSummary:
        """Upsert a provider batch on the (external_id, integration_id) key.

        Conflicting keys are overwritten, never duplicated.
        """
        ...
