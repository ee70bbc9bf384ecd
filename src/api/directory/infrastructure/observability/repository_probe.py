"""Domain probe for directory repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to integration, employee and group
persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class IntegrationRepositoryProbe(Protocol):
    """Domain probe for integration repository operations."""

    def integration_created(self, integration_id: str, type: str) -> None:
        """Record that an integration row was inserted."""
        ...

    def integration_creation_failed(self, type: str, error: str) -> None:
        """Record that inserting an integration row failed."""
        ...

    def integration_sync_stamped(self, integration_id: str) -> None:
        """Record that last_sync_at was stamped."""
        ...

    def integration_not_found(self, integration_id: str) -> None:
        """Record that an integration was not found."""
        ...

    def with_context(self, context: ObservationContext) -> IntegrationRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class EmployeeRepositoryProbe(Protocol):
    """Domain probe for employee repository operations."""

    def employee_saved(self, employee_id: str) -> None:
        """Record that a single employee was inserted or updated."""
        ...

    def employee_not_found(self, employee_id: str) -> None:
        """Record that an employee was not found."""
        ...

    def employees_merged(
        self, integration_id: str, inserted: int, updated: int
    ) -> None:
        """Record the result of a bulk merge from an integration."""
        ...

    def with_context(self, context: ObservationContext) -> EmployeeRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class GroupRepositoryProbe(Protocol):
    """Domain probe for group repository operations."""

    def group_saved(self, group_id: str) -> None:
        """Record that a single group was inserted."""
        ...

    def groups_upserted(self, integration_id: str, inserted: int, updated: int) -> None:
        """Record the result of a bulk upsert from an integration."""
        ...

    def with_context(self, context: ObservationContext) -> GroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class _StructlogProbe:
    """Shared structlog plumbing for the default repository probes."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext):
        """Create a new probe with observation context bound."""
        return type(self)(logger=self._logger, context=context)


class DefaultIntegrationRepositoryProbe(_StructlogProbe):
    """Default implementation of IntegrationRepositoryProbe using structlog."""

    def integration_created(self, integration_id: str, type: str) -> None:
        self._logger.info(
            "integration_created",
            integration_id=integration_id,
            integration_type=type,
            **self._get_context_kwargs(),
        )

    def integration_creation_failed(self, type: str, error: str) -> None:
        self._logger.error(
            "integration_creation_failed",
            integration_type=type,
            error=error,
            **self._get_context_kwargs(),
        )

    def integration_sync_stamped(self, integration_id: str) -> None:
        self._logger.info(
            "integration_sync_stamped",
            integration_id=integration_id,
            **self._get_context_kwargs(),
        )

    def integration_not_found(self, integration_id: str) -> None:
        self._logger.debug(
            "integration_not_found",
            integration_id=integration_id,
            **self._get_context_kwargs(),
        )


class DefaultEmployeeRepositoryProbe(_StructlogProbe):
    """Default implementation of EmployeeRepositoryProbe using structlog."""

    def employee_saved(self, employee_id: str) -> None:
        self._logger.info(
            "employee_saved",
            employee_id=employee_id,
            **self._get_context_kwargs(),
        )

    def employee_not_found(self, employee_id: str) -> None:
        self._logger.debug(
            "employee_not_found",
            employee_id=employee_id,
            **self._get_context_kwargs(),
        )

    def employees_merged(
        self, integration_id: str, inserted: int, updated: int
    ) -> None:
        self._logger.info(
            "employees_merged",
            integration_id=integration_id,
            inserted=inserted,
            updated=updated,
            **self._get_context_kwargs(),
        )


class DefaultGroupRepositoryProbe(_StructlogProbe):
    """Default implementation of GroupRepositoryProbe using structlog."""

    def group_saved(self, group_id: str) -> None:
        self._logger.info(
            "group_saved",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def groups_upserted(self, integration_id: str, inserted: int, updated: int) -> None:
        self._logger.info(
            "groups_upserted",
            integration_id=integration_id,
            inserted=inserted,
            updated=updated,
            **self._get_context_kwargs(),
        )
