"""Protocol for employee application service observability.

Defines the interface for domain probes that capture application-level
domain events for manual employee management.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class EmployeeServiceProbe(Protocol):
    """Domain probe for employee application service operations."""

    def employee_created(self, employee_id: str, created_by: str | None) -> None:
        """Record that an employee was created by hand."""
        ...

    def employee_rejected(self, error: str) -> None:
        """Record that a manual create or edit failed validation."""
        ...

    def employee_updated(self, employee_id: str, fields: list[str]) -> None:
        """Record that an employee was edited."""
        ...

    def with_context(self, context: ObservationContext) -> EmployeeServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultEmployeeServiceProbe:
    """Default implementation of EmployeeServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultEmployeeServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultEmployeeServiceProbe(logger=self._logger, context=context)

    def employee_created(self, employee_id: str, created_by: str | None) -> None:
        self._logger.info(
            "employee_created",
            employee_id=employee_id,
            created_by=created_by,
            **self._get_context_kwargs(),
        )

    def employee_rejected(self, error: str) -> None:
        self._logger.warning(
            "employee_rejected",
            error=error,
            **self._get_context_kwargs(),
        )

    def employee_updated(self, employee_id: str, fields: list[str]) -> None:
        self._logger.info(
            "employee_updated",
            employee_id=employee_id,
            fields=fields,
            **self._get_context_kwargs(),
        )
