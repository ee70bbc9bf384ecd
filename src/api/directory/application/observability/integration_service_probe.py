"""Protocol for integration application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class IntegrationServiceProbe(Protocol):
    """Domain probe for integration application service operations."""

    def integration_connected(self, integration_id: str, name: str, type: str) -> None:
        """Record that a connected integration was stored."""
        ...

    def integration_connect_failed(self, name: str, type: str, error: str) -> None:
        """Record that storing a connected integration failed."""
        ...

    def with_context(self, context: ObservationContext) -> IntegrationServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultIntegrationServiceProbe:
    """Default implementation of IntegrationServiceProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultIntegrationServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultIntegrationServiceProbe(logger=self._logger, context=context)

    def integration_connected(self, integration_id: str, name: str, type: str) -> None:
        self._logger.info(
            "integration_connected",
            integration_id=integration_id,
            name=name,
            type=type,
            **self._get_context_kwargs(),
        )

    def integration_connect_failed(self, name: str, type: str, error: str) -> None:
        self._logger.error(
            "integration_connect_failed",
            name=name,
            type=type,
            error=error,
            **self._get_context_kwargs(),
        )
