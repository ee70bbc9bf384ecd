"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class ConnectionProbe(Protocol):
    """Domain probe for database engine lifecycle."""

    def engine_created(
        self, host: str, database: str, min_connections: int, max_connections: int
    ) -> None:
        """Record that the async engine and its pool were created."""
        ...

    def engine_disposed(self) -> None:
        """Record that the engine was disposed and its pool closed."""
        ...

    def with_context(self, context: ObservationContext) -> ConnectionProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultConnectionProbe:
    """Default implementation of ConnectionProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultConnectionProbe:
        """Create a new probe with observation context bound."""
        return DefaultConnectionProbe(logger=self._logger, context=context)

    def engine_created(
        self, host: str, database: str, min_connections: int, max_connections: int
    ) -> None:
        self._logger.info(
            "database_engine_created",
            host=host,
            database=database,
            min_connections=min_connections,
            max_connections=max_connections,
            **self._get_context_kwargs(),
        )

    def engine_disposed(self) -> None:
        self._logger.info(
            "database_engine_disposed",
            **self._get_context_kwargs(),
        )
