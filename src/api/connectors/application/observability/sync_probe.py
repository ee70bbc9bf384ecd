"""Domain probe for the directory sync pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from connectors.domain.value_objects import SyncOutcome
    from infrastructure.observability.context import ObservationContext


class SyncProbe(Protocol):
    """Domain probe for sync pipeline operations."""

    def sync_started(self, integration_id: str, provider: str) -> None:
        """Record that a sync pass began."""
        ...

    def records_skipped(self, resource: str, count: int) -> None:
        """Record provider items dropped because they could not be normalized."""
        ...

    def persist_failed(self, resource: str, error: str) -> None:
        """Record that writing a resource batch failed."""
        ...

    def stamp_failed(self, integration_id: str, error: str) -> None:
        """Record that stamping the integration after sync failed."""
        ...

    def sync_completed(self, integration_id: str, outcome: SyncOutcome) -> None:
        """Record the structured outcome of a sync pass."""
        ...

    def with_context(self, context: ObservationContext) -> SyncProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultSyncProbe:
    """Default implementation of SyncProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultSyncProbe:
        """Create a new probe with observation context bound."""
        return DefaultSyncProbe(logger=self._logger, context=context)

    def sync_started(self, integration_id: str, provider: str) -> None:
        self._logger.info(
            "sync_started",
            integration_id=integration_id,
            provider=provider,
            **self._get_context_kwargs(),
        )

    def records_skipped(self, resource: str, count: int) -> None:
        self._logger.warning(
            "sync_records_skipped",
            resource=resource,
            count=count,
            **self._get_context_kwargs(),
        )

    def persist_failed(self, resource: str, error: str) -> None:
        self._logger.error(
            "sync_persist_failed",
            resource=resource,
            error=error,
            **self._get_context_kwargs(),
        )

    def stamp_failed(self, integration_id: str, error: str) -> None:
        self._logger.error(
            "sync_stamp_failed",
            integration_id=integration_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def sync_completed(self, integration_id: str, outcome: SyncOutcome) -> None:
        log = self._logger.info if outcome.succeeded else self._logger.warning
        log(
            "sync_completed",
            integration_id=integration_id,
            succeeded=outcome.succeeded,
            users_fetched=outcome.users.fetched,
            users_inserted=outcome.users.inserted,
            users_updated=outcome.users.updated,
            users_fetch_error=outcome.users.fetch_error,
            users_persist_error=outcome.users.persist_error,
            groups_fetched=outcome.groups.fetched,
            groups_inserted=outcome.groups.inserted,
            groups_updated=outcome.groups.updated,
            groups_fetch_error=outcome.groups.fetch_error,
            groups_persist_error=outcome.groups.persist_error,
            **self._get_context_kwargs(),
        )
