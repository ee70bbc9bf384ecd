"""Domain probe for application startup and lifecycle events."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for application startup operations."""

    def application_started(self, version: str, providers: list[str]) -> None:
        """Record that the application started with these OAuth providers configured."""
        ...

    def provider_not_configured(self, provider: str) -> None:
        """Record that a provider has no client credentials and cannot be connected."""
        ...

    def application_stopped(self) -> None:
        """Record that the application shut down cleanly."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_started(self, version: str, providers: list[str]) -> None:
        self._logger.info(
            "application_started",
            version=version,
            providers=providers,
            **self._get_context_kwargs(),
        )

    def provider_not_configured(self, provider: str) -> None:
        self._logger.warning(
            "oauth_provider_not_configured",
            provider=provider,
            **self._get_context_kwargs(),
        )

    def application_stopped(self) -> None:
        self._logger.info("application_stopped", **self._get_context_kwargs())
