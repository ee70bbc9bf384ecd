"""Domain probe for the OAuth authorize/callback flow.

Only a short prefix of ``state`` is ever logged; it carries the PKCE
verifier.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext

STATE_LOG_PREFIX = 8


class CallbackProbe(Protocol):
    """Domain probe for OAuth flow operations."""

    def authorization_started(self, provider: str, integration_name: str) -> None:
        """Record that an authorization URL was issued."""
        ...

    def callback_received(self, provider: str, state: str | None) -> None:
        """Record an incoming callback."""
        ...

    def provider_error(self, provider: str, error: str) -> None:
        """Record that the provider reported an OAuth error."""
        ...

    def state_invalid(self, provider: str, reason: str) -> None:
        """Record that the state could not be parsed or verified."""
        ...

    def callback_rejected(self, provider: str, error_code: str) -> None:
        """Record a callback ending in an error redirect."""
        ...

    def sync_crashed(self, provider: str, integration_id: str, error: str) -> None:
        """Record an exception escaping the sync pipeline."""
        ...

    def callback_failed(self, provider: str, stage: str, error: str) -> None:
        """Record an unexpected exception in the callback."""
        ...

    def callback_completed(
        self, provider: str, integration_id: str, integration_name: str
    ) -> None:
        """Record a successful callback."""
        ...

    def with_context(self, context: ObservationContext) -> CallbackProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCallbackProbe:
    """Default implementation of CallbackProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultCallbackProbe:
        """Create a new probe with observation context bound."""
        return DefaultCallbackProbe(logger=self._logger, context=context)

    def authorization_started(self, provider: str, integration_name: str) -> None:
        self._logger.info(
            "authorization_started",
            provider=provider,
            integration_name=integration_name,
            **self._get_context_kwargs(),
        )

    def callback_received(self, provider: str, state: str | None) -> None:
        self._logger.info(
            "oauth_callback_received",
            provider=provider,
            state_prefix=state[:STATE_LOG_PREFIX] if state else None,
            **self._get_context_kwargs(),
        )

    def provider_error(self, provider: str, error: str) -> None:
        self._logger.warning(
            "oauth_provider_error",
            provider=provider,
            error=error,
            **self._get_context_kwargs(),
        )

    def state_invalid(self, provider: str, reason: str) -> None:
        self._logger.warning(
            "oauth_state_invalid",
            provider=provider,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def callback_rejected(self, provider: str, error_code: str) -> None:
        self._logger.warning(
            "oauth_callback_rejected",
            provider=provider,
            error_code=error_code,
            **self._get_context_kwargs(),
        )

    def sync_crashed(self, provider: str, integration_id: str, error: str) -> None:
        self._logger.error(
            "oauth_callback_sync_crashed",
            provider=provider,
            integration_id=integration_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def callback_failed(self, provider: str, stage: str, error: str) -> None:
        self._logger.exception(
            "oauth_callback_failed",
            provider=provider,
            stage=stage,
            error=error,
            **self._get_context_kwargs(),
        )

    def callback_completed(
        self, provider: str, integration_id: str, integration_name: str
    ) -> None:
        self._logger.info(
            "oauth_callback_completed",
            provider=provider,
            integration_id=integration_id,
            integration_name=integration_name,
            **self._get_context_kwargs(),
        )
