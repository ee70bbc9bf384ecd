"""Domain probes for outbound provider HTTP calls.

Tokens and verifiers are never passed to these probes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class OAuthClientProbe(Protocol):
    """Domain probe for token endpoint calls."""

    def token_exchange_started(self, provider: str, token_url: str) -> None:
        """Record that the code is about to be exchanged."""
        ...

    def token_exchange_succeeded(self, provider: str, expires_in: int | None) -> None:
        """Record a successful exchange."""
        ...

    def token_exchange_rejected(
        self,
        provider: str,
        status_code: int | None,
        error: str | None,
        description: str | None,
    ) -> None:
        """Record that the provider rejected the exchange or was unreachable."""
        ...

    def with_context(self, context: ObservationContext) -> OAuthClientProbe:
        """Create a new probe with observation context bound."""
        ...


class DirectoryClientProbe(Protocol):
    """Domain probe for paginated directory fetches."""

    def page_fetched(self, resource: str, page: int, items: int) -> None:
        """Record a fetched page."""
        ...

    def page_failed(
        self, resource: str, page: int, status_code: int | None, error: str
    ) -> None:
        """Record that a page failed and pagination stopped."""
        ...

    def fetch_completed(self, resource: str, pages: int, items: int) -> None:
        """Record the end of pagination for a resource."""
        ...

    def with_context(self, context: ObservationContext) -> DirectoryClientProbe:
        """Create a new probe with observation context bound."""
        ...


class _ContextualProbe:
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


class DefaultOAuthClientProbe(_ContextualProbe):
    """Default implementation of OAuthClientProbe using structlog."""

    def with_context(self, context: ObservationContext) -> DefaultOAuthClientProbe:
        return DefaultOAuthClientProbe(logger=self._logger, context=context)

    def token_exchange_started(self, provider: str, token_url: str) -> None:
        self._logger.info(
            "token_exchange_started",
            provider=provider,
            token_url=token_url,
            **self._get_context_kwargs(),
        )

    def token_exchange_succeeded(self, provider: str, expires_in: int | None) -> None:
        self._logger.info(
            "token_exchange_succeeded",
            provider=provider,
            expires_in=expires_in,
            **self._get_context_kwargs(),
        )

    def token_exchange_rejected(
        self,
        provider: str,
        status_code: int | None,
        error: str | None,
        description: str | None,
    ) -> None:
        self._logger.error(
            "token_exchange_rejected",
            provider=provider,
            status_code=status_code,
            error=error,
            error_description=description,
            **self._get_context_kwargs(),
        )


class DefaultDirectoryClientProbe(_ContextualProbe):
    """Default implementation of DirectoryClientProbe using structlog."""

    def with_context(self, context: ObservationContext) -> DefaultDirectoryClientProbe:
        return DefaultDirectoryClientProbe(logger=self._logger, context=context)

    def page_fetched(self, resource: str, page: int, items: int) -> None:
        self._logger.debug(
            "directory_page_fetched",
            resource=resource,
            page=page,
            items=items,
            **self._get_context_kwargs(),
        )

    def page_failed(
        self, resource: str, page: int, status_code: int | None, error: str
    ) -> None:
        self._logger.warning(
            "directory_page_failed",
            resource=resource,
            page=page,
            status_code=status_code,
            error=error,
            **self._get_context_kwargs(),
        )

    def fetch_completed(self, resource: str, pages: int, items: int) -> None:
        self._logger.info(
            "directory_fetch_completed",
            resource=resource,
            pages=pages,
            items=items,
            **self._get_context_kwargs(),
        )
