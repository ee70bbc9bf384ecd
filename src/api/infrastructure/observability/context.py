"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        provider: Integration type being connected or synced (if applicable).
        integration_id: Integration the operation acts on (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", provider="google_workspace")
        probe = DefaultSyncProbe().with_context(context)
    """

    request_id: str | None = None
    provider: str | None = None
    integration_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.provider is not None:
            result["provider"] = self.provider
        if self.integration_id is not None:
            result["integration_id"] = self.integration_id
        result.update(self.extra)
        return result

    def with_integration(self, integration_id: str) -> ObservationContext:
        """Create a new context with the integration id set."""
        return replace(self, integration_id=integration_id)

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        return replace(self, extra={**self.extra, **kwargs})
