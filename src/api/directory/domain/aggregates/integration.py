"""Integration aggregate for the directory context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from directory.domain.value_objects import (
    IntegrationId,
    IntegrationStatus,
    IntegrationType,
)


@dataclass
class Integration:
    """A connected external system that users and groups are mirrored from.

    ``auth_data`` is opaque and provider specific: whatever the OAuth
    callback received from the token endpoint, plus a computed
    ``expires_at``. Nothing here validates its keys.

    Integrations are created once per successful connection and updated
    after every sync attempt. They are never deleted by the sync pipeline.
    """

    id: IntegrationId
    name: str
    type: IntegrationType
    status: IntegrationStatus = IntegrationStatus.PENDING_AUTH
    config: dict[str, Any] = field(default_factory=dict)
    auth_data: dict[str, Any] = field(default_factory=dict)
    last_sync_at: datetime | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def connect(
        cls,
        name: str,
        type: IntegrationType,
        config: dict[str, Any] | None = None,
        auth_data: dict[str, Any] | None = None,
        created_by: str | None = None,
    ) -> Integration:
        """Factory for a freshly connected, active integration.

        Args:
            name: Operator-chosen display name
            type: Provider variant
            config: Provider configuration (scopes, tenant)
            auth_data: Credentials obtained from the token exchange
            created_by: Optional operator reference

        Returns:
            A new Integration with status ``active``
        """
        if not name or not name.strip():
            raise ValueError("Integration name must not be empty")

        return cls(
            id=IntegrationId.generate(),
            name=name.strip(),
            type=type,
            status=IntegrationStatus.ACTIVE,
            config=dict(config or {}),
            auth_data=dict(auth_data or {}),
            last_sync_at=datetime.now(UTC),
            created_by=created_by,
        )
