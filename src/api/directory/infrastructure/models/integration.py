"""SQLAlchemy ORM model for the integrations table."""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from directory.domain.value_objects import IntegrationStatus, IntegrationType
from infrastructure.database.models import Base, CreatorMixin, TimestampMixin


def _enum_values(enum_cls: type) -> list[str]:
    """Persist enum values (e.g. "google_workspace") rather than member names."""
    return [member.value for member in enum_cls]


class IntegrationModel(Base, TimestampMixin, CreatorMixin):
    """ORM model for integrations table.

    ``config`` and ``auth_data`` are free-form JSONB. Nothing enforces
    their keys: auth_data holds whatever the provider's token endpoint
    returned.

    Note: There is no uniqueness guard on name or type. Two overlapping
    connects produce two rows.
    """

    __tablename__ = "integrations"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[IntegrationType] = mapped_column(
        Enum(
            IntegrationType,
            name="integration_type",
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    status: Mapped[IntegrationStatus] = mapped_column(
        Enum(
            IntegrationStatus,
            name="integration_status",
            values_callable=_enum_values,
        ),
        nullable=False,
        default=IntegrationStatus.PENDING_AUTH,
    )
    config: Mapped[dict[str, Any] | None] = mapped_column(nullable=True)
    auth_data: Mapped[dict[str, Any] | None] = mapped_column(nullable=True)
    last_sync_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<IntegrationModel(id={self.id}, name={self.name}, "
            f"type={self.type}, status={self.status})>"
        )
