"""SQLAlchemy ORM model for the groups table."""

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, CreatorMixin, TimestampMixin


class GroupModel(Base, TimestampMixin, CreatorMixin):
    """ORM model for groups table.

    The (external_id, integration_id) unique constraint is the conflict
    target for sync upserts: a second sync of the same group updates the
    row in place.
    """

    __tablename__ = "groups"
    __table_args__ = (
        UniqueConstraint(
            "external_id",
            "integration_id",
            name="uq_groups_external_id_integration_id",
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    external_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    integration_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("integrations.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<GroupModel(id={self.id}, name={self.name})>"
