"""SQLAlchemy ORM model for the employees table."""

from sqlalchemy import Enum, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from directory.domain.value_objects import EmployeeStatus
from directory.infrastructure.models.integration import _enum_values
from infrastructure.database.models import Base, CreatorMixin, TimestampMixin


class EmployeeModel(Base, TimestampMixin, CreatorMixin):
    """ORM model for employees table.

    Reconciliation key: (external_id, integration_id). PostgreSQL treats
    NULLs as distinct, so manually created employees (both NULL) never
    collide with each other.

    Email is NOT unique.
    """

    __tablename__ = "employees"
    __table_args__ = (
        UniqueConstraint(
            "external_id",
            "integration_id",
            name="uq_employees_external_id_integration_id",
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    external_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    integration_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("integrations.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    employee_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    job_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    department: Mapped[str | None] = mapped_column(String(255), nullable=True)
    manager_email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[EmployeeStatus] = mapped_column(
        Enum(EmployeeStatus, name="employee_status", values_callable=_enum_values),
        nullable=False,
        default=EmployeeStatus.ACTIVE,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<EmployeeModel(id={self.id}, email={self.email})>"
