"""Provider-neutral directory records.

These are the common shape every provider's users and groups are
normalized into before reconciliation. They carry no local identifiers:
a record is matched to a stored row by ``(external_id, integration_id)``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from directory.domain.value_objects import EmployeeStatus


@dataclass(frozen=True)
class EmployeeRecord:
    """A directory user as reported by an external provider."""

    external_id: str
    first_name: str
    last_name: str
    email: str
    employee_id: str | None = None
    job_title: str | None = None
    department: str | None = None
    manager_email: str | None = None
    phone: str | None = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    def as_row(self) -> dict[str, Any]:
        """Column mapping used for bulk writes."""
        row = asdict(self)
        row["status"] = self.status.value
        return row


@dataclass(frozen=True)
class GroupRecord:
    """A directory group as reported by an external provider."""

    external_id: str
    name: str
    description: str | None = None

    def as_row(self) -> dict[str, Any]:
        """Column mapping used for bulk writes."""
        return asdict(self)


@dataclass(frozen=True)
class MergeSummary:
    """Result of reconciling one batch against stored rows."""

    inserted: int = 0
    updated: int = 0
