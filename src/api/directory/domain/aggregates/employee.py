"""Employee aggregate for the directory context."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from directory.domain.exceptions import InvalidEmployeeError
from directory.domain.value_objects import EmployeeId, EmployeeStatus, IntegrationId

REQUIRED_FIELDS = ("first_name", "last_name", "email")

EDITABLE_FIELDS = frozenset(
    {
        "first_name",
        "last_name",
        "email",
        "employee_id",
        "job_title",
        "department",
        "manager_email",
        "phone",
        "status",
    }
)


def _clean(value: str | None) -> str | None:
    """Strip whitespace, turning blank form values into None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class Employee:
    """A directory user, either authored by hand or mirrored from an integration.

    Business rules:
    - first_name, last_name and email are required
    - email is NOT unique at this layer
    - employees sourced from an integration are identified by
      (external_id, integration_id); manual employees have neither
    """

    id: EmployeeId
    first_name: str
    last_name: str
    email: str
    external_id: str | None = None
    employee_id: str | None = None
    job_title: str | None = None
    department: str | None = None
    manager_email: str | None = None
    phone: str | None = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    integration_id: IntegrationId | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create_manual(
        cls,
        first_name: str | None,
        last_name: str | None,
        email: str | None,
        employee_id: str | None = None,
        job_title: str | None = None,
        department: str | None = None,
        manager_email: str | None = None,
        phone: str | None = None,
        status: EmployeeStatus | str | None = None,
        external_id: str | None = None,
        created_by: str | None = None,
    ) -> Employee:
        """Factory for an employee added by an operator.

        Raises:
            InvalidEmployeeError: If a required field is missing or status is unknown
        """
        values = {
            "first_name": _clean(first_name),
            "last_name": _clean(last_name),
            "email": _clean(email),
        }
        missing = [name for name in REQUIRED_FIELDS if not values[name]]
        if missing:
            raise InvalidEmployeeError(
                f"Missing required employee fields: {', '.join(missing)}"
            )

        return cls(
            id=EmployeeId.generate(),
            first_name=values["first_name"],
            last_name=values["last_name"],
            email=values["email"],
            external_id=_clean(external_id),
            employee_id=_clean(employee_id),
            job_title=_clean(job_title),
            department=_clean(department),
            manager_email=_clean(manager_email),
            phone=_clean(phone),
            status=_parse_status(status),
            created_by=created_by,
        )

    def with_changes(self, **changes: object) -> Employee:
        """Return a copy with the given editable fields changed.

        Raises:
            InvalidEmployeeError: On unknown fields, blanked required fields
                or an unknown status
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise InvalidEmployeeError(
                f"Fields cannot be edited: {', '.join(sorted(unknown))}"
            )

        cleaned: dict[str, object] = {}
        for name, value in changes.items():
            if name == "status":
                cleaned[name] = _parse_status(value)  # type: ignore[arg-type]
                continue
            cleaned[name] = _clean(value)  # type: ignore[arg-type]
            if name in REQUIRED_FIELDS and not cleaned[name]:
                raise InvalidEmployeeError(f"{name} must not be empty")

        return replace(self, **cleaned)

    @property
    def full_name(self) -> str:
        """Display name."""
        return f"{self.first_name} {self.last_name}".strip()

    def __eq__(self, other: object) -> bool:
        """Employees are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, Employee):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)


def _parse_status(status: EmployeeStatus | str | None) -> EmployeeStatus:
    if status is None or status == "":
        return EmployeeStatus.ACTIVE
    try:
        return EmployeeStatus(status)
    except ValueError as e:
        raise InvalidEmployeeError(f"Unknown employee status: {status}") from e
