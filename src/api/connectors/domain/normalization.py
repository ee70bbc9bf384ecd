"""Provider payload normalization.

Maps each provider's native user and group representation into the
provider-neutral EmployeeRecord / GroupRecord shape. Normalizers are
pure functions; they return None for payloads that cannot be keyed
(no native id) so callers can drop them.
"""

from __future__ import annotations

from typing import Any, Mapping

from directory.domain.records import EmployeeRecord, GroupRecord
from directory.domain.value_objects import EmployeeStatus

UNNAMED_GROUP = "Unnamed Group"


def _first(items: Any) -> Mapping[str, Any]:
    if isinstance(items, list) and items and isinstance(items[0], Mapping):
        return items[0]
    return {}


def _text(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def normalize_google_user(user: Mapping[str, Any]) -> EmployeeRecord | None:
    """Admin SDK Directory ``users`` resource to EmployeeRecord."""
    external_id = _text(user.get("id"))
    if external_id is None:
        return None

    name = user.get("name") or {}
    organization = _first(user.get("organizations"))
    phone = _first(user.get("phones"))

    return EmployeeRecord(
        external_id=external_id,
        first_name=name.get("givenName") or "",
        last_name=name.get("familyName") or "",
        email=user.get("primaryEmail") or "",
        employee_id=external_id,
        job_title=_text(organization.get("title")),
        department=_text(organization.get("department")),
        manager_email=None,
        phone=_text(phone.get("value")),
        status=EmployeeStatus.INACTIVE if user.get("suspended") else EmployeeStatus.ACTIVE,
    )


def normalize_google_group(group: Mapping[str, Any]) -> GroupRecord | None:
    """Admin SDK Directory ``groups`` resource to GroupRecord."""
    external_id = _text(group.get("id"))
    if external_id is None:
        return None
    return GroupRecord(
        external_id=external_id,
        name=_text(group.get("name")) or UNNAMED_GROUP,
        description=_text(group.get("description")),
    )


def normalize_microsoft_user(user: Mapping[str, Any]) -> EmployeeRecord | None:
    """Microsoft Graph ``user`` resource to EmployeeRecord.

    ``manager`` is only present when the request used ``$expand=manager``.
    """
    external_id = _text(user.get("id"))
    if external_id is None:
        return None

    manager = user.get("manager")
    manager_email = _text(manager.get("mail")) if isinstance(manager, Mapping) else None

    business_phones = user.get("businessPhones") or []
    phone = _text(user.get("mobilePhone")) or (
        _text(business_phones[0]) if business_phones else None
    )

    return EmployeeRecord(
        external_id=external_id,
        first_name=user.get("givenName") or "",
        last_name=user.get("surname") or "",
        email=user.get("mail") or user.get("userPrincipalName") or "",
        employee_id=external_id,
        job_title=_text(user.get("jobTitle")),
        department=_text(user.get("department")),
        manager_email=manager_email,
        phone=phone,
        status=(
            EmployeeStatus.INACTIVE
            if user.get("accountEnabled") is False
            else EmployeeStatus.ACTIVE
        ),
    )


def normalize_microsoft_group(group: Mapping[str, Any]) -> GroupRecord | None:
    """Microsoft Graph ``group`` resource to GroupRecord."""
    external_id = _text(group.get("id"))
    if external_id is None:
        return None
    return GroupRecord(
        external_id=external_id,
        name=_text(group.get("displayName")) or UNNAMED_GROUP,
        description=_text(group.get("description")),
    )


# Accepted CSV headers, after lowercasing and turning spaces/dashes into "_"
CSV_COLUMNS: dict[str, tuple[str, ...]] = {
    "external_id": ("external_id", "id"),
    "first_name": ("first_name", "firstname", "given_name"),
    "last_name": ("last_name", "lastname", "surname", "family_name"),
    "email": ("email", "email_address", "mail"),
    "employee_id": ("employee_id", "employee_number"),
    "job_title": ("job_title", "title"),
    "department": ("department",),
    "manager_email": ("manager_email", "manager"),
    "phone": ("phone", "phone_number", "mobile"),
    "status": ("status",),
}


def _csv_key(header: str) -> str:
    return header.strip().lower().replace(" ", "_").replace("-", "_")


def normalize_csv_row(row: Mapping[str | None, Any]) -> EmployeeRecord | None:
    """Map one CSV row (as produced by ``csv.DictReader``) to EmployeeRecord.

    Rows without an email are skipped. The external id falls back to the
    employee id, then to the email, so re-importing the same file updates
    rows in place.
    """
    values = {_csv_key(k): v for k, v in row.items() if k is not None}

    def pick(field: str) -> str | None:
        for alias in CSV_COLUMNS[field]:
            value = _text(values.get(alias))
            if value is not None:
                return value
        return None

    email = pick("email")
    if email is None:
        return None

    employee_id = pick("employee_id")
    status_value = (pick("status") or "").lower()
    try:
        status = EmployeeStatus(status_value)
    except ValueError:
        status = EmployeeStatus.ACTIVE

    return EmployeeRecord(
        external_id=pick("external_id") or employee_id or email.lower(),
        first_name=pick("first_name") or "",
        last_name=pick("last_name") or "",
        email=email,
        employee_id=employee_id,
        job_title=pick("job_title"),
        department=pick("department"),
        manager_email=pick("manager_email"),
        phone=pick("phone"),
        status=status,
    )
