"""Value objects for the directory domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and lifecycle enums.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Self

from ulid import ULID


@dataclass(frozen=True)
class _UlidIdentifier:
    """Base for ULID-backed identifiers.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> Self:
        """Generate a new identifier using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Create an identifier from its string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            ULID.from_str(value)
        except ValueError as e:
            raise ValueError(f"Invalid {cls.__name__}: {value}") from e

        return cls(value=value)


@dataclass(frozen=True)
class IntegrationId(_UlidIdentifier):
    """Identifier for an Integration aggregate."""


@dataclass(frozen=True)
class EmployeeId(_UlidIdentifier):
    """Identifier for an Employee aggregate."""


@dataclass(frozen=True)
class GroupId(_UlidIdentifier):
    """Identifier for a Group aggregate."""


class IntegrationType(StrEnum):
    """Kinds of external system an integration can connect to."""

    CSV = "csv"
    MICROSOFT_ENTRA = "microsoft_entra"
    GOOGLE_WORKSPACE = "google_workspace"


class IntegrationStatus(StrEnum):
    """Lifecycle status of an integration."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    ERROR = "error"
    PENDING_AUTH = "pending_auth"


class EmployeeStatus(StrEnum):
    """Employment status mirrored from the directory."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATED = "terminated"
