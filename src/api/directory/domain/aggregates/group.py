"""Group aggregate for the directory context."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from directory.domain.exceptions import InvalidGroupError
from directory.domain.value_objects import GroupId, IntegrationId


@dataclass(frozen=True)
class Group:
    """A directory group.

    Groups are created by hand (no external_id) or by a sync pass, where
    (external_id, integration_id) identifies the row to update in place.
    """

    id: GroupId
    name: str
    description: str | None = None
    external_id: str | None = None
    integration_id: IntegrationId | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def create_manual(
        cls,
        name: str | None,
        description: str | None = None,
        external_id: str | None = None,
        created_by: str | None = None,
    ) -> Group:
        """Factory for a group added by an operator.

        Raises:
            InvalidGroupError: If the name is missing
        """
        if not name or not name.strip():
            raise InvalidGroupError("Group name is required")

        return cls(
            id=GroupId.generate(),
            name=name.strip(),
            description=(description or "").strip() or None,
            external_id=(external_id or "").strip() or None,
            created_by=created_by,
        )

    def __eq__(self, other: object) -> bool:
        """Groups are equal if they have the same ID."""
        if not isinstance(other, Group):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
