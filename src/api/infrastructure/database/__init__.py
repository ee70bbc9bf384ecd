"""Database infrastructure - shared engine, session and ORM base."""

from infrastructure.database.models import Base, CreatorMixin, TimestampMixin

__all__ = [
    "Base",
    "CreatorMixin",
    "TimestampMixin",
]
