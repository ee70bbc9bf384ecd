"""Batched INSERT ... ON CONFLICT DO UPDATE for provider records.

Both employees and groups reconcile on (external_id, integration_id).
The helpers here build one upsert per chunk and count inserted vs.
updated rows using PostgreSQL's ``xmax = 0`` trick: a freshly inserted
tuple has no deleting transaction.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Iterable, Iterator, Sequence

from sqlalchemy import literal_column
from sqlalchemy.dialects.postgresql import Insert, insert
from sqlalchemy.ext.asyncio import AsyncSession
from ulid import ULID

from directory.domain.records import MergeSummary

# asyncpg caps a statement at 32767 bind parameters
MAX_ROWS_PER_STATEMENT = 1000

CONFLICT_KEY = ("external_id", "integration_id")


def dedupe_by_external_id(rows: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep the last row per external_id.

    A single ON CONFLICT DO UPDATE statement cannot touch the same row
    twice, so duplicates within one batch must be collapsed first.
    """
    unique: dict[str, dict[str, Any]] = {}
    for row in rows:
        unique[row["external_id"]] = row
    return list(unique.values())


def chunked(rows: Sequence[dict[str, Any]], size: int) -> Iterator[Sequence[dict[str, Any]]]:
    for start in range(0, len(rows), size):
        yield rows[start : start + size]


def build_upsert(
    model: type,
    rows: Sequence[dict[str, Any]],
    update_columns: Sequence[str],
) -> Insert:
    """Build the upsert statement for one chunk of rows.

    Args:
        model: ORM model class with an (external_id, integration_id) constraint
        rows: Column mappings including id and integration_id
        update_columns: Columns overwritten on conflict

    Returns:
        Insert statement returning one boolean per row (True when inserted)
    """
    stmt = insert(model).values(list(rows))
    set_ = {column: stmt.excluded[column] for column in update_columns}
    set_["updated_at"] = stmt.excluded.updated_at
    return stmt.on_conflict_do_update(
        index_elements=list(CONFLICT_KEY),
        set_=set_,
    ).returning(literal_column("(xmax = 0)").label("inserted"))


def prepare_rows(
    integration_id: str, rows: Iterable[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Attach local identifiers, integration id and timestamps to record rows."""
    now = datetime.now(UTC)
    return [
        {
            **row,
            "id": str(ULID()),
            "integration_id": integration_id,
            "created_at": now,
            "updated_at": now,
        }
        for row in dedupe_by_external_id(rows)
    ]


async def execute_upsert(
    session: AsyncSession,
    model: type,
    rows: Sequence[dict[str, Any]],
    update_columns: Sequence[str],
) -> MergeSummary:
    """Run the upsert chunk by chunk within the caller's transaction."""
    inserted = 0
    updated = 0
    for chunk in chunked(rows, MAX_ROWS_PER_STATEMENT):
        result = await session.execute(build_upsert(model, chunk, update_columns))
        for was_inserted in result.scalars().all():
            if was_inserted:
                inserted += 1
            else:
                updated += 1
    return MergeSummary(inserted=inserted, updated=updated)
