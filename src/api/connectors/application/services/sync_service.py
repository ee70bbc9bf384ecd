"""Directory sync pipeline.

Given an access token and a freshly stored integration, pulls the
provider's full user and group directory and reconciles it into local
storage. The pass is best effort: a failed page or a failed write is
recorded in the returned SyncOutcome and the pipeline moves on. Users and
groups are attempted independently, and the integration is stamped
``last_sync_at``/``active`` whatever happened.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Awaitable, Callable, Mapping, Sequence, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from connectors.application.observability import DefaultSyncProbe, SyncProbe
from connectors.domain.value_objects import ResourceSyncResult, SyncOutcome
from connectors.infrastructure.directory_client import DirectoryClient, FetchResult
from connectors.infrastructure.providers import ProviderDescriptor
from directory.application.services import IntegrationService
from directory.domain.records import EmployeeRecord, GroupRecord, MergeSummary
from directory.domain.value_objects import IntegrationId
from directory.ports.repositories import IEmployeeRepository, IGroupRepository

R = TypeVar("R")


class SyncService:
    """Runs fetch, normalize and reconcile for one integration."""

    def __init__(
        self,
        directory_client: DirectoryClient,
        employee_repository: IEmployeeRepository,
        group_repository: IGroupRepository,
        integration_service: IntegrationService,
        session: AsyncSession,
        probe: SyncProbe | None = None,
    ):
        """Initialize SyncService with dependencies.

        Args:
            directory_client: Paginated provider directory client
            employee_repository: Target of the employee merge
            group_repository: Target of the group upsert
            integration_service: Stamps the integration after the pass
            session: Database session; each batch write gets its own transaction
            probe: Optional domain probe for observability
        """
        self._directory_client = directory_client
        self._employee_repository = employee_repository
        self._group_repository = group_repository
        self._integration_service = integration_service
        self._session = session
        self._probe = probe or DefaultSyncProbe()

    async def run(
        self,
        provider: ProviderDescriptor,
        integration_id: IntegrationId,
        access_token: str,
    ) -> SyncOutcome:
        """Sync users then groups, then stamp the integration.

        Returns:
            SyncOutcome with per-resource counts and errors
        """
        self._probe.sync_started(integration_id.value, provider.key)

        users_fetch = await self._directory_client.fetch_users(provider, access_token)
        users = self._fetch_result(users_fetch)
        if provider.normalize_user is not None:
            await self.persist_employees(
                integration_id,
                self._normalize(users_fetch, provider.normalize_user),
                users,
            )

        groups_fetch = await self._directory_client.fetch_groups(provider, access_token)
        groups = self._fetch_result(groups_fetch)
        if provider.normalize_group is not None:
            await self.persist_groups(
                integration_id,
                self._normalize(groups_fetch, provider.normalize_group),
                groups,
            )

        completed_at = await self.stamp(integration_id)
        outcome = SyncOutcome(users=users, groups=groups, completed_at=completed_at)
        self._probe.sync_completed(integration_id.value, outcome)
        return outcome

    async def persist_employees(
        self,
        integration_id: IntegrationId,
        records: Sequence[EmployeeRecord],
        result: ResourceSyncResult,
    ) -> ResourceSyncResult:
        """Merge an employee batch in its own transaction, recording the outcome."""
        return await self._persist(
            result,
            records,
            lambda: self._employee_repository.merge_from_integration(
                integration_id, records
            ),
        )

    async def persist_groups(
        self,
        integration_id: IntegrationId,
        records: Sequence[GroupRecord],
        result: ResourceSyncResult,
    ) -> ResourceSyncResult:
        """Upsert a group batch in its own transaction, recording the outcome."""
        return await self._persist(
            result,
            records,
            lambda: self._group_repository.upsert_from_integration(
                integration_id, records
            ),
        )

    async def stamp(self, integration_id: IntegrationId) -> datetime:
        """Stamp last_sync_at and status; a failure is logged, not raised."""
        now = datetime.now(UTC)
        try:
            return await self._integration_service.mark_synced(integration_id, now)
        except SQLAlchemyError as e:
            self._probe.stamp_failed(integration_id.value, str(e))
            return now

    async def _persist(
        self,
        result: ResourceSyncResult,
        records: Sequence[Any],
        write: Callable[[], Awaitable[MergeSummary]],
    ) -> ResourceSyncResult:
        # Empty batches are not an error and never reach the database
        if not records:
            return result
        try:
            async with self._session.begin():
                summary = await write()
        except SQLAlchemyError as e:
            self._probe.persist_failed(result.resource, str(e))
            result.persist_error = str(e)
            return result

        result.inserted = summary.inserted
        result.updated = summary.updated
        return result

    def _fetch_result(self, fetch: FetchResult) -> ResourceSyncResult:
        return ResourceSyncResult(
            resource=fetch.resource,
            fetched=len(fetch.items),
            pages=fetch.pages,
            fetch_error=None if fetch.complete else str(fetch.error),
        )

    def _normalize(
        self,
        fetch: FetchResult,
        normalize: Callable[[Mapping[str, Any]], R | None],
    ) -> list[R]:
        records = [
            record
            for item in fetch.items
            if (record := normalize(item)) is not None
        ]
        skipped = len(fetch.items) - len(records)
        if skipped:
            self._probe.records_skipped(fetch.resource, skipped)
        return records
