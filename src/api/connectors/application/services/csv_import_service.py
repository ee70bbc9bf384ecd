"""CSV integration import.

The CSV provider has no OAuth flow: an uploaded file creates a ``csv``
integration and its rows are merged as employees with the same
(external_id, integration_id) reconciliation as provider syncs.
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass

from connectors.application.observability import DefaultSyncProbe, SyncProbe
from connectors.application.services.sync_service import SyncService
from connectors.domain.normalization import normalize_csv_row
from connectors.domain.value_objects import ResourceSyncResult
from connectors.infrastructure.providers import CSV
from directory.application.services import IntegrationService
from directory.domain.aggregates import Integration


class CsvFormatError(ValueError):
    """Raised when the upload is not a CSV file with a header row."""


@dataclass(frozen=True)
class CsvImportResult:
    """Integration created by an upload, and the employee merge outcome."""

    integration: Integration
    employees: ResourceSyncResult
    skipped_rows: int


class CsvImportService:
    """Creates a CSV integration and merges its rows."""

    def __init__(
        self,
        integration_service: IntegrationService,
        sync_service: SyncService,
        probe: SyncProbe | None = None,
    ):
        self._integration_service = integration_service
        self._sync_service = sync_service
        self._probe = probe or DefaultSyncProbe()

    async def import_csv(
        self,
        content: str,
        integration_name: str | None = None,
        created_by: str | None = None,
    ) -> CsvImportResult:
        """Import employees from CSV text.

        Rows are matched to columns by header name; rows without an email
        are skipped.

        Raises:
            CsvFormatError: If the content has no header row
            IntegrationCreationError: If the integration cannot be stored
        """
        reader = csv.DictReader(io.StringIO(content.lstrip("\ufeff")))
        if not reader.fieldnames:
            raise CsvFormatError("CSV upload has no header row")

        rows = list(reader)
        records = [
            record for row in rows if (record := normalize_csv_row(row)) is not None
        ]
        skipped = len(rows) - len(records)

        integration = await self._integration_service.create_connected(
            name=integration_name or CSV.display_name,
            type=CSV.integration_type,
            config={"columns": list(reader.fieldnames)},
            created_by=created_by,
        )

        self._probe.sync_started(integration.id.value, CSV.key)
        if skipped:
            self._probe.records_skipped("users", skipped)

        result = ResourceSyncResult(resource="users", fetched=len(rows), pages=1)
        await self._sync_service.persist_employees(integration.id, records, result)
        await self._sync_service.stamp(integration.id)

        return CsvImportResult(
            integration=integration, employees=result, skipped_rows=skipped
        )
