"""Application services for the connectors bounded context."""

from connectors.application.services.authorization_service import (
    AuthorizationRequest,
    AuthorizationService,
)
from connectors.application.services.callback_service import OAuthCallbackService
from connectors.application.services.csv_import_service import (
    CsvFormatError,
    CsvImportResult,
    CsvImportService,
)
from connectors.application.services.sync_service import SyncService

__all__ = [
    "AuthorizationRequest",
    "AuthorizationService",
    "CsvFormatError",
    "CsvImportResult",
    "CsvImportService",
    "OAuthCallbackService",
    "SyncService",
]
