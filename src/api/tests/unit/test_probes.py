"""Unit tests for domain probes.

Tests that domain probes emit the expected structured events following
the Domain Oriented Observability pattern.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import structlog

from connectors.application.observability import DefaultCallbackProbe, DefaultSyncProbe
from connectors.domain.value_objects import ResourceSyncResult, SyncOutcome
from infrastructure.observability import ObservationContext
from infrastructure.observability.probes import DefaultConnectionProbe
from infrastructure.observability.startup_probe import DefaultStartupProbe


def _logger() -> MagicMock:
    return MagicMock(spec=structlog.stdlib.BoundLogger)


class TestConnectionProbe:
    def test_default_probe_creates_with_default_logger(self):
        probe = DefaultConnectionProbe()
        assert probe._logger is not None

    def test_engine_created_logs_pool_bounds(self):
        logger = _logger()
        probe = DefaultConnectionProbe(logger=logger)

        probe.engine_created(
            host="db", database="dirsync", min_connections=2, max_connections=10
        )

        logger.info.assert_called_once()
        assert logger.info.call_args.kwargs["max_connections"] == 10

    def test_with_context_adds_metadata(self):
        logger = _logger()
        context = ObservationContext(request_id="req-1")
        probe = DefaultConnectionProbe(logger=logger).with_context(context)

        probe.engine_disposed()

        assert logger.info.call_args.kwargs["request_id"] == "req-1"


class TestObservationContext:
    def test_as_dict_skips_unset_fields(self):
        context = ObservationContext(provider="microsoft")

        assert context.as_dict() == {"provider": "microsoft"}

    def test_with_integration_and_extra_return_new_context(self):
        base = ObservationContext(request_id="req-1")

        derived = base.with_integration("01INT").with_extra(resource="users")

        assert base.integration_id is None
        assert derived.as_dict() == {
            "request_id": "req-1",
            "integration_id": "01INT",
            "resource": "users",
        }


class TestStartupProbe:
    def test_missing_provider_is_a_warning(self):
        logger = _logger()

        DefaultStartupProbe(logger=logger).provider_not_configured("google")

        logger.warning.assert_called_once()
        assert logger.warning.call_args.kwargs["provider"] == "google"


class TestCallbackProbe:
    def test_state_is_truncated_in_logs(self):
        logger = _logger()
        state = '{"codeVerifier":"' + "x" * 100 + '"}'

        DefaultCallbackProbe(logger=logger).callback_received("google", state)

        logged = logger.info.call_args.kwargs["state_prefix"]
        assert len(logged) < len(state)
        assert "x" * 20 not in logged


class TestSyncProbe:
    def test_partial_sync_is_a_warning(self):
        logger = _logger()
        outcome = SyncOutcome(
            users=ResourceSyncResult(resource="users", fetch_error="403"),
            groups=ResourceSyncResult(resource="groups"),
            completed_at=datetime.now(UTC),
        )

        DefaultSyncProbe(logger=logger).sync_completed("int-1", outcome)

        logger.warning.assert_called_once()
        logger.info.assert_not_called()

    def test_successful_sync_is_info(self):
        logger = _logger()
        outcome = SyncOutcome(
            users=ResourceSyncResult(resource="users", fetched=2, inserted=2),
            groups=ResourceSyncResult(resource="groups"),
            completed_at=datetime.now(UTC),
        )

        DefaultSyncProbe(logger=logger).sync_completed("int-1", outcome)

        logger.info.assert_called_once()
