"""Unit tests for the Group and Integration aggregates and records."""

import pytest

from directory.domain.aggregates import Group, Integration
from directory.domain.exceptions import InvalidGroupError
from directory.domain.records import EmployeeRecord, GroupRecord
from directory.domain.value_objects import (
    EmployeeStatus,
    IntegrationId,
    IntegrationStatus,
    IntegrationType,
)


class TestGroup:
    def test_create_manual(self):
        group = Group.create_manual(name=" Engineering ", description="")

        assert group.name == "Engineering"
        assert group.description is None
        assert group.integration_id is None

    @pytest.mark.parametrize("name", [None, "", "   "])
    def test_name_is_required(self, name):
        with pytest.raises(InvalidGroupError):
            Group.create_manual(name=name)


class TestIntegration:
    def test_connect_is_active_and_stamped(self):
        integration = Integration.connect(
            name="Acme",
            type=IntegrationType.GOOGLE_WORKSPACE,
            auth_data={"access_token": "abc"},
        )

        assert integration.status is IntegrationStatus.ACTIVE
        assert integration.last_sync_at is not None
        assert integration.auth_data == {"access_token": "abc"}

    def test_connect_requires_a_name(self):
        with pytest.raises(ValueError):
            Integration.connect(name=" ", type=IntegrationType.CSV)

    def test_auth_data_is_copied(self):
        auth_data = {"access_token": "abc"}

        integration = Integration.connect(
            name="Acme", type=IntegrationType.CSV, auth_data=auth_data
        )
        auth_data["access_token"] = "changed"

        assert integration.auth_data == {"access_token": "abc"}


class TestValueObjects:
    def test_from_string_rejects_non_ulid(self):
        with pytest.raises(ValueError):
            IntegrationId.from_string("not-a-ulid")

    def test_from_string_round_trips(self):
        generated = IntegrationId.generate()

        assert IntegrationId.from_string(generated.value) == generated


class TestRecords:
    def test_employee_row_uses_status_value(self):
        record = EmployeeRecord(
            external_id="u1",
            first_name="A",
            last_name="B",
            email="a@x.io",
            status=EmployeeStatus.INACTIVE,
        )

        row = record.as_row()

        assert row["status"] == "inactive"
        assert row["external_id"] == "u1"
        assert "id" not in row

    def test_group_row(self):
        assert GroupRecord(external_id="g1", name="Eng").as_row() == {
            "external_id": "g1",
            "name": "Eng",
            "description": None,
        }
