"""Unit tests for provider payload normalization."""

from connectors.domain.normalization import (
    UNNAMED_GROUP,
    normalize_csv_row,
    normalize_google_group,
    normalize_google_user,
    normalize_microsoft_group,
    normalize_microsoft_user,
)
from directory.domain.value_objects import EmployeeStatus


class TestGoogleUser:
    """Admin SDK users resource."""

    def test_maps_full_payload(self):
        record = normalize_google_user(
            {
                "id": "g-1",
                "primaryEmail": "ada@acme.test",
                "name": {"givenName": "Ada", "familyName": "Lovelace"},
                "organizations": [{"title": "Engineer", "department": "R&D"}],
                "phones": [{"value": "+1 555 0100"}, {"value": "+1 555 0199"}],
                "suspended": False,
            }
        )

        assert record is not None
        assert record.external_id == "g-1"
        assert record.employee_id == "g-1"
        assert record.first_name == "Ada"
        assert record.last_name == "Lovelace"
        assert record.email == "ada@acme.test"
        assert record.job_title == "Engineer"
        assert record.department == "R&D"
        assert record.phone == "+1 555 0100"
        assert record.manager_email is None
        assert record.status is EmployeeStatus.ACTIVE

    def test_suspended_user_is_inactive(self):
        record = normalize_google_user({"id": "g-2", "suspended": True})

        assert record.status is EmployeeStatus.INACTIVE

    def test_missing_optional_fields_become_empty(self):
        record = normalize_google_user({"id": "g-3"})

        assert record.first_name == ""
        assert record.last_name == ""
        assert record.job_title is None
        assert record.phone is None

    def test_payload_without_id_is_dropped(self):
        assert normalize_google_user({"primaryEmail": "x@acme.test"}) is None


class TestMicrosoftUser:
    """Graph user resource."""

    def test_prefers_mail_over_principal_name(self):
        record = normalize_microsoft_user(
            {
                "id": "m-1",
                "givenName": "Grace",
                "surname": "Hopper",
                "mail": "grace@acme.test",
                "userPrincipalName": "ghopper@acme.onmicrosoft.com",
            }
        )

        assert record.email == "grace@acme.test"
        assert record.first_name == "Grace"
        assert record.last_name == "Hopper"

    def test_falls_back_to_principal_name(self):
        record = normalize_microsoft_user(
            {"id": "m-2", "mail": None, "userPrincipalName": "upn@acme.test"}
        )

        assert record.email == "upn@acme.test"

    def test_phone_prefers_mobile_then_business(self):
        mobile = normalize_microsoft_user(
            {"id": "m-3", "mobilePhone": "111", "businessPhones": ["222"]}
        )
        business = normalize_microsoft_user(
            {"id": "m-4", "mobilePhone": None, "businessPhones": ["222", "333"]}
        )

        assert mobile.phone == "111"
        assert business.phone == "222"

    def test_disabled_account_is_inactive(self):
        disabled = normalize_microsoft_user({"id": "m-5", "accountEnabled": False})
        unknown = normalize_microsoft_user({"id": "m-6"})

        assert disabled.status is EmployeeStatus.INACTIVE
        assert unknown.status is EmployeeStatus.ACTIVE

    def test_reads_expanded_manager_email(self):
        record = normalize_microsoft_user(
            {"id": "m-7", "manager": {"id": "m-0", "mail": "boss@acme.test"}}
        )

        assert record.manager_email == "boss@acme.test"


class TestGroups:
    """Group normalization for both providers."""

    def test_google_group(self):
        record = normalize_google_group(
            {"id": "gg-1", "name": "Engineering", "description": "All engineers"}
        )

        assert record.external_id == "gg-1"
        assert record.name == "Engineering"
        assert record.description == "All engineers"

    def test_microsoft_group_uses_display_name(self):
        record = normalize_microsoft_group({"id": "mg-1", "displayName": "Sales"})

        assert record.name == "Sales"
        assert record.description is None

    def test_missing_name_uses_placeholder(self):
        assert normalize_google_group({"id": "gg-2"}).name == UNNAMED_GROUP
        assert normalize_microsoft_group({"id": "mg-2", "displayName": ""}).name == (
            UNNAMED_GROUP
        )


class TestCsvRow:
    """CSV rows mapped by header name."""

    def test_maps_headers_case_insensitively(self):
        record = normalize_csv_row(
            {
                "First Name": "Alan",
                "Last Name": "Turing",
                "Email": "alan@acme.test",
                "Job Title": "Researcher",
                "Employee ID": "E-7",
            }
        )

        assert record.first_name == "Alan"
        assert record.last_name == "Turing"
        assert record.job_title == "Researcher"
        assert record.employee_id == "E-7"
        assert record.external_id == "E-7"

    def test_row_without_email_is_skipped(self):
        assert normalize_csv_row({"first_name": "No", "email": "  "}) is None

    def test_external_id_falls_back_to_email(self):
        record = normalize_csv_row({"email": "Someone@Acme.test"})

        assert record.external_id == "someone@acme.test"

    def test_unknown_status_defaults_to_active(self):
        terminated = normalize_csv_row({"email": "a@acme.test", "status": "Terminated"})
        unknown = normalize_csv_row({"email": "b@acme.test", "status": "on leave"})

        assert terminated.status is EmployeeStatus.TERMINATED
        assert unknown.status is EmployeeStatus.ACTIVE
