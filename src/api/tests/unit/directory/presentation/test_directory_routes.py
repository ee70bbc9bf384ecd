"""Unit tests for directory HTTP routes."""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from directory.domain.aggregates import Employee, Group, Integration
from directory.domain.exceptions import InvalidEmployeeError, InvalidGroupError
from directory.domain.value_objects import (
    EmployeeId,
    EmployeeStatus,
    IntegrationId,
    IntegrationType,
)
from directory.ports.exceptions import EmployeeNotFoundError, IntegrationNotFoundError


@pytest.fixture
def mock_employee_service():
    return Mock()


@pytest.fixture
def mock_group_service():
    return Mock()


@pytest.fixture
def mock_integration_service():
    return Mock()


@pytest.fixture
def test_client(mock_employee_service, mock_group_service, mock_integration_service):
    """Create TestClient with mocked dependencies."""
    from fastapi import FastAPI

    from directory.dependencies.employee import get_employee_service
    from directory.dependencies.group import get_group_service
    from directory.dependencies.integration import get_integration_service
    from directory.presentation import router

    app = FastAPI()

    app.dependency_overrides[get_employee_service] = lambda: mock_employee_service
    app.dependency_overrides[get_group_service] = lambda: mock_group_service
    app.dependency_overrides[get_integration_service] = (
        lambda: mock_integration_service
    )

    app.include_router(router)

    return TestClient(app)


@pytest.fixture
def employee() -> Employee:
    return Employee.create_manual(
        first_name="Ada", last_name="Lovelace", email="ada@example.com"
    )


class TestEmployeeRoutes:
    def test_list_passes_filters(self, test_client, mock_employee_service, employee):
        mock_employee_service.list_employees = AsyncMock(return_value=[employee])

        response = test_client.get(
            "/employees", params={"search": "ada", "status": "active", "limit": 5}
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body[0]["full_name"] == "Ada Lovelace"
        kwargs = mock_employee_service.list_employees.call_args.kwargs
        assert kwargs["search"] == "ada"
        assert kwargs["status"] is EmployeeStatus.ACTIVE
        assert kwargs["limit"] == 5

    def test_list_rejects_bad_integration_id(self, test_client):
        response = test_client.get("/employees", params={"integration_id": "nope"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create(self, test_client, mock_employee_service, employee):
        mock_employee_service.create_employee = AsyncMock(return_value=employee)

        response = test_client.post(
            "/employees",
            json={"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["id"] == employee.id.value

    def test_create_invalid_is_422(self, test_client, mock_employee_service):
        mock_employee_service.create_employee = AsyncMock(
            side_effect=InvalidEmployeeError("Missing required employee fields: email")
        )

        response = test_client.post(
            "/employees", json={"first_name": "Ada", "last_name": "Lovelace"}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT
        assert "email" in response.json()["detail"]

    def test_get_not_found(self, test_client, mock_employee_service):
        mock_employee_service.get_employee = AsyncMock(return_value=None)

        response = test_client.get(f"/employees/{EmployeeId.generate()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_get_malformed_id(self, test_client):
        response = test_client.get("/employees/not-a-ulid")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_patch_sends_only_given_fields(
        self, test_client, mock_employee_service, employee
    ):
        mock_employee_service.update_employee = AsyncMock(return_value=employee)

        response = test_client.patch(
            f"/employees/{employee.id}", json={"department": "Analytics"}
        )

        assert response.status_code == status.HTTP_200_OK
        mock_employee_service.update_employee.assert_awaited_once_with(
            employee.id, department="Analytics"
        )

    def test_patch_not_found(self, test_client, mock_employee_service):
        mock_employee_service.update_employee = AsyncMock(
            side_effect=EmployeeNotFoundError("gone")
        )

        response = test_client.patch(
            f"/employees/{EmployeeId.generate()}", json={"phone": "1"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestGroupRoutes:
    def test_create(self, test_client, mock_group_service):
        group = Group.create_manual(name="Engineering")
        mock_group_service.create_group = AsyncMock(return_value=group)

        response = test_client.post("/groups", json={"name": "Engineering"})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["name"] == "Engineering"

    def test_create_without_name_is_422(self, test_client, mock_group_service):
        mock_group_service.create_group = AsyncMock(
            side_effect=InvalidGroupError("Group name is required")
        )

        response = test_client.post("/groups", json={"name": ""})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_CONTENT

    def test_list(self, test_client, mock_group_service):
        mock_group_service.list_groups = AsyncMock(return_value=[])

        response = test_client.get("/groups", params={"search": "eng"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []


class TestIntegrationRoutes:
    def test_list_hides_credentials(self, test_client, mock_integration_service):
        integration = Integration.connect(
            name="Acme",
            type=IntegrationType.GOOGLE_WORKSPACE,
            auth_data={"access_token": "secret"},
        )
        mock_integration_service.list_integrations = AsyncMock(
            return_value=[integration]
        )

        response = test_client.get("/integrations")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body[0]["name"] == "Acme"
        assert "auth_data" not in body[0]
        assert "secret" not in response.text

    def test_stats(self, test_client, mock_integration_service):
        integration_id = IntegrationId.generate()
        mock_integration_service.get_stats = AsyncMock(
            return_value={
                "integration_id": integration_id.value,
                "name": "Acme",
                "type": "csv",
                "total_employees": 2,
                "employees_by_status": {"active": 2, "inactive": 0, "terminated": 0},
                "total_groups": 0,
            }
        )

        response = test_client.get(f"/integrations/{integration_id}/stats")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["employees_by_status"]["active"] == 2

    def test_stats_not_found(self, test_client, mock_integration_service):
        mock_integration_service.get_stats = AsyncMock(
            side_effect=IntegrationNotFoundError("gone")
        )

        response = test_client.get(f"/integrations/{IntegrationId.generate()}/stats")

        assert response.status_code == status.HTTP_404_NOT_FOUND
