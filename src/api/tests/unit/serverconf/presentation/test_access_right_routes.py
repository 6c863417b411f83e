"""Unit tests for access right HTTP routes.

Tests the presentation layer for endpoint and service access rights and
the service client search, including error to status code mapping.
"""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from serverconf.application.services import AccessRightService
from serverconf.application.value_objects import ServiceClient, ServiceClientSearch
from serverconf.domain.value_objects import (
    GlobalGroupId,
    LocalGroupId,
    SubsystemId,
    XRoadObjectType,
)
from serverconf.ports.exceptions import (
    AccessRightNotFoundError,
    ClientLockedError,
    DirectoryUnavailableError,
    DuplicateAccessRightError,
    EndpointNotFoundError,
    IdentifierNotFoundError,
    LocalGroupNotFoundError,
)

RIGHTS_GIVEN = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)
CONSUMER = SubsystemId("EE", "COM", "777", "consumer")


@pytest.fixture
def mock_access_right_service() -> AsyncMock:
    """Mock AccessRightService for testing."""
    return AsyncMock(spec=AccessRightService)


@pytest.fixture
def test_client(mock_access_right_service: AsyncMock) -> TestClient:
    """Create TestClient with mocked dependencies."""
    from serverconf.dependencies.access_right import (
        get_access_right_query_service,
        get_access_right_service,
    )
    from serverconf.presentation import router

    app = FastAPI()

    app.dependency_overrides[get_access_right_service] = (
        lambda: mock_access_right_service
    )
    app.dependency_overrides[get_access_right_query_service] = (
        lambda: mock_access_right_service
    )

    app.include_router(router)

    return TestClient(app)


class TestGetEndpointAccessRights:
    """Tests for GET /api/endpoints/{id}/access-rights."""

    def test_returns_service_clients(
        self, test_client: TestClient, mock_access_right_service: AsyncMock
    ) -> None:
        """Should return access rights with empty fields omitted."""
        mock_access_right_service.get_endpoint_access_rights.return_value = [
            ServiceClient(
                subject_id=CONSUMER,
                rights_given=RIGHTS_GIVEN,
                member_name="Consumer Corp",
            ),
            ServiceClient(
                subject_id=LocalGroupId("admins"),
                rights_given=RIGHTS_GIVEN,
                local_group_id=5,
                local_group_code="admins",
                local_group_description="Administrators",
            ),
        ]

        response = test_client.get("/api/endpoints/1000/access-rights")

        assert response.status_code == status.HTTP_200_OK
        result = response.json()
        assert result[0] == {
            "subject_type": "SUBSYSTEM",
            "subject_id": "EE:COM/777:consumer",
            "rights_given": "2026-01-15T12:00:00Z",
            "member_name": "Consumer Corp",
        }
        assert result[1]["local_group_id"] == 5
        assert result[1]["subject_id"] == "admins"
        mock_access_right_service.get_endpoint_access_rights.assert_called_once_with(
            1000
        )

    @pytest.mark.parametrize(
        "endpoint_id", ["abc", "\u00b2", "-1", "9223372036854775808"]
    )
    def test_non_numeric_id_returns_404(
        self,
        test_client: TestClient,
        mock_access_right_service: AsyncMock,
        endpoint_id: str,
    ) -> None:
        response = test_client.get(f"/api/endpoints/{endpoint_id}/access-rights")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"]["code"] == "endpoint_not_found"
        mock_access_right_service.get_endpoint_access_rights.assert_not_called()

    def test_unknown_endpoint_returns_404(
        self, test_client: TestClient, mock_access_right_service: AsyncMock
    ) -> None:
        mock_access_right_service.get_endpoint_access_rights.side_effect = (
            EndpointNotFoundError("Endpoint 9 not found")
        )

        response = test_client.get("/api/endpoints/9/access-rights")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == {
            "code": "endpoint_not_found",
            "message": "Endpoint 9 not found",
        }


class TestAddEndpointAccessRights:
    """Tests for POST /api/endpoints/{id}/access-rights."""

    def test_passes_subjects_and_local_groups(
        self, test_client: TestClient, mock_access_right_service: AsyncMock
    ) -> None:
        """Should split items into identities and local group ids."""
        mock_access_right_service.add_endpoint_access_rights.return_value = []

        response = test_client.post(
            "/api/endpoints/1000/access-rights",
            json={
                "items": [
                    {"subject_type": "SUBSYSTEM", "subject_id": "EE:COM/777:consumer"},
                    {"subject_type": "GLOBALGROUP", "subject_id": "EE:security-servers"},
                    {"subject_type": "LOCALGROUP", "local_group_id": 5},
                ]
            },
        )

        assert response.status_code == status.HTTP_200_OK
        mock_access_right_service.add_endpoint_access_rights.assert_called_once_with(
            1000,
            subject_ids={CONSUMER, GlobalGroupId("EE", "security-servers")},
            local_group_ids={5},
        )

    def test_member_subject_returns_400(
        self, test_client: TestClient, mock_access_right_service: AsyncMock
    ) -> None:
        response = test_client.post(
            "/api/endpoints/1000/access-rights",
            json={"items": [{"subject_type": "MEMBER", "subject_id": "EE:COM/777"}]},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"]["code"] == "invalid_request"
        mock_access_right_service.add_endpoint_access_rights.assert_not_called()

    def test_empty_items_returns_422(self, test_client: TestClient) -> None:
        response = test_client.post(
            "/api/endpoints/1000/access-rights", json={"items": []}
        )

        assert response.status_code == 422

    @pytest.mark.parametrize(
        ("error", "expected_status", "expected_code"),
        [
            (
                IdentifierNotFoundError("missing"),
                status.HTTP_400_BAD_REQUEST,
                "identifier_not_found",
            ),
            (
                LocalGroupNotFoundError("missing"),
                status.HTTP_404_NOT_FOUND,
                "local_group_not_found",
            ),
            (
                DuplicateAccessRightError("dup"),
                status.HTTP_409_CONFLICT,
                "duplicate_accessright",
            ),
            (
                DirectoryUnavailableError("down"),
                status.HTTP_503_SERVICE_UNAVAILABLE,
                "global_conf_unavailable",
            ),
            (
                ClientLockedError("busy"),
                status.HTTP_409_CONFLICT,
                "client_locked",
            ),
        ],
    )
    def test_maps_errors_to_status_codes(
        self,
        test_client: TestClient,
        mock_access_right_service: AsyncMock,
        error: Exception,
        expected_status: int,
        expected_code: str,
    ) -> None:
        mock_access_right_service.add_endpoint_access_rights.side_effect = error

        response = test_client.post(
            "/api/endpoints/1000/access-rights",
            json={"items": [{"subject_type": "LOCALGROUP", "local_group_id": 5}]},
        )

        assert response.status_code == expected_status
        assert response.json()["detail"]["code"] == expected_code

    def test_unexpected_error_returns_500(
        self, test_client: TestClient, mock_access_right_service: AsyncMock
    ) -> None:
        mock_access_right_service.add_endpoint_access_rights.side_effect = (
            RuntimeError("boom")
        )

        response = test_client.post(
            "/api/endpoints/1000/access-rights",
            json={"items": [{"subject_type": "LOCALGROUP", "local_group_id": 5}]},
        )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json()["detail"] == "Failed to add access rights"


class TestDeleteEndpointAccessRights:
    """Tests for DELETE /api/endpoints/{id}/access-rights."""

    def test_returns_204(
        self, test_client: TestClient, mock_access_right_service: AsyncMock
    ) -> None:
        mock_access_right_service.delete_endpoint_access_rights.return_value = []

        response = test_client.request(
            "DELETE",
            "/api/endpoints/1000/access-rights",
            json={"items": [{"subject_type": "LOCALGROUP", "local_group_id": 5}]},
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        mock_access_right_service.delete_endpoint_access_rights.assert_called_once_with(
            1000, subject_ids=set(), local_group_ids={5}
        )

    def test_missing_access_right_returns_404(
        self, test_client: TestClient, mock_access_right_service: AsyncMock
    ) -> None:
        mock_access_right_service.delete_endpoint_access_rights.side_effect = (
            AccessRightNotFoundError("not held")
        )

        response = test_client.request(
            "DELETE",
            "/api/endpoints/1000/access-rights",
            json={
                "items": [
                    {"subject_type": "SUBSYSTEM", "subject_id": "EE:COM/777:consumer"}
                ]
            },
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"]["code"] == "accessright_not_found"


class TestServiceAccessRights:
    """Tests for /api/clients/{client_id}/services/{code}/access-rights."""

    def test_get_parses_client_id(
        self, test_client: TestClient, mock_access_right_service: AsyncMock
    ) -> None:
        mock_access_right_service.get_service_access_rights.return_value = []

        response = test_client.get(
            "/api/clients/EE:GOV:1234:provider/services/getRandom.v1/access-rights"
        )

        assert response.status_code == status.HTTP_200_OK
        mock_access_right_service.get_service_access_rights.assert_called_once_with(
            SubsystemId("EE", "GOV", "1234", "provider"), "getRandom.v1"
        )

    def test_invalid_client_id_returns_400(
        self, test_client: TestClient, mock_access_right_service: AsyncMock
    ) -> None:
        response = test_client.get("/api/clients/EE:GOV/services/x/access-rights")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"]["code"] == "invalid_client_id"
        mock_access_right_service.get_service_access_rights.assert_not_called()

    def test_add_returns_full_list(
        self, test_client: TestClient, mock_access_right_service: AsyncMock
    ) -> None:
        mock_access_right_service.add_service_access_rights.return_value = [
            ServiceClient(subject_id=CONSUMER, rights_given=RIGHTS_GIVEN)
        ]

        response = test_client.post(
            "/api/clients/EE:GOV:1234/services/getRandom/access-rights",
            json={
                "items": [
                    {"subject_type": "SUBSYSTEM", "subject_id": "EE:COM/777:consumer"}
                ]
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert [c["subject_id"] for c in response.json()] == ["EE:COM/777:consumer"]

    def test_delete_returns_204(
        self, test_client: TestClient, mock_access_right_service: AsyncMock
    ) -> None:
        response = test_client.request(
            "DELETE",
            "/api/clients/EE:GOV:1234/services/getRandom/access-rights",
            json={"items": [{"subject_type": "LOCALGROUP", "local_group_id": 5}]},
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT


class TestFindServiceClientCandidates:
    """Tests for GET /api/clients/{client_id}/service-clients."""

    def test_builds_search_from_query(
        self, test_client: TestClient, mock_access_right_service: AsyncMock
    ) -> None:
        mock_access_right_service.find_service_client_candidates.return_value = [
            ServiceClient(subject_id=CONSUMER, member_name="Consumer Corp")
        ]

        response = test_client.get(
            "/api/clients/EE:GOV:1234:provider/service-clients",
            params={"subject_type": "SUBSYSTEM", "q": "corp", "instance": "ee"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == [
            {
                "subject_type": "SUBSYSTEM",
                "subject_id": "EE:COM/777:consumer",
                "member_name": "Consumer Corp",
            }
        ]
        mock_access_right_service.find_service_client_candidates.assert_called_once_with(
            SubsystemId("EE", "GOV", "1234", "provider"),
            ServiceClientSearch(
                subject_type=XRoadObjectType.SUBSYSTEM,
                name_or_description="corp",
                instance="ee",
            ),
        )
