"""Shared fixtures for server configuration unit tests."""

from datetime import UTC, datetime

import pytest

from serverconf.domain.aggregates import (
    Client,
    Endpoint,
    LocalGroup,
    Service,
    ServiceDescription,
    ServiceDescriptionType,
)
from serverconf.domain.value_objects import GlobalGroupId, MemberId, SubsystemId


@pytest.fixture
def rights_given() -> datetime:
    return datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def client_identifier() -> SubsystemId:
    return SubsystemId("EE", "GOV", "1234", "provider")


@pytest.fixture
def base_endpoint() -> Endpoint:
    return Endpoint(id=1000, service_code="getRandom")


@pytest.fixture
def path_endpoint() -> Endpoint:
    return Endpoint(id=1001, service_code="getRandom", method="GET", path="/random")


@pytest.fixture
def admins_group() -> LocalGroup:
    return LocalGroup(
        id=5,
        group_code="admins",
        description="Administrators",
        members=frozenset({SubsystemId("EE", "COM", "555", "ops")}),
    )


@pytest.fixture
def client(client_identifier, base_endpoint, path_endpoint, admins_group) -> Client:
    """A subsystem with one REST service, two endpoints and one local group."""
    return Client(
        id=1,
        identifier=client_identifier,
        service_descriptions=[
            ServiceDescription(
                id=10,
                url="https://provider.example.org/openapi.yaml",
                type=ServiceDescriptionType.OPENAPI3,
                services=[
                    Service(id=100, service_code="getRandom", service_version="v1")
                ],
            )
        ],
        endpoints=[base_endpoint, path_endpoint],
        local_groups=[admins_group],
    )


@pytest.fixture
def consumer() -> SubsystemId:
    return SubsystemId("EE", "COM", "777", "consumer")


@pytest.fixture
def other_consumer() -> SubsystemId:
    return SubsystemId("FI", "ORG", "888", "reporting")


@pytest.fixture
def global_group() -> GlobalGroupId:
    return GlobalGroupId("EE", "security-servers")


@pytest.fixture
def member() -> MemberId:
    return MemberId("EE", "COM", "777")
