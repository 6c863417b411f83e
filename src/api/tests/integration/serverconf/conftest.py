"""Integration test fixtures for the server configuration context."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from serverconf.domain.value_objects import SubsystemId
from serverconf.infrastructure.client_repository import ClientRepository
from serverconf.infrastructure.identifier_repository import IdentifierRepository
from serverconf.infrastructure.models import (
    ClientModel,
    EndpointModel,
    GroupMemberModel,
    IdentifierModel,
    LocalGroupModel,
    ServiceDescriptionModel,
    ServiceModel,
)

PROVIDER = SubsystemId("EE", "GOV", "1234", "provider")
RIGHTS_GIVEN = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def consumer() -> SubsystemId:
    return SubsystemId("EE", "COM", "777", "consumer")


@pytest.fixture
def client_repository(async_session: AsyncSession) -> ClientRepository:
    return ClientRepository(session=async_session)


@pytest.fixture
def identifier_repository(async_session: AsyncSession) -> IdentifierRepository:
    return IdentifierRepository(session=async_session)


@pytest_asyncio.fixture
async def provider_client(
    session_factory: async_sessionmaker[AsyncSession], clean_serverconf_data: None
) -> SubsystemId:
    """Persist a subsystem with one REST service, two endpoints and a local group.

    Returns the identity of the stored client.
    """
    async with session_factory() as session, session.begin():
        session.add(
            ClientModel(
                identifier=IdentifierModel(**IdentifierModel.natural_key(PROVIDER)),
                service_descriptions=[
                    ServiceDescriptionModel(
                        url="https://provider.example.org/openapi.yaml",
                        type="OPENAPI3",
                        disabled=False,
                        services=[
                            ServiceModel(service_code="getRandom", service_version="v1")
                        ],
                    )
                ],
                endpoints=[
                    EndpointModel(service_code="getRandom", method="*", path="**"),
                    EndpointModel(
                        service_code="getRandom", method="GET", path="/random"
                    ),
                ],
                local_groups=[
                    LocalGroupModel(
                        group_code="admins",
                        description="Administrators",
                        members=[
                            GroupMemberModel(
                                identifier=IdentifierModel(
                                    **IdentifierModel.natural_key(
                                        SubsystemId("EE", "COM", "555", "ops")
                                    )
                                ),
                                added=RIGHTS_GIVEN,
                            )
                        ],
                    )
                ],
            )
        )
    return PROVIDER
