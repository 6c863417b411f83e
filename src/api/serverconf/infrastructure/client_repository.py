"""PostgreSQL implementation of IClientRepository.

Loads the complete client aggregate eagerly (async sessions cannot lazy
load) and writes back the parts of it that use cases mutate: the ACL and
the state of service descriptions.
"""

from __future__ import annotations

from sqlalchemy import Select, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from infrastructure.database.exceptions import InconsistentStateError
from serverconf.domain.aggregates import (
    AccessRight,
    Client,
    Endpoint,
    LocalGroup,
    Service,
    ServiceDescription,
    ServiceDescriptionType,
)
from serverconf.domain.value_objects import ClientId, XRoadId
from serverconf.infrastructure.models import (
    AccessRightModel,
    ClientModel,
    EndpointModel,
    GroupMemberModel,
    IdentifierModel,
    LocalGroupModel,
    ServiceDescriptionModel,
    ServiceModel,
)
from serverconf.infrastructure.observability import (
    ClientRepositoryProbe,
    DefaultClientRepositoryProbe,
)
from serverconf.ports.exceptions import ClientLockedError
from serverconf.ports.repositories import IClientRepository

# PostgreSQL lock_not_available, raised when lock_timeout expires
LOCK_NOT_AVAILABLE = "55P03"


def _aggregate_options():
    return (
        joinedload(ClientModel.identifier, innerjoin=True),
        selectinload(ClientModel.service_descriptions).selectinload(
            ServiceDescriptionModel.services
        ),
        selectinload(ClientModel.endpoints),
        selectinload(ClientModel.local_groups)
        .selectinload(LocalGroupModel.members)
        .joinedload(GroupMemberModel.identifier),
        selectinload(ClientModel.access_rights).joinedload(AccessRightModel.subject),
    )


class ClientRepository(IClientRepository):
    """Repository for Client aggregates backed by PostgreSQL.

    Locking reads use ``SELECT ... FOR UPDATE OF client``; the lock is held
    until the caller's transaction ends.
    """

    def __init__(
        self,
        session: AsyncSession,
        probe: ClientRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with database session.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultClientRepositoryProbe()

    async def get_by_identifier(
        self, client_id: ClientId, for_update: bool = False
    ) -> Client | None:
        identifier_ids = select(IdentifierModel.id).where(
            IdentifierModel.natural_key_in([client_id])
        )
        stmt = select(ClientModel).where(ClientModel.identifier_id.in_(identifier_ids))
        return await self._load(stmt, for_update, "identifier", str(client_id))

    async def get_by_endpoint_id(
        self, endpoint_id: int, for_update: bool = False
    ) -> Client | None:
        owner = select(EndpointModel.client_id).where(EndpointModel.id == endpoint_id)
        stmt = select(ClientModel).where(ClientModel.id.in_(owner))
        return await self._load(stmt, for_update, "endpoint_id", str(endpoint_id))

    async def get_by_service_description_id(
        self, service_description_id: int, for_update: bool = False
    ) -> Client | None:
        owner = select(ServiceDescriptionModel.client_id).where(
            ServiceDescriptionModel.id == service_description_id
        )
        stmt = select(ClientModel).where(ClientModel.id.in_(owner))
        return await self._load(
            stmt, for_update, "service_description_id", str(service_description_id)
        )

    async def save(self, client: Client) -> None:
        """Write the ACL and service description state of a client.

        Raises:
            InconsistentStateError: If the client row is gone, or a new access
                right references a subject without an identifier row
        """
        model = await self._session.get(
            ClientModel, client.id, options=_aggregate_options()
        )
        if model is None:
            raise InconsistentStateError(f"Client row {client.id} does not exist")

        desired = {(r.endpoint.id, r.subject_id): r for r in client.acl}
        existing = {(m.endpoint_id, m.subject.to_domain()): m for m in model.access_rights}

        removed = [m for key, m in existing.items() if key not in desired]
        for access_right_model in removed:
            model.access_rights.remove(access_right_model)

        added = [r for key, r in desired.items() if key not in existing]
        if added:
            subjects = await self._identifier_models({r.subject_id for r in added})
            for access_right in added:
                model.access_rights.append(
                    self._to_access_right_model(model, access_right, subjects)
                )

        self._sync_service_descriptions(model, client)
        await self._session.flush()

        self._probe.client_saved(
            client_id=str(client.identifier), added=len(added), removed=len(removed)
        )

    async def _load(
        self, stmt: Select, for_update: bool, lookup: str, value: str
    ) -> Client | None:
        stmt = stmt.options(*_aggregate_options())
        if for_update:
            stmt = stmt.with_for_update(of=ClientModel).execution_options(
                populate_existing=True
            )
        try:
            result = await self._session.execute(stmt)
        except DBAPIError as e:
            if getattr(e.orig, "sqlstate", None) != LOCK_NOT_AVAILABLE:
                raise
            self._probe.client_lock_timed_out(lookup=lookup, value=value)
            raise ClientLockedError(
                f"Client with {lookup} {value} is locked by another change"
            ) from e
        model = result.unique().scalar_one_or_none()

        if model is None:
            self._probe.client_not_found(lookup=lookup, value=value)
            return None

        client = self._to_domain(model)
        self._probe.client_retrieved(
            client_id=str(client.identifier), access_right_count=len(client.acl)
        )
        return client

    async def _identifier_models(
        self, xroad_ids: set[XRoadId]
    ) -> dict[XRoadId, IdentifierModel]:
        result = await self._session.execute(
            select(IdentifierModel).where(IdentifierModel.natural_key_in(xroad_ids))
        )
        models = {m.to_domain(): m for m in result.scalars().all()}
        missing = xroad_ids - models.keys()
        if missing:
            raise InconsistentStateError(
                "Access right subjects have no identifier row: "
                + ", ".join(sorted(str(i) for i in missing))
            )
        return models

    @staticmethod
    def _to_access_right_model(
        model: ClientModel,
        access_right: AccessRight,
        subjects: dict[XRoadId, IdentifierModel],
    ) -> AccessRightModel:
        return AccessRightModel(
            client_id=model.id,
            endpoint_id=access_right.endpoint.id,
            subject=subjects[access_right.subject_id],
            rights_given=access_right.rights_given,
        )

    @staticmethod
    def _sync_service_descriptions(model: ClientModel, client: Client) -> None:
        for description_model in model.service_descriptions:
            description = client.get_service_description(description_model.id)
            if description is None:
                continue
            description_model.disabled = description.disabled
            description_model.disabled_notice = description.disabled_notice

    @staticmethod
    def _to_domain(model: ClientModel) -> Client:
        endpoints = [
            Endpoint(
                id=e.id,
                service_code=e.service_code,
                method=e.method,
                path=e.path,
                generated=e.generated,
            )
            for e in model.endpoints
        ]
        endpoints_by_id = {e.id: e for e in endpoints}

        return Client(
            id=model.id,
            identifier=model.identifier.to_domain(),
            service_descriptions=[
                ServiceDescription(
                    id=d.id,
                    url=d.url,
                    type=ServiceDescriptionType(d.type),
                    services=[
                        Service(
                            id=s.id,
                            service_code=s.service_code,
                            service_version=s.service_version,
                            title=s.title,
                        )
                        for s in d.services
                    ],
                    disabled=d.disabled,
                    disabled_notice=d.disabled_notice,
                )
                for d in model.service_descriptions
            ],
            endpoints=endpoints,
            local_groups=[
                LocalGroup(
                    id=g.id,
                    group_code=g.group_code,
                    description=g.description,
                    members=frozenset(m.identifier.to_domain() for m in g.members),
                    updated_at=g.updated,
                )
                for g in model.local_groups
            ],
            acl=[
                AccessRight(
                    endpoint=endpoints_by_id[r.endpoint_id],
                    subject_id=r.subject.to_domain(),
                    rights_given=r.rights_given,
                )
                for r in sorted(model.access_rights, key=lambda r: r.id)
            ],
        )
