"""Access right application service for the server configuration context.

Grants and revokes the rights of subsystems, global groups and local groups
to invoke a client's endpoints, and searches for subjects that could be
granted access.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import UTC, datetime

from sqlalchemy.ext.asyncio import AsyncSession

from serverconf.application.mappers import (
    global_group_to_service_client,
    local_group_to_service_client,
    map_access_rights_to_service_clients,
    member_to_service_client,
)
from serverconf.application.observability import (
    AccessRightServiceProbe,
    DefaultAccessRightServiceProbe,
)
from serverconf.application.search import filter_service_clients
from serverconf.application.services.endpoint_service import EndpointService
from serverconf.application.services.global_conf_service import GlobalConfService
from serverconf.application.services.local_group_service import LocalGroupService
from serverconf.application.value_objects import ServiceClient, ServiceClientSearch
from serverconf.domain.aggregates import AccessRight, Client, Endpoint
from serverconf.domain.value_objects import (
    ClientId,
    GlobalGroupId,
    SubsystemId,
    XRoadId,
    XRoadObjectType,
)
from serverconf.ports.exceptions import (
    AccessRightNotFoundError,
    DuplicateAccessRightError,
    IdentifierNotFoundError,
    LocalGroupNotFoundError,
    ServerConfError,
)
from serverconf.ports.repositories import IClientRepository, IIdentifierRepository


def _error_code(error: Exception) -> str:
    if isinstance(error, ServerConfError):
        return error.error_code
    return type(error).__name__


def _format_ids(xroad_ids: Collection[XRoadId]) -> str:
    return ", ".join(sorted(str(i) for i in xroad_ids))


def _partition_subjects(
    subject_ids: Collection[XRoadId],
) -> tuple[set[SubsystemId], set[GlobalGroupId]]:
    """Split subjects into subsystems and global groups.

    Raises:
        ValueError: For members and local groups, which are not accepted here
    """
    subsystems: set[SubsystemId] = set()
    global_groups: set[GlobalGroupId] = set()
    for subject_id in subject_ids:
        match subject_id.object_type:
            case XRoadObjectType.SUBSYSTEM:
                subsystems.add(subject_id)
            case XRoadObjectType.GLOBALGROUP:
                global_groups.add(subject_id)
            case XRoadObjectType.LOCALGROUP:
                raise ValueError(
                    f"Local group {subject_id} must be given by local group id"
                )
            case _:
                raise ValueError(
                    f"Subject {subject_id} of type {subject_id.object_type} "
                    "cannot be granted access rights"
                )
    return subsystems, global_groups


class AccessRightService:
    """Application service for endpoint access rights.

    Every mutation locks the client row, validates the whole batch and
    applies it inside one transaction. A failure at any step rolls back both
    the identifier rows created for the batch and the ACL changes.
    """

    def __init__(
        self,
        session: AsyncSession,
        client_repository: IClientRepository,
        identifier_repository: IIdentifierRepository,
        global_conf_service: GlobalConfService,
        endpoint_service: EndpointService | None = None,
        local_group_service: LocalGroupService | None = None,
        probe: AccessRightServiceProbe | None = None,
    ):
        """Initialize AccessRightService with dependencies.

        Args:
            session: Database session for transaction management
            client_repository: Repository for client aggregates
            identifier_repository: Store of identities referenced by ACLs
            global_conf_service: Global configuration lookups
            endpoint_service: Endpoint resolver, built from the client
                repository when omitted
            local_group_service: Local group resolver
            probe: Optional domain probe for observability
        """
        self._session = session
        self._client_repository = client_repository
        self._identifier_repository = identifier_repository
        self._global_conf_service = global_conf_service
        self._endpoint_service = endpoint_service or EndpointService(client_repository)
        self._local_group_service = local_group_service or LocalGroupService()
        self._probe = probe or DefaultAccessRightServiceProbe()

    def get_access_rights_by_endpoint(
        self, client: Client, endpoint: Endpoint
    ) -> list[AccessRight]:
        return client.access_rights_for_endpoint(endpoint)

    def map_access_rights_to_service_clients(
        self, client: Client, access_rights: list[AccessRight]
    ) -> list[ServiceClient]:
        return map_access_rights_to_service_clients(client, access_rights)

    def _endpoint_service_clients(
        self, client: Client, endpoint: Endpoint
    ) -> list[ServiceClient]:
        return self.map_access_rights_to_service_clients(
            client, self.get_access_rights_by_endpoint(client, endpoint)
        )

    async def get_endpoint_access_rights(self, endpoint_id: int) -> list[ServiceClient]:
        """Return the access rights of an endpoint.

        Raises:
            EndpointNotFoundError: If the endpoint does not exist
        """
        client, endpoint = await self._endpoint_service.get_client_and_endpoint(
            endpoint_id
        )
        return self._endpoint_service_clients(client, endpoint)

    async def get_service_access_rights(
        self, client_id: ClientId, full_service_code: str
    ) -> list[ServiceClient]:
        """Return the access rights of a service's base endpoint.

        Raises:
            ClientNotFoundError: If the client is not configured
            ServiceNotFoundError: If the client has no such service
            EndpointNotFoundError: If the service has no base endpoint
        """
        client = await self._endpoint_service.get_client(client_id)
        endpoint = self._endpoint_service.get_service_base_endpoint(
            client, full_service_code
        )
        return self._endpoint_service_clients(client, endpoint)

    async def add_endpoint_access_rights(
        self,
        endpoint_id: int,
        subject_ids: Collection[XRoadId] = frozenset(),
        local_group_ids: Collection[int] = frozenset(),
    ) -> list[ServiceClient]:
        """Grant access to an endpoint for a batch of subjects.

        Args:
            endpoint_id: The endpoint to grant access to
            subject_ids: Subsystem and global group identities
            local_group_ids: Ids of the owning client's local groups

        Returns:
            The endpoint's full access right list after the grant

        Raises:
            EndpointNotFoundError: If the endpoint does not exist
            LocalGroupNotFoundError: If a local group is not the client's own
            IdentifierNotFoundError: If a subject is not in the global configuration
            DirectoryUnavailableError: If the global configuration cannot be queried
            DuplicateAccessRightError: If a subject already has access
            ValueError: If a member or local group identity is passed as a subject
        """
        async with self._session.begin():
            client, endpoint = await self._endpoint_service.get_client_and_endpoint(
                endpoint_id, for_update=True
            )
            added = await self._grant_access_rights(
                client, endpoint, subject_ids, local_group_ids
            )

        self._report_added(client, endpoint, added)
        return self._endpoint_service_clients(client, endpoint)

    async def add_service_access_rights(
        self,
        client_id: ClientId,
        full_service_code: str,
        subject_ids: Collection[XRoadId] = frozenset(),
        local_group_ids: Collection[int] = frozenset(),
    ) -> list[ServiceClient]:
        """Grant access to a whole service for a batch of subjects.

        The rights are attached to the service's base endpoint.

        Raises:
            ClientNotFoundError: If the client is not configured
            ServiceNotFoundError: If the client has no such service
            EndpointNotFoundError: If the service has no base endpoint
            (plus every error of add_endpoint_access_rights)
        """
        async with self._session.begin():
            client = await self._endpoint_service.get_client(client_id, for_update=True)
            endpoint = self._endpoint_service.get_service_base_endpoint(
                client, full_service_code
            )
            added = await self._grant_access_rights(
                client, endpoint, subject_ids, local_group_ids
            )

        self._report_added(client, endpoint, added)
        return self._endpoint_service_clients(client, endpoint)

    async def delete_endpoint_access_rights(
        self,
        endpoint_id: int,
        subject_ids: Collection[XRoadId] = frozenset(),
        local_group_ids: Collection[int] = frozenset(),
    ) -> None:
        """Revoke the access rights of a batch of subjects on an endpoint.

        Either every requested right is removed or none is.

        Raises:
            EndpointNotFoundError: If the endpoint does not exist
            LocalGroupNotFoundError: If a local group is not the client's own
            AccessRightNotFoundError: If any subject holds no right on the endpoint
        """
        async with self._session.begin():
            client, endpoint = await self._endpoint_service.get_client_and_endpoint(
                endpoint_id, for_update=True
            )
            removed = await self._revoke_access_rights(
                client, endpoint, subject_ids, local_group_ids
            )

        self._report_removed(client, endpoint, removed)

    async def delete_service_access_rights(
        self,
        client_id: ClientId,
        full_service_code: str,
        subject_ids: Collection[XRoadId] = frozenset(),
        local_group_ids: Collection[int] = frozenset(),
    ) -> None:
        """Revoke access rights on a service's base endpoint.

        Raises:
            ClientNotFoundError: If the client is not configured
            ServiceNotFoundError: If the client has no such service
            EndpointNotFoundError: If the service has no base endpoint
            (plus every error of delete_endpoint_access_rights)
        """
        async with self._session.begin():
            client = await self._endpoint_service.get_client(client_id, for_update=True)
            endpoint = self._endpoint_service.get_service_base_endpoint(
                client, full_service_code
            )
            removed = await self._revoke_access_rights(
                client, endpoint, subject_ids, local_group_ids
            )

        self._report_removed(client, endpoint, removed)

    async def find_service_client_candidates(
        self, client_id: ClientId, search: ServiceClientSearch
    ) -> list[ServiceClient]:
        """Search subjects that could be granted access to the client's services.

        Candidates are the members and global groups of the global
        configuration plus the client's own local groups. An unreachable
        directory contributes no candidates rather than failing the search.

        Raises:
            ClientNotFoundError: If the client is not configured
        """
        client = await self._endpoint_service.get_client(client_id)

        members = await self._global_conf_service.list_members()
        global_groups = await self._global_conf_service.list_global_groups(
            search.instance
        )
        candidates = [
            *(member_to_service_client(m) for m in members),
            *(global_group_to_service_client(g) for g in global_groups),
            *(local_group_to_service_client(g) for g in client.local_groups),
        ]
        results = filter_service_clients(candidates, search)

        self._probe.service_client_candidates_found(
            client_id=str(client.identifier),
            candidate_count=len(candidates),
            result_count=len(results),
        )
        return results

    async def _grant_access_rights(
        self,
        client: Client,
        endpoint: Endpoint,
        subject_ids: Collection[XRoadId],
        local_group_ids: Collection[int],
    ) -> list[AccessRight]:
        try:
            local_groups = self._local_group_service.resolve_to_identifiers(
                client, local_group_ids
            )
            subsystems, global_groups = _partition_subjects(subject_ids)

            # Validate against the directory before anything is persisted
            if not await self._global_conf_service.client_identifiers_exist(
                subsystems
            ):
                raise IdentifierNotFoundError(
                    f"Subsystems not found in global configuration: "
                    f"{_format_ids(subsystems)}"
                )
            if not await self._global_conf_service.global_group_identifiers_exist(
                global_groups
            ):
                raise IdentifierNotFoundError(
                    f"Global groups not found in global configuration: "
                    f"{_format_ids(global_groups)}"
                )

            requested: set[XRoadId] = subsystems | global_groups | local_groups
            if not requested:
                return []
            subjects = await self._identifier_repository.get_or_persist(requested)

            foreign = [
                s
                for s in subjects
                if s.object_type == XRoadObjectType.LOCALGROUP
                and not client.owns_local_group(s)
            ]
            if foreign:
                raise LocalGroupNotFoundError(
                    f"Local groups {_format_ids(foreign)} not found for {client}"
                )

            duplicates = [s for s in subjects if client.has_access_right(endpoint, s)]
            if duplicates:
                raise DuplicateAccessRightError(
                    f"Subjects {_format_ids(duplicates)} already have access to "
                    f"endpoint {endpoint.id}"
                )

            added = client.grant_access_rights(
                endpoint, sorted(subjects, key=str), rights_given=datetime.now(UTC)
            )
            await self._client_repository.save(client)
            return added

        except Exception as e:
            self._probe.access_rights_add_failed(
                client_id=str(client.identifier),
                endpoint_id=endpoint.id,
                error_code=_error_code(e),
                error=str(e),
            )
            raise

    async def _revoke_access_rights(
        self,
        client: Client,
        endpoint: Endpoint,
        subject_ids: Collection[XRoadId],
        local_group_ids: Collection[int],
    ) -> list[AccessRight]:
        try:
            to_remove: set[XRoadId] = set(subject_ids)
            to_remove |= self._local_group_service.resolve_to_identifiers(
                client, local_group_ids
            )
            if not to_remove:
                return []

            matched = [
                right
                for right in self.get_access_rights_by_endpoint(client, endpoint)
                if right.subject_id in to_remove
            ]
            if len(matched) != len(to_remove):
                missing = to_remove - {right.subject_id for right in matched}
                raise AccessRightNotFoundError(
                    f"Subjects {_format_ids(missing)} have no access right to "
                    f"endpoint {endpoint.id}"
                )

            removed = client.revoke_access_rights(endpoint, to_remove)
            await self._client_repository.save(client)
            return removed

        except Exception as e:
            self._probe.access_rights_remove_failed(
                client_id=str(client.identifier),
                endpoint_id=endpoint.id,
                error_code=_error_code(e),
                error=str(e),
            )
            raise

    def _report_added(
        self, client: Client, endpoint: Endpoint, added: list[AccessRight]
    ) -> None:
        if added:
            self._probe.access_rights_added(
                client_id=str(client.identifier),
                endpoint_id=endpoint.id,
                subject_ids=[str(right.subject_id) for right in added],
            )

    def _report_removed(
        self, client: Client, endpoint: Endpoint, removed: list[AccessRight]
    ) -> None:
        if removed:
            self._probe.access_rights_removed(
                client_id=str(client.identifier),
                endpoint_id=endpoint.id,
                subject_ids=[str(right.subject_id) for right in removed],
            )
