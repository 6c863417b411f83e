"""Repository protocols (ports) for the server configuration context.

Repository protocols define the interface for persisting and retrieving
aggregates and shared identifier rows. Implementations must be used inside
a transaction owned by the calling application service.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Protocol, runtime_checkable

from serverconf.domain.aggregates import Client
from serverconf.domain.value_objects import ClientId, XRoadId


@runtime_checkable
class IClientRepository(Protocol):
    """Repository for Client aggregate persistence.

    Returns fully hydrated Client aggregates (service descriptions,
    endpoints, local groups and ACL). Passing ``for_update=True`` locks the
    client row until the surrounding transaction ends, which serialises
    concurrent mutations of the same client.
    """

    async def get_by_identifier(
        self, client_id: ClientId, for_update: bool = False
    ) -> Client | None:
        """Retrieve a client by its X-Road identity.

        Returns:
            The Client aggregate, or None if not configured
        """
        ...

    async def get_by_endpoint_id(
        self, endpoint_id: int, for_update: bool = False
    ) -> Client | None:
        """Retrieve the client owning an endpoint.

        Returns:
            The Client aggregate, or None if no client owns the endpoint
        """
        ...

    async def get_by_service_description_id(
        self, service_description_id: int, for_update: bool = False
    ) -> Client | None:
        """Retrieve the client owning a service description."""
        ...

    async def save(self, client: Client) -> None:
        """Persist the mutable parts of a client aggregate.

        Synchronises the ACL and service description state with the
        database. Subjects referenced by new access rights must already
        have identifier rows (see IIdentifierRepository.get_or_persist).
        """
        ...


@runtime_checkable
class IIdentifierRepository(Protocol):
    """Store of X-Road identities that access rights may reference.

    Performs no existence validation against the global configuration;
    callers validate first.
    """

    async def get_or_persist(self, xroad_ids: Collection[XRoadId]) -> set[XRoadId]:
        """Return the persisted rows for the identities, creating missing ones.

        Idempotent: rows are matched on the full structural key, so
        repeated or overlapping calls never create duplicates.

        Args:
            xroad_ids: Identities to look up or persist

        Returns:
            The identities as persisted
        """
        ...
