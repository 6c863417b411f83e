"""Endpoint and service resolution for client aggregates."""

from __future__ import annotations

from serverconf.domain.aggregates import Client, Endpoint
from serverconf.domain.value_objects import ClientId
from serverconf.ports.exceptions import (
    ClientNotFoundError,
    EndpointNotFoundError,
    ServiceNotFoundError,
)
from serverconf.ports.repositories import IClientRepository


class EndpointService:
    """Locates clients and the endpoints access rights are attached to."""

    def __init__(self, client_repository: IClientRepository):
        self._client_repository = client_repository

    async def get_client(self, client_id: ClientId, for_update: bool = False) -> Client:
        """Load a client by identity.

        Raises:
            ClientNotFoundError: If the client is not configured
        """
        client = await self._client_repository.get_by_identifier(
            client_id, for_update=for_update
        )
        if client is None:
            raise ClientNotFoundError(f"Client {client_id} not found")
        return client

    async def get_client_and_endpoint(
        self, endpoint_id: int, for_update: bool = False
    ) -> tuple[Client, Endpoint]:
        """Load an endpoint together with the client owning it.

        Raises:
            EndpointNotFoundError: If no client owns the endpoint
        """
        client = await self._client_repository.get_by_endpoint_id(
            endpoint_id, for_update=for_update
        )
        endpoint = client.get_endpoint(endpoint_id) if client else None
        if client is None or endpoint is None:
            raise EndpointNotFoundError(f"Endpoint {endpoint_id} not found")
        return client, endpoint

    def get_service_base_endpoint(
        self, client: Client, full_service_code: str
    ) -> Endpoint:
        """Return the whole-service endpoint of one of the client's services.

        Raises:
            ServiceNotFoundError: If the client has no such service
            EndpointNotFoundError: If the service has no base endpoint
        """
        service = client.get_service(full_service_code)
        if service is None:
            raise ServiceNotFoundError(
                f"Service {full_service_code} not found for {client}"
            )
        endpoint = client.get_base_endpoint(service.service_code)
        if endpoint is None:
            raise EndpointNotFoundError(
                f"Base endpoint for service {full_service_code} not found"
            )
        return endpoint
