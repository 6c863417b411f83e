"""Service description application service.

Enables and disables service descriptions. A disabled description keeps
its services and access rights, but the security server stops serving
requests to them and answers with the disabled notice instead.
"""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy.ext.asyncio import AsyncSession

from serverconf.application.observability import (
    DefaultServiceDescriptionServiceProbe,
    ServiceDescriptionServiceProbe,
)
from serverconf.domain.aggregates import ServiceDescription
from serverconf.ports.exceptions import ServiceDescriptionNotFoundError
from serverconf.ports.repositories import IClientRepository


class ServiceDescriptionService:
    """Application service for service description state changes."""

    def __init__(
        self,
        session: AsyncSession,
        client_repository: IClientRepository,
        probe: ServiceDescriptionServiceProbe | None = None,
    ):
        self._session = session
        self._client_repository = client_repository
        self._probe = probe or DefaultServiceDescriptionServiceProbe()

    async def enable_service_descriptions(
        self, service_description_ids: Collection[int]
    ) -> None:
        """Enable a batch of service descriptions.

        Raises:
            ServiceDescriptionNotFoundError: If any id does not resolve
        """
        ids = sorted(set(service_description_ids))
        try:
            async with self._session.begin():
                for service_description_id in ids:
                    await self._update(service_description_id, lambda d: d.enable())
        except Exception as e:
            self._probe.service_description_update_failed(
                service_description_ids=ids, error=str(e)
            )
            raise

        self._probe.service_descriptions_enabled(service_description_ids=ids)

    async def disable_service_descriptions(
        self,
        service_description_ids: Collection[int],
        disabled_notice: str | None = None,
    ) -> None:
        """Disable a batch of service descriptions.

        Args:
            service_description_ids: Ids of the descriptions to disable
            disabled_notice: Message returned to clients calling the services

        Raises:
            ServiceDescriptionNotFoundError: If any id does not resolve
        """
        ids = sorted(set(service_description_ids))
        try:
            async with self._session.begin():
                for service_description_id in ids:
                    await self._update(
                        service_description_id, lambda d: d.disable(disabled_notice)
                    )
        except Exception as e:
            self._probe.service_description_update_failed(
                service_description_ids=ids, error=str(e)
            )
            raise

        self._probe.service_descriptions_disabled(
            service_description_ids=ids, disabled_notice=disabled_notice
        )

    async def _update(self, service_description_id: int, change) -> None:
        client = await self._client_repository.get_by_service_description_id(
            service_description_id, for_update=True
        )
        description: ServiceDescription | None = (
            client.get_service_description(service_description_id) if client else None
        )
        if client is None or description is None:
            raise ServiceDescriptionNotFoundError(
                f"Service description {service_description_id} not found"
            )
        change(description)
        await self._client_repository.save(client)
