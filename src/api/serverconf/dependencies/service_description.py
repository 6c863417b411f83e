from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_write_session
from serverconf.application.observability import (
    DefaultServiceDescriptionServiceProbe,
    ServiceDescriptionServiceProbe,
)
from serverconf.application.services import ServiceDescriptionService
from serverconf.dependencies.observability import get_observation_context
from serverconf.infrastructure.client_repository import ClientRepository
from shared_kernel.observability_context import ObservationContext


def get_service_description_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> ServiceDescriptionServiceProbe:
    return DefaultServiceDescriptionServiceProbe().with_context(context)


def get_service_description_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    probe: Annotated[
        ServiceDescriptionServiceProbe, Depends(get_service_description_service_probe)
    ],
) -> ServiceDescriptionService:
    """Get ServiceDescriptionService instance.

    Args:
        session: Write session; the service owns the transaction
        probe: Service description service probe for observability

    Returns:
        ServiceDescriptionService instance
    """
    return ServiceDescriptionService(
        session=session,
        client_repository=ClientRepository(session=session),
        probe=probe,
    )
