from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_read_session, get_write_session
from serverconf.application.observability import (
    AccessRightServiceProbe,
    DefaultAccessRightServiceProbe,
)
from serverconf.application.services import AccessRightService, GlobalConfService
from serverconf.dependencies.global_conf import get_global_conf_service
from serverconf.dependencies.observability import get_observation_context
from serverconf.infrastructure.client_repository import ClientRepository
from serverconf.infrastructure.identifier_repository import IdentifierRepository
from shared_kernel.observability_context import ObservationContext


def get_access_right_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AccessRightServiceProbe:
    """Get AccessRightServiceProbe instance.

    Returns:
        DefaultAccessRightServiceProbe bound to the request context
    """
    return DefaultAccessRightServiceProbe().with_context(context)


def get_access_right_service(
    session: Annotated[AsyncSession, Depends(get_write_session)],
    global_conf_service: Annotated[
        GlobalConfService, Depends(get_global_conf_service)
    ],
    probe: Annotated[AccessRightServiceProbe, Depends(get_access_right_service_probe)],
) -> AccessRightService:
    """Get AccessRightService instance for mutations.

    Args:
        session: Write session; the service owns the transaction
        global_conf_service: Global configuration lookups
        probe: Access right service probe for observability

    Returns:
        AccessRightService instance
    """
    return AccessRightService(
        session=session,
        client_repository=ClientRepository(session=session),
        identifier_repository=IdentifierRepository(session=session),
        global_conf_service=global_conf_service,
        probe=probe,
    )


def get_access_right_query_service(
    session: Annotated[AsyncSession, Depends(get_read_session)],
    global_conf_service: Annotated[
        GlobalConfService, Depends(get_global_conf_service)
    ],
    probe: Annotated[AccessRightServiceProbe, Depends(get_access_right_service_probe)],
) -> AccessRightService:
    """Get AccessRightService instance bound to a read session.

    Used by listing and search routes, which take no locks.
    """
    return AccessRightService(
        session=session,
        client_repository=ClientRepository(session=session),
        identifier_repository=IdentifierRepository(session=session),
        global_conf_service=global_conf_service,
        probe=probe,
    )
