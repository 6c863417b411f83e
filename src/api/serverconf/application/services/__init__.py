"""Application services for the server configuration context."""

from serverconf.application.services.access_right_service import AccessRightService
from serverconf.application.services.endpoint_service import EndpointService
from serverconf.application.services.global_conf_service import GlobalConfService
from serverconf.application.services.local_group_service import LocalGroupService
from serverconf.application.services.service_description_service import (
    ServiceDescriptionService,
)

__all__ = [
    "AccessRightService",
    "EndpointService",
    "GlobalConfService",
    "LocalGroupService",
    "ServiceDescriptionService",
]
