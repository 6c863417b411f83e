"""Domain probes for server configuration application services."""

from serverconf.application.observability.access_right_service_probe import (
    AccessRightServiceProbe,
    DefaultAccessRightServiceProbe,
)
from serverconf.application.observability.global_conf_service_probe import (
    DefaultGlobalConfServiceProbe,
    GlobalConfServiceProbe,
)
from serverconf.application.observability.service_description_service_probe import (
    DefaultServiceDescriptionServiceProbe,
    ServiceDescriptionServiceProbe,
)

__all__ = [
    "AccessRightServiceProbe",
    "DefaultAccessRightServiceProbe",
    "DefaultGlobalConfServiceProbe",
    "DefaultServiceDescriptionServiceProbe",
    "GlobalConfServiceProbe",
    "ServiceDescriptionServiceProbe",
]
