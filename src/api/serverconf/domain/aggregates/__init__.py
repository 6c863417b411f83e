"""Domain aggregates for the server configuration context."""

from serverconf.domain.aggregates.client import (
    ANY_METHOD,
    ANY_PATH,
    AccessRight,
    Client,
    Endpoint,
    LocalGroup,
    Service,
    ServiceDescription,
    ServiceDescriptionType,
)

__all__ = [
    "ANY_METHOD",
    "ANY_PATH",
    "AccessRight",
    "Client",
    "Endpoint",
    "LocalGroup",
    "Service",
    "ServiceDescription",
    "ServiceDescriptionType",
]
