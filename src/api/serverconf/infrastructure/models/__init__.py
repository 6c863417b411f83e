"""SQLAlchemy ORM models for the server configuration context.

These models map to database tables and are used by repository implementations.
"""

from serverconf.infrastructure.models.client import (
    AccessRightModel,
    ClientModel,
    EndpointModel,
    GroupMemberModel,
    LocalGroupModel,
    ServiceDescriptionModel,
    ServiceModel,
)
from serverconf.infrastructure.models.identifier import (
    NATURAL_KEY_COLUMNS,
    IdentifierModel,
)

__all__ = [
    "NATURAL_KEY_COLUMNS",
    "AccessRightModel",
    "ClientModel",
    "EndpointModel",
    "GroupMemberModel",
    "IdentifierModel",
    "LocalGroupModel",
    "ServiceDescriptionModel",
    "ServiceModel",
]
