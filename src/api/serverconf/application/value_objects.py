"""Application-layer value objects for the server configuration context.

Read-only view objects handed to the presentation layer and search terms
received from it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from serverconf.domain.value_objects import XRoadId, XRoadObjectType


@dataclass(frozen=True)
class ServiceClient:
    """A subject that holds, or may be granted, access to a service.

    Either an access right holder (``rights_given`` set) or a search
    candidate. Which optional fields are populated depends on the subject's
    variant: member names for members and subsystems, group details for
    local and global groups.
    """

    subject_id: XRoadId
    rights_given: datetime | None = None
    member_name: str | None = None
    local_group_id: int | None = None
    local_group_code: str | None = None
    local_group_description: str | None = None
    global_group_description: str | None = None


@dataclass(frozen=True)
class ServiceClientSearch:
    """Search terms for service client candidates.

    Every term is optional; an empty or missing term matches everything.
    """

    subject_type: XRoadObjectType | None = None
    name_or_description: str | None = None
    instance: str | None = None
    member_class: str | None = None
    member_group_code: str | None = None
    subsystem_code: str | None = None
