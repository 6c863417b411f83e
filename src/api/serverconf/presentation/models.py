"""Pydantic models shared by the server configuration routes."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from serverconf.application.value_objects import ServiceClient
from serverconf.domain.value_objects import XRoadId, XRoadObjectType, parse_xroad_id


class AccessRightItem(BaseModel):
    """One subject of an access right mutation.

    Local groups are referenced by ``local_group_id``; subsystems and
    global groups by their short-form ``subject_id``.
    """

    subject_type: XRoadObjectType = Field(..., description="Subject type")
    subject_id: str | None = Field(
        None, description="Short form identity, e.g. EE:GOV/123:payroll"
    )
    local_group_id: int | None = Field(None, description="Local group id")


class AccessRightsRequest(BaseModel):
    """Request model for adding or removing access rights."""

    items: list[AccessRightItem] = Field(..., min_length=1)

    def to_subjects(self) -> tuple[set[XRoadId], set[int]]:
        """Split the items into identities and local group ids.

        Returns:
            Tuple of (subject identities, local group ids)

        Raises:
            ValueError: If an item is malformed or references a member
        """
        subject_ids: set[XRoadId] = set()
        local_group_ids: set[int] = set()
        for item in self.items:
            match item.subject_type:
                case XRoadObjectType.LOCALGROUP:
                    if item.local_group_id is None:
                        raise ValueError("Local group items require local_group_id")
                    local_group_ids.add(item.local_group_id)
                case XRoadObjectType.SUBSYSTEM | XRoadObjectType.GLOBALGROUP:
                    if not item.subject_id:
                        raise ValueError(
                            f"{item.subject_type} items require subject_id"
                        )
                    subject_ids.add(parse_xroad_id(item.subject_id, item.subject_type))
                case _:
                    raise ValueError(
                        f"Access rights cannot be given to {item.subject_type} subjects"
                    )
        return subject_ids, local_group_ids


class ServiceClientResponse(BaseModel):
    """Response model for a subject holding or eligible for an access right."""

    subject_type: XRoadObjectType
    subject_id: str
    rights_given: datetime | None = None
    member_name: str | None = None
    local_group_id: int | None = None
    local_group_code: str | None = None
    local_group_description: str | None = None
    global_group_description: str | None = None

    @classmethod
    def from_domain(cls, service_client: ServiceClient) -> ServiceClientResponse:
        """Create response from a ServiceClient view.

        Args:
            service_client: ServiceClient from the application layer

        Returns:
            ServiceClientResponse
        """
        return cls(
            subject_type=service_client.subject_id.object_type,
            subject_id=str(service_client.subject_id),
            rights_given=service_client.rights_given,
            member_name=service_client.member_name,
            local_group_id=service_client.local_group_id,
            local_group_code=service_client.local_group_code,
            local_group_description=service_client.local_group_description,
            global_group_description=service_client.global_group_description,
        )
