"""Projections from domain objects and directory entries to ServiceClient views."""

from __future__ import annotations

from collections.abc import Iterable

from serverconf.application.value_objects import ServiceClient
from serverconf.domain.aggregates import AccessRight, Client, LocalGroup
from serverconf.domain.value_objects import XRoadObjectType
from serverconf.ports.directory import GlobalGroupInfo, MemberInfo


def map_access_rights_to_service_clients(
    client: Client, access_rights: Iterable[AccessRight]
) -> list[ServiceClient]:
    """Map access rights of a client to service client views.

    Local group subjects are enriched with the group's id and description,
    looked up by group code in an index built for this call only.

    Args:
        client: The client owning the access rights
        access_rights: Access rights to map, in the order to return them

    Returns:
        One ServiceClient per access right
    """
    groups_by_code = {group.group_code: group for group in client.local_groups}
    return [_access_right_to_service_client(r, groups_by_code) for r in access_rights]


def _access_right_to_service_client(
    access_right: AccessRight, groups_by_code: dict[str, LocalGroup]
) -> ServiceClient:
    subject = access_right.subject_id
    if subject.object_type != XRoadObjectType.LOCALGROUP:
        return ServiceClient(subject_id=subject, rights_given=access_right.rights_given)

    group = groups_by_code.get(subject.group_code)
    return ServiceClient(
        subject_id=subject,
        rights_given=access_right.rights_given,
        local_group_id=group.id if group else None,
        local_group_code=subject.group_code,
        local_group_description=group.description if group else None,
    )


def member_to_service_client(member: MemberInfo) -> ServiceClient:
    return ServiceClient(subject_id=member.id, member_name=member.name)


def global_group_to_service_client(global_group: GlobalGroupInfo) -> ServiceClient:
    return ServiceClient(
        subject_id=global_group.id,
        global_group_description=global_group.description,
    )


def local_group_to_service_client(local_group: LocalGroup) -> ServiceClient:
    return ServiceClient(
        subject_id=local_group.identifier,
        local_group_id=local_group.id,
        local_group_code=local_group.group_code,
        local_group_description=local_group.description,
    )
