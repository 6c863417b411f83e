"""Client aggregate for the server configuration context."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from serverconf.domain.value_objects import (
    ClientId,
    LocalGroupId,
    XRoadId,
    XRoadObjectType,
)

ANY_METHOD = "*"
ANY_PATH = "**"


class ServiceDescriptionType(StrEnum):
    """Kind of document a service description was imported from."""

    WSDL = "WSDL"
    OPENAPI3 = "OPENAPI3"
    REST = "REST"


@dataclass(frozen=True)
class Endpoint:
    """An invocable path of a service, or the whole-service base endpoint.

    The base endpoint of a service matches any method and any path.
    """

    id: int
    service_code: str
    method: str = ANY_METHOD
    path: str = ANY_PATH
    generated: bool = False

    @property
    def is_base_endpoint(self) -> bool:
        return self.method == ANY_METHOD and self.path == ANY_PATH


@dataclass(frozen=True)
class Service:
    """A service published through a service description."""

    id: int
    service_code: str
    service_version: str | None = None
    title: str | None = None

    @property
    def full_service_code(self) -> str:
        """Service code qualified with its version, e.g. ``getRandom.v1``."""
        if self.service_version:
            return f"{self.service_code}.{self.service_version}"
        return self.service_code


@dataclass
class ServiceDescription:
    """A WSDL or OpenAPI document and the services imported from it."""

    id: int
    url: str
    type: ServiceDescriptionType
    services: list[Service] = field(default_factory=list)
    disabled: bool = False
    disabled_notice: str | None = None

    def enable(self) -> None:
        self.disabled = False
        self.disabled_notice = None

    def disable(self, disabled_notice: str | None = None) -> None:
        self.disabled = True
        self.disabled_notice = disabled_notice


@dataclass(frozen=True)
class LocalGroup:
    """A group defined by and scoped to one client."""

    id: int
    group_code: str
    description: str
    members: frozenset[ClientId] = frozenset()
    updated_at: datetime | None = None

    @property
    def identifier(self) -> LocalGroupId:
        return LocalGroupId(group_code=self.group_code)


@dataclass(frozen=True)
class AccessRight:
    """Permission for one subject to invoke one endpoint."""

    endpoint: Endpoint
    subject_id: XRoadId
    rights_given: datetime


@dataclass
class Client:
    """Client aggregate: a locally configured X-Road member or subsystem.

    The client owns its service descriptions, endpoints, local groups and
    access control list. The ACL is only changed through
    grant_access_rights() and revoke_access_rights(), and the repository
    persists the aggregate as one unit.

    Business rules:
    - An endpoint holds at most one access right per subject
    - A local group subject must be one of the client's own local groups
    - Grants and revocations apply to the whole batch or not at all
    """

    id: int
    identifier: ClientId
    service_descriptions: list[ServiceDescription] = field(default_factory=list)
    endpoints: list[Endpoint] = field(default_factory=list)
    local_groups: list[LocalGroup] = field(default_factory=list)
    acl: list[AccessRight] = field(default_factory=list)

    def get_service(self, full_service_code: str) -> Service | None:
        """Find a service by its full service code."""
        for description in self.service_descriptions:
            for service in description.services:
                if service.full_service_code == full_service_code:
                    return service
        return None

    def get_service_description(
        self, service_description_id: int
    ) -> ServiceDescription | None:
        for description in self.service_descriptions:
            if description.id == service_description_id:
                return description
        return None

    def get_endpoint(self, endpoint_id: int) -> Endpoint | None:
        for endpoint in self.endpoints:
            if endpoint.id == endpoint_id:
                return endpoint
        return None

    def get_base_endpoint(self, service_code: str) -> Endpoint | None:
        """Find the whole-service endpoint of a service code."""
        for endpoint in self.endpoints:
            if endpoint.service_code == service_code and endpoint.is_base_endpoint:
                return endpoint
        return None

    def get_local_group(self, local_group_id: int) -> LocalGroup | None:
        for group in self.local_groups:
            if group.id == local_group_id:
                return group
        return None

    def owns_local_group(self, local_group_id: LocalGroupId) -> bool:
        """Check whether a local group identity belongs to this client."""
        return any(
            group.group_code == local_group_id.group_code
            for group in self.local_groups
        )

    def access_rights_for_endpoint(self, endpoint: Endpoint) -> list[AccessRight]:
        return [right for right in self.acl if right.endpoint.id == endpoint.id]

    def has_access_right(self, endpoint: Endpoint, subject_id: XRoadId) -> bool:
        return any(
            right.endpoint.id == endpoint.id and right.subject_id == subject_id
            for right in self.acl
        )

    def grant_access_rights(
        self,
        endpoint: Endpoint,
        subject_ids: Iterable[XRoadId],
        rights_given: datetime,
    ) -> list[AccessRight]:
        """Grant access to an endpoint for a batch of subjects.

        Every subject is validated before the ACL is touched, so a rejected
        batch leaves the ACL unchanged.

        Args:
            endpoint: One of this client's endpoints
            subject_ids: Subjects to grant access to
            rights_given: Timestamp shared by the whole batch

        Returns:
            The access rights that were added

        Raises:
            ValueError: If the endpoint is foreign, a local group is foreign,
                or a subject already holds a right on the endpoint
        """
        if self.get_endpoint(endpoint.id) is None:
            raise ValueError(f"Endpoint {endpoint.id} does not belong to {self}")

        pending: list[AccessRight] = []
        seen: set[XRoadId] = set()
        for subject_id in subject_ids:
            if subject_id.object_type == XRoadObjectType.LOCALGROUP:
                if not self.owns_local_group(subject_id):
                    raise ValueError(
                        f"Local group {subject_id} does not belong to {self}"
                    )
            if subject_id in seen or self.has_access_right(endpoint, subject_id):
                raise ValueError(
                    f"Subject {subject_id} already has an access right for "
                    f"endpoint {endpoint.id}"
                )
            seen.add(subject_id)
            pending.append(
                AccessRight(
                    endpoint=endpoint,
                    subject_id=subject_id,
                    rights_given=rights_given,
                )
            )

        self.acl.extend(pending)
        return pending

    def revoke_access_rights(
        self, endpoint: Endpoint, subject_ids: Iterable[XRoadId]
    ) -> list[AccessRight]:
        """Revoke the access rights of a batch of subjects on an endpoint.

        Raises:
            ValueError: If any subject holds no right on the endpoint
        """
        to_remove = set(subject_ids)
        matched = [
            right
            for right in self.access_rights_for_endpoint(endpoint)
            if right.subject_id in to_remove
        ]
        if len(matched) != len(to_remove):
            raise ValueError(
                f"Not all subjects hold an access right for endpoint {endpoint.id}"
            )

        self.acl = [right for right in self.acl if right not in matched]
        return matched

    def __str__(self) -> str:
        return f"client {self.identifier}"
