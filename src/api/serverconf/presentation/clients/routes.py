"""HTTP routes for client services' access rights and service client search."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from serverconf.application.services import AccessRightService
from serverconf.application.value_objects import ServiceClientSearch
from serverconf.dependencies.access_right import (
    get_access_right_query_service,
    get_access_right_service,
)
from serverconf.domain.value_objects import ClientId, XRoadObjectType
from serverconf.presentation.errors import to_http_exception
from serverconf.presentation.models import AccessRightsRequest, ServiceClientResponse
from serverconf.presentation.path_params import parse_client_id

router = APIRouter(
    prefix="/clients",
    tags=["clients"],
)


def _client_id(value: str) -> ClientId:
    try:
        return parse_client_id(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "invalid_client_id", "message": f"Invalid client id {value}"},
        ) from None


@router.get(
    "/{client_id}/services/{full_service_code}/access-rights",
    response_model=list[ServiceClientResponse],
    response_model_exclude_none=True,
    summary="List service access rights",
)
async def get_service_access_rights(
    client_id: str,
    full_service_code: str,
    service: Annotated[AccessRightService, Depends(get_access_right_query_service)],
) -> list[ServiceClientResponse]:
    """List the subjects that may invoke a whole service."""
    client = _client_id(client_id)
    try:
        service_clients = await service.get_service_access_rights(
            client, full_service_code
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to list access rights") from e
    return [ServiceClientResponse.from_domain(c) for c in service_clients]


@router.post(
    "/{client_id}/services/{full_service_code}/access-rights",
    response_model=list[ServiceClientResponse],
    response_model_exclude_none=True,
    summary="Add service access rights",
    responses={
        200: {"description": "Access rights added; full list returned"},
        400: {"description": "Invalid subject or subject not in global configuration"},
        404: {"description": "Client, service, endpoint or local group not found"},
        409: {"description": "Subject already has access"},
        503: {"description": "Global configuration unavailable"},
    },
)
async def add_service_access_rights(
    client_id: str,
    full_service_code: str,
    request: AccessRightsRequest,
    service: Annotated[AccessRightService, Depends(get_access_right_service)],
) -> list[ServiceClientResponse]:
    """Grant access to a whole service for a batch of subjects."""
    client = _client_id(client_id)
    try:
        subject_ids, local_group_ids = request.to_subjects()
        service_clients = await service.add_service_access_rights(
            client,
            full_service_code,
            subject_ids=subject_ids,
            local_group_ids=local_group_ids,
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to add access rights") from e
    return [ServiceClientResponse.from_domain(c) for c in service_clients]


@router.delete(
    "/{client_id}/services/{full_service_code}/access-rights",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove service access rights",
)
async def delete_service_access_rights(
    client_id: str,
    full_service_code: str,
    request: AccessRightsRequest,
    service: Annotated[AccessRightService, Depends(get_access_right_service)],
) -> Response:
    """Revoke access rights on a whole service, all or nothing."""
    client = _client_id(client_id)
    try:
        subject_ids, local_group_ids = request.to_subjects()
        await service.delete_service_access_rights(
            client,
            full_service_code,
            subject_ids=subject_ids,
            local_group_ids=local_group_ids,
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to remove access rights") from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{client_id}/service-clients",
    response_model=list[ServiceClientResponse],
    response_model_exclude_none=True,
    summary="Find service client candidates",
    description=(
        "Search subsystems, global groups and the client's local groups that "
        "access rights could be granted to"
    ),
)
async def find_service_client_candidates(
    client_id: str,
    service: Annotated[AccessRightService, Depends(get_access_right_query_service)],
    subject_type: XRoadObjectType | None = None,
    q: Annotated[str | None, Query(description="Member name or group description")] = None,
    instance: str | None = None,
    member_class: str | None = None,
    member_group_code: str | None = None,
    subsystem_code: str | None = None,
) -> list[ServiceClientResponse]:
    """Search service client candidates; every term is optional."""
    client = _client_id(client_id)
    search = ServiceClientSearch(
        subject_type=subject_type,
        name_or_description=q,
        instance=instance,
        member_class=member_class,
        member_group_code=member_group_code,
        subsystem_code=subsystem_code,
    )
    try:
        candidates = await service.find_service_client_candidates(client, search)
    except Exception as e:
        raise to_http_exception(e, "Failed to find service clients") from e
    return [ServiceClientResponse.from_domain(c) for c in candidates]
