"""HTTP routes for endpoint access rights."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from serverconf.application.services import AccessRightService
from serverconf.dependencies.access_right import (
    get_access_right_query_service,
    get_access_right_service,
)
from serverconf.presentation.errors import to_http_exception
from serverconf.presentation.models import AccessRightsRequest, ServiceClientResponse
from serverconf.presentation.path_params import parse_numeric_id

router = APIRouter(
    prefix="/endpoints",
    tags=["endpoints"],
)


def _endpoint_id(value: str) -> int:
    endpoint_id = parse_numeric_id(value)
    if endpoint_id is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"code": "endpoint_not_found", "message": f"Endpoint {value} not found"},
        )
    return endpoint_id


@router.get(
    "/{endpoint_id}/access-rights",
    response_model=list[ServiceClientResponse],
    response_model_exclude_none=True,
    summary="List endpoint access rights",
    responses={
        200: {"description": "Access rights listed successfully"},
        404: {"description": "Endpoint not found"},
    },
)
async def get_endpoint_access_rights(
    endpoint_id: str,
    service: Annotated[AccessRightService, Depends(get_access_right_query_service)],
) -> list[ServiceClientResponse]:
    """List the subjects that may invoke an endpoint."""
    endpoint = _endpoint_id(endpoint_id)
    try:
        service_clients = await service.get_endpoint_access_rights(endpoint)
    except Exception as e:
        raise to_http_exception(e, "Failed to list access rights") from e
    return [ServiceClientResponse.from_domain(c) for c in service_clients]


@router.post(
    "/{endpoint_id}/access-rights",
    response_model=list[ServiceClientResponse],
    response_model_exclude_none=True,
    summary="Add endpoint access rights",
    responses={
        200: {"description": "Access rights added; full list returned"},
        400: {"description": "Invalid subject or subject not in global configuration"},
        404: {"description": "Endpoint or local group not found"},
        409: {"description": "Subject already has access"},
        503: {"description": "Global configuration unavailable"},
    },
)
async def add_endpoint_access_rights(
    endpoint_id: str,
    request: AccessRightsRequest,
    service: Annotated[AccessRightService, Depends(get_access_right_service)],
) -> list[ServiceClientResponse]:
    """Grant access to an endpoint for a batch of subjects.

    Either every subject is granted access or none is. The response is the
    endpoint's complete access right list after the change.

    Raises:
        HTTPException: 400 for invalid or unknown subjects
        HTTPException: 404 if the endpoint or a local group is not found
        HTTPException: 409 if a subject already has access
        HTTPException: 503 if the global configuration is unavailable
    """
    endpoint = _endpoint_id(endpoint_id)
    try:
        subject_ids, local_group_ids = request.to_subjects()
        service_clients = await service.add_endpoint_access_rights(
            endpoint, subject_ids=subject_ids, local_group_ids=local_group_ids
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to add access rights") from e
    return [ServiceClientResponse.from_domain(c) for c in service_clients]


@router.delete(
    "/{endpoint_id}/access-rights",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove endpoint access rights",
    responses={
        204: {"description": "Access rights removed"},
        404: {"description": "Endpoint, local group or access right not found"},
    },
)
async def delete_endpoint_access_rights(
    endpoint_id: str,
    request: AccessRightsRequest,
    service: Annotated[AccessRightService, Depends(get_access_right_service)],
) -> Response:
    """Revoke the access rights of a batch of subjects on an endpoint.

    Nothing is removed unless every subject currently holds a right.
    """
    endpoint = _endpoint_id(endpoint_id)
    try:
        subject_ids, local_group_ids = request.to_subjects()
        await service.delete_endpoint_access_rights(
            endpoint, subject_ids=subject_ids, local_group_ids=local_group_ids
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to remove access rights") from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
