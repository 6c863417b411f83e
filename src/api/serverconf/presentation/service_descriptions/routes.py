"""HTTP routes for enabling and disabling service descriptions."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from serverconf.application.services import ServiceDescriptionService
from serverconf.dependencies.service_description import (
    get_service_description_service,
)
from serverconf.presentation.errors import to_http_exception
from serverconf.presentation.path_params import parse_numeric_id
from serverconf.presentation.service_descriptions.models import (
    DisableServiceDescriptionRequest,
)

router = APIRouter(
    prefix="/service-descriptions",
    tags=["service-descriptions"],
)


def _service_description_id(value: str) -> int:
    service_description_id = parse_numeric_id(value)
    if service_description_id is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "code": "service_description_not_found",
                "message": f"Service description {value} not found",
            },
        )
    return service_description_id


@router.put("/{service_description_id}/enable")
async def enable_service_description(
    service_description_id: str,
    service: Annotated[
        ServiceDescriptionService, Depends(get_service_description_service)
    ],
) -> Response:
    """Enable a service description."""
    description_id = _service_description_id(service_description_id)
    try:
        await service.enable_service_descriptions([description_id])
    except Exception as e:
        raise to_http_exception(e, "Failed to enable service description") from e
    return Response(status_code=status.HTTP_200_OK)


@router.put("/{service_description_id}/disable")
async def disable_service_description(
    service_description_id: str,
    service: Annotated[
        ServiceDescriptionService, Depends(get_service_description_service)
    ],
    request: DisableServiceDescriptionRequest | None = None,
) -> Response:
    """Disable a service description, optionally with a notice for clients."""
    description_id = _service_description_id(service_description_id)
    notice = request.disabled_notice if request else None
    try:
        await service.disable_service_descriptions([description_id], notice)
    except Exception as e:
        raise to_http_exception(e, "Failed to disable service description") from e
    return Response(status_code=status.HTTP_200_OK)
