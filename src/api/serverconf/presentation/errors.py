"""Translation of server configuration errors into HTTP errors."""

from __future__ import annotations

import structlog
from fastapi import HTTPException, status

from serverconf.ports.exceptions import (
    ClientLockedError,
    DirectoryUnavailableError,
    DuplicateAccessRightError,
    IdentifierNotFoundError,
    NotFoundError,
    ServerConfError,
)

logger = structlog.get_logger()


def to_http_exception(error: Exception, failure_detail: str) -> HTTPException:
    """Map an exception raised by an application service to an HTTPException.

    Args:
        error: The exception to translate
        failure_detail: Generic detail used for unexpected errors

    Returns:
        HTTPException carrying the status code and a detail payload
    """
    if isinstance(error, HTTPException):
        return error

    if isinstance(error, ServerConfError):
        match error:
            case NotFoundError():
                status_code = status.HTTP_404_NOT_FOUND
            case IdentifierNotFoundError():
                status_code = status.HTTP_400_BAD_REQUEST
            case DuplicateAccessRightError() | ClientLockedError():
                status_code = status.HTTP_409_CONFLICT
            case DirectoryUnavailableError():
                status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            case _:
                status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        return HTTPException(
            status_code=status_code,
            detail={"code": error.error_code, "message": str(error)},
        )

    if isinstance(error, ValueError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "invalid_request", "message": str(error)},
        )

    logger.exception("unexpected_error", detail=failure_detail)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=failure_detail,
    )
