"""Protocol for access right application service observability.

Defines the interface for domain probes that capture application-level
domain events for access right resolution and mutation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AccessRightServiceProbe(Protocol):
    """Domain probe for access right application service operations."""

    def access_rights_added(
        self,
        client_id: str,
        endpoint_id: int,
        subject_ids: list[str],
    ) -> None:
        """Record that access rights were granted on an endpoint."""
        ...

    def access_rights_add_failed(
        self,
        client_id: str,
        endpoint_id: int,
        error_code: str,
        error: str,
    ) -> None:
        """Record that granting access rights failed."""
        ...

    def access_rights_removed(
        self,
        client_id: str,
        endpoint_id: int,
        subject_ids: list[str],
    ) -> None:
        """Record that access rights were revoked on an endpoint."""
        ...

    def access_rights_remove_failed(
        self,
        client_id: str,
        endpoint_id: int,
        error_code: str,
        error: str,
    ) -> None:
        """Record that revoking access rights failed."""
        ...

    def service_client_candidates_found(
        self,
        client_id: str,
        candidate_count: int,
        result_count: int,
    ) -> None:
        """Record a service client candidate search."""
        ...

    def with_context(self, context: ObservationContext) -> AccessRightServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccessRightServiceProbe:
    """Default implementation of AccessRightServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultAccessRightServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccessRightServiceProbe(logger=self._logger, context=context)

    def access_rights_added(
        self,
        client_id: str,
        endpoint_id: int,
        subject_ids: list[str],
    ) -> None:
        """Record that access rights were granted on an endpoint."""
        self._logger.info(
            "access_rights_added",
            client_id=client_id,
            endpoint_id=endpoint_id,
            subject_ids=subject_ids,
            **self._get_context_kwargs(),
        )

    def access_rights_add_failed(
        self,
        client_id: str,
        endpoint_id: int,
        error_code: str,
        error: str,
    ) -> None:
        """Record that granting access rights failed."""
        self._logger.warning(
            "access_rights_add_failed",
            client_id=client_id,
            endpoint_id=endpoint_id,
            error_code=error_code,
            error=error,
            **self._get_context_kwargs(),
        )

    def access_rights_removed(
        self,
        client_id: str,
        endpoint_id: int,
        subject_ids: list[str],
    ) -> None:
        """Record that access rights were revoked on an endpoint."""
        self._logger.info(
            "access_rights_removed",
            client_id=client_id,
            endpoint_id=endpoint_id,
            subject_ids=subject_ids,
            **self._get_context_kwargs(),
        )

    def access_rights_remove_failed(
        self,
        client_id: str,
        endpoint_id: int,
        error_code: str,
        error: str,
    ) -> None:
        """Record that revoking access rights failed."""
        self._logger.warning(
            "access_rights_remove_failed",
            client_id=client_id,
            endpoint_id=endpoint_id,
            error_code=error_code,
            error=error,
            **self._get_context_kwargs(),
        )

    def service_client_candidates_found(
        self,
        client_id: str,
        candidate_count: int,
        result_count: int,
    ) -> None:
        """Record a service client candidate search."""
        self._logger.debug(
            "service_client_candidates_found",
            client_id=client_id,
            candidate_count=candidate_count,
            result_count=result_count,
            **self._get_context_kwargs(),
        )
