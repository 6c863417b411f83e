"""Protocol for service description application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ServiceDescriptionServiceProbe(Protocol):
    """Domain probe for service description operations."""

    def service_descriptions_enabled(self, service_description_ids: list[int]) -> None:
        """Record that service descriptions were enabled."""
        ...

    def service_descriptions_disabled(
        self,
        service_description_ids: list[int],
        disabled_notice: str | None,
    ) -> None:
        """Record that service descriptions were disabled."""
        ...

    def service_description_update_failed(
        self,
        service_description_ids: list[int],
        error: str,
    ) -> None:
        """Record that enabling or disabling service descriptions failed."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> ServiceDescriptionServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultServiceDescriptionServiceProbe:
    """Default implementation of ServiceDescriptionServiceProbe using structlog."""

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
    ) -> DefaultServiceDescriptionServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultServiceDescriptionServiceProbe(
            logger=self._logger, context=context
        )

    def service_descriptions_enabled(self, service_description_ids: list[int]) -> None:
        """Record that service descriptions were enabled."""
        self._logger.info(
            "service_descriptions_enabled",
            service_description_ids=service_description_ids,
            **self._get_context_kwargs(),
        )

    def service_descriptions_disabled(
        self,
        service_description_ids: list[int],
        disabled_notice: str | None,
    ) -> None:
        """Record that service descriptions were disabled."""
        self._logger.info(
            "service_descriptions_disabled",
            service_description_ids=service_description_ids,
            disabled_notice=disabled_notice,
            **self._get_context_kwargs(),
        )

    def service_description_update_failed(
        self,
        service_description_ids: list[int],
        error: str,
    ) -> None:
        """Record that enabling or disabling service descriptions failed."""
        self._logger.error(
            "service_description_update_failed",
            service_description_ids=service_description_ids,
            error=error,
            **self._get_context_kwargs(),
        )
