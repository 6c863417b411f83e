"""Protocol for global configuration lookups observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GlobalConfServiceProbe(Protocol):
    """Domain probe for global configuration directory lookups."""

    def directory_unavailable(self, operation: str, error: str) -> None:
        """Record that the directory could not answer a query."""
        ...

    def directory_degraded(self, operation: str, error: str) -> None:
        """Record that a listing fell back to an empty result."""
        ...

    def with_context(self, context: ObservationContext) -> GlobalConfServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGlobalConfServiceProbe:
    """Default implementation of GlobalConfServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultGlobalConfServiceProbe:
        return DefaultGlobalConfServiceProbe(logger=self._logger, context=context)

    def directory_unavailable(self, operation: str, error: str) -> None:
        self._logger.error(
            "globalconf_directory_unavailable",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )

    def directory_degraded(self, operation: str, error: str) -> None:
        self._logger.warning(
            "globalconf_directory_degraded",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )
