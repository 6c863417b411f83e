"""Domain probe for the global configuration snapshot directory."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GlobalConfDirectoryProbe(Protocol):
    """Domain probe for snapshot loading."""

    def snapshot_loaded(self, path: str, instance_count: int) -> None:
        """Record that a new snapshot file was read."""
        ...

    def snapshot_unavailable(self, path: str, reason: str) -> None:
        """Record that the snapshot could not be used."""
        ...

    def with_context(self, context: ObservationContext) -> GlobalConfDirectoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGlobalConfDirectoryProbe:
    """Default implementation of GlobalConfDirectoryProbe using structlog."""

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
    ) -> DefaultGlobalConfDirectoryProbe:
        return DefaultGlobalConfDirectoryProbe(logger=self._logger, context=context)

    def snapshot_loaded(self, path: str, instance_count: int) -> None:
        self._logger.info(
            "globalconf_snapshot_loaded",
            path=path,
            instance_count=instance_count,
            **self._get_context_kwargs(),
        )

    def snapshot_unavailable(self, path: str, reason: str) -> None:
        self._logger.error(
            "globalconf_snapshot_unavailable",
            path=path,
            reason=reason,
            **self._get_context_kwargs(),
        )
