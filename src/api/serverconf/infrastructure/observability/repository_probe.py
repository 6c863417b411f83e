"""Domain probes for server configuration repository operations.

Following Domain-Oriented Observability patterns, these probes capture
domain-significant events of client and identifier persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ClientRepositoryProbe(Protocol):
    """Domain probe for client repository operations."""

    def client_retrieved(self, client_id: str, access_right_count: int) -> None:
        """Record that a client aggregate was loaded."""
        ...

    def client_not_found(self, lookup: str, value: str) -> None:
        """Record that a client lookup found nothing."""
        ...

    def client_lock_timed_out(self, lookup: str, value: str) -> None:
        """Record that waiting for a client row lock timed out."""
        ...

    def client_saved(self, client_id: str, added: int, removed: int) -> None:
        """Record that a client aggregate was persisted."""
        ...

    def with_context(self, context: ObservationContext) -> ClientRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class IdentifierRepositoryProbe(Protocol):
    """Domain probe for identifier repository operations."""

    def identifiers_persisted(self, requested: int, created: int) -> None:
        """Record a get-or-persist call."""
        ...

    def with_context(self, context: ObservationContext) -> IdentifierRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultClientRepositoryProbe:
    """Default implementation of ClientRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultClientRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultClientRepositoryProbe(logger=self._logger, context=context)

    def client_retrieved(self, client_id: str, access_right_count: int) -> None:
        """Record that a client aggregate was loaded."""
        self._logger.debug(
            "client_retrieved",
            client_id=client_id,
            access_right_count=access_right_count,
            **self._get_context_kwargs(),
        )

    def client_not_found(self, lookup: str, value: str) -> None:
        """Record that a client lookup found nothing."""
        self._logger.debug(
            "client_not_found",
            lookup=lookup,
            value=value,
            **self._get_context_kwargs(),
        )

    def client_lock_timed_out(self, lookup: str, value: str) -> None:
        """Record that waiting for a client row lock timed out."""
        self._logger.warning(
            "client_lock_timed_out",
            lookup=lookup,
            value=value,
            **self._get_context_kwargs(),
        )

    def client_saved(self, client_id: str, added: int, removed: int) -> None:
        """Record that a client aggregate was persisted."""
        self._logger.info(
            "client_saved",
            client_id=client_id,
            access_rights_added=added,
            access_rights_removed=removed,
            **self._get_context_kwargs(),
        )


class DefaultIdentifierRepositoryProbe:
    """Default implementation of IdentifierRepositoryProbe using structlog."""

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
    ) -> DefaultIdentifierRepositoryProbe:
        return DefaultIdentifierRepositoryProbe(logger=self._logger, context=context)

    def identifiers_persisted(self, requested: int, created: int) -> None:
        self._logger.debug(
            "identifiers_persisted",
            requested=requested,
            created=created,
            **self._get_context_kwargs(),
        )
