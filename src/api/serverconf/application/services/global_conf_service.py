"""Global configuration lookups with a bounded timeout.

Wraps the directory port with the two failure policies the access right
engine relies on: existence checks surface DirectoryUnavailableError so a
grant is never rejected because the directory was unreachable, while
listings used to enrich the UI degrade to empty results.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Collection
from typing import TypeVar

from serverconf.application.observability import (
    DefaultGlobalConfServiceProbe,
    GlobalConfServiceProbe,
)
from serverconf.domain.value_objects import ClientId, GlobalGroupId
from serverconf.ports.directory import GlobalGroupInfo, IGlobalConfDirectory, MemberInfo
from serverconf.ports.exceptions import DirectoryUnavailableError

T = TypeVar("T")


class GlobalConfService:
    """Application service for querying the global configuration."""

    def __init__(
        self,
        directory: IGlobalConfDirectory,
        timeout_seconds: float = 5.0,
        probe: GlobalConfServiceProbe | None = None,
    ):
        """Initialize GlobalConfService.

        Args:
            directory: Global configuration directory port
            timeout_seconds: Upper bound for a single directory query
            probe: Optional domain probe for observability
        """
        self._directory = directory
        self._timeout_seconds = timeout_seconds
        self._probe = probe or DefaultGlobalConfServiceProbe()

    async def _query(self, operation: str, awaitable: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(awaitable, timeout=self._timeout_seconds)
        except TimeoutError as e:
            raise DirectoryUnavailableError(
                f"Global configuration query {operation} timed out after "
                f"{self._timeout_seconds}s"
            ) from e

    async def client_identifiers_exist(self, client_ids: Collection[ClientId]) -> bool:
        """Check that every member or subsystem is listed.

        Raises:
            DirectoryUnavailableError: If the directory cannot be queried
        """
        if not client_ids:
            return True
        try:
            return await self._query(
                "members_exist", self._directory.members_exist(client_ids)
            )
        except DirectoryUnavailableError as e:
            self._probe.directory_unavailable(operation="members_exist", error=str(e))
            raise

    async def global_group_identifiers_exist(
        self, group_ids: Collection[GlobalGroupId]
    ) -> bool:
        """Check that every global group is listed.

        Raises:
            DirectoryUnavailableError: If the directory cannot be queried
        """
        if not group_ids:
            return True
        try:
            return await self._query(
                "global_groups_exist", self._directory.global_groups_exist(group_ids)
            )
        except DirectoryUnavailableError as e:
            self._probe.directory_unavailable(
                operation="global_groups_exist", error=str(e)
            )
            raise

    async def list_members(self) -> list[MemberInfo]:
        """List members and subsystems, or nothing if the directory is down."""
        try:
            return await self._query("list_members", self._directory.list_members())
        except DirectoryUnavailableError as e:
            self._probe.directory_degraded(operation="list_members", error=str(e))
            return []

    async def list_global_groups(
        self, instance_filter: str | None = None
    ) -> list[GlobalGroupInfo]:
        """List global groups, narrowed to instances matching a search term.

        When ``instance_filter`` is given, only instances whose identifier
        contains it (case-insensitively) are queried. Directory failures
        yield an empty list.
        """
        try:
            if not instance_filter:
                return await self._query(
                    "list_global_groups", self._directory.list_global_groups()
                )

            instances = await self._query(
                "list_instance_identifiers",
                self._directory.list_instance_identifiers(),
            )
            term = instance_filter.lower()
            matching = [i for i in instances if term in i.lower()]
            if not matching:
                return []
            return await self._query(
                "list_global_groups", self._directory.list_global_groups(matching)
            )
        except DirectoryUnavailableError as e:
            self._probe.directory_degraded(operation="list_global_groups", error=str(e))
            return []
