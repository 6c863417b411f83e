"""Directory port: read-only access to the global configuration.

The global configuration is a centrally produced, periodically distributed
snapshot listing every member, subsystem and global group of the X-Road
federation.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from serverconf.domain.value_objects import ClientId, GlobalGroupId


@dataclass(frozen=True)
class MemberInfo:
    """A member or subsystem listed in the global configuration."""

    id: ClientId
    name: str


@dataclass(frozen=True)
class GlobalGroupInfo:
    """A global group listed in the global configuration."""

    id: GlobalGroupId
    description: str


@runtime_checkable
class IGlobalConfDirectory(Protocol):
    """Read-only view of the current global configuration snapshot.

    Every method raises DirectoryUnavailableError when the snapshot cannot
    be queried.
    """

    async def members_exist(self, client_ids: Collection[ClientId]) -> bool:
        """Check that every given member/subsystem is listed.

        Args:
            client_ids: Identities to check as a batch

        Returns:
            True only if all of them are present
        """
        ...

    async def global_groups_exist(self, group_ids: Collection[GlobalGroupId]) -> bool:
        """Check that every given global group is listed."""
        ...

    async def list_members(self) -> list[MemberInfo]:
        """List all members and subsystems with their member name."""
        ...

    async def list_global_groups(
        self, instances: Collection[str] | None = None
    ) -> list[GlobalGroupInfo]:
        """List global groups, optionally only those of the given instances.

        Raises:
            DirectoryUnavailableError: Also when a requested instance is unknown
        """
        ...

    async def list_instance_identifiers(self) -> list[str]:
        """List the X-Road instance identifiers present in the snapshot."""
        ...
