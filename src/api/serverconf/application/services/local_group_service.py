"""Resolution of local group ids within one client."""

from __future__ import annotations

from collections.abc import Collection

from serverconf.domain.aggregates import Client
from serverconf.domain.value_objects import LocalGroupId
from serverconf.ports.exceptions import LocalGroupNotFoundError


class LocalGroupService:
    """Resolves numeric local group ids against a client's own groups.

    Groups are indexed per call from the client aggregate, so an id that
    belongs to another client is indistinguishable from a missing one.
    """

    def resolve_to_identifiers(
        self, client: Client, local_group_ids: Collection[int]
    ) -> set[LocalGroupId]:
        """Map local group ids to local group identities.

        Args:
            client: The client whose local groups may be referenced
            local_group_ids: Numeric ids of local groups

        Returns:
            The identities of the referenced groups

        Raises:
            LocalGroupNotFoundError: If any id is not one of the client's groups
        """
        groups_by_id = {group.id: group for group in client.local_groups}
        missing = sorted(i for i in set(local_group_ids) if i not in groups_by_id)
        if missing:
            raise LocalGroupNotFoundError(
                f"Local groups {missing} not found for {client}"
            )
        return {groups_by_id[i].identifier for i in local_group_ids}
