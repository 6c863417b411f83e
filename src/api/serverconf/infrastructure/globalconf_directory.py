"""Global configuration directory backed by a JSON snapshot file.

The snapshot is produced by the configuration client and replaced
atomically on each download. Its layout:

    {
      "expires_at": "2026-01-01T00:00:00Z",
      "instances": {
        "EE": {
          "members": [
            {"member_class": "GOV", "member_code": "123",
             "name": "Ministry", "subsystems": ["payroll"]}
          ],
          "global_groups": [{"group_code": "security-servers",
                             "description": "All security servers"}]
        }
      }
    }

The file is re-read whenever its modification time changes.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Collection
from datetime import UTC, datetime
from pathlib import Path

from pydantic import (
    AwareDatetime,
    BaseModel,
    Field,
    PrivateAttr,
    ValidationError,
    model_validator,
)

from serverconf.domain.value_objects import (
    ClientId,
    GlobalGroupId,
    MemberId,
    SubsystemId,
)
from serverconf.infrastructure.observability import (
    DefaultGlobalConfDirectoryProbe,
    GlobalConfDirectoryProbe,
)
from serverconf.ports.directory import GlobalGroupInfo, IGlobalConfDirectory, MemberInfo
from serverconf.ports.exceptions import DirectoryUnavailableError


class MemberEntry(BaseModel):
    member_class: str
    member_code: str
    name: str
    subsystems: list[str] = Field(default_factory=list)


class GlobalGroupEntry(BaseModel):
    group_code: str
    description: str = ""


class InstanceEntry(BaseModel):
    members: list[MemberEntry] = Field(default_factory=list)
    global_groups: list[GlobalGroupEntry] = Field(default_factory=list)


class GlobalConfSnapshot(BaseModel):
    """Parsed global configuration snapshot.

    Identities are built once while parsing, so an entry that violates an
    identifier rule fails validation like any other malformed content.
    """

    expires_at: AwareDatetime
    instances: dict[str, InstanceEntry] = Field(default_factory=dict)

    _members: list[MemberInfo] = PrivateAttr()
    _global_groups: dict[str, list[GlobalGroupInfo]] = PrivateAttr()

    @model_validator(mode="after")
    def _build_identities(self) -> GlobalConfSnapshot:
        members: list[MemberInfo] = []
        global_groups: dict[str, list[GlobalGroupInfo]] = {}
        for instance, entry in self.instances.items():
            for member in entry.members:
                member_id = MemberId(instance, member.member_class, member.member_code)
                members.append(MemberInfo(id=member_id, name=member.name))
                members.extend(
                    MemberInfo(
                        id=SubsystemId(
                            instance, member.member_class, member.member_code, code
                        ),
                        name=member.name,
                    )
                    for code in member.subsystems
                )
            global_groups[instance] = [
                GlobalGroupInfo(
                    id=GlobalGroupId(instance, group.group_code),
                    description=group.description,
                )
                for group in entry.global_groups
            ]
        self._members = members
        self._global_groups = global_groups
        return self

    def members(self) -> list[MemberInfo]:
        """Members followed by their subsystems, named after the member."""
        return list(self._members)

    def global_groups(self, instances: Collection[str]) -> list[GlobalGroupInfo]:
        return [
            group for instance in instances for group in self._global_groups[instance]
        ]


class GlobalConfSnapshotDirectory(IGlobalConfDirectory):
    """IGlobalConfDirectory implementation reading a local snapshot file.

    File I/O runs in a worker thread. A missing, unreadable, malformed or
    expired snapshot raises DirectoryUnavailableError from every method.
    """

    def __init__(
        self,
        snapshot_path: Path,
        probe: GlobalConfDirectoryProbe | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._snapshot_path = snapshot_path
        self._probe = probe or DefaultGlobalConfDirectoryProbe()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._cached: tuple[int, GlobalConfSnapshot] | None = None

    async def members_exist(self, client_ids: Collection[ClientId]) -> bool:
        snapshot = await self._current_snapshot()
        known = {member.id for member in snapshot.members()}
        return all(client_id in known for client_id in client_ids)

    async def global_groups_exist(self, group_ids: Collection[GlobalGroupId]) -> bool:
        snapshot = await self._current_snapshot()
        known = {group.id for group in snapshot.global_groups(snapshot.instances)}
        return all(group_id in known for group_id in group_ids)

    async def list_members(self) -> list[MemberInfo]:
        snapshot = await self._current_snapshot()
        return snapshot.members()

    async def list_global_groups(
        self, instances: Collection[str] | None = None
    ) -> list[GlobalGroupInfo]:
        snapshot = await self._current_snapshot()
        if instances is None:
            return snapshot.global_groups(snapshot.instances)

        unknown = sorted(set(instances) - snapshot.instances.keys())
        if unknown:
            raise DirectoryUnavailableError(
                f"Global configuration has no instances {unknown}"
            )
        return snapshot.global_groups(instances)

    async def list_instance_identifiers(self) -> list[str]:
        snapshot = await self._current_snapshot()
        return list(snapshot.instances)

    async def _current_snapshot(self) -> GlobalConfSnapshot:
        path = str(self._snapshot_path)
        try:
            self._cached = await asyncio.to_thread(self._read_if_changed, self._cached)
        except (OSError, ValidationError) as e:
            self._probe.snapshot_unavailable(path=path, reason=str(e))
            raise DirectoryUnavailableError(
                f"Global configuration snapshot {path} cannot be read"
            ) from e

        snapshot = self._cached[1]
        if snapshot.expires_at <= self._clock():
            self._probe.snapshot_unavailable(path=path, reason="expired")
            raise DirectoryUnavailableError(
                f"Global configuration snapshot expired at "
                f"{snapshot.expires_at.isoformat()}"
            )
        return snapshot

    def _read_if_changed(
        self, cached: tuple[int, GlobalConfSnapshot] | None
    ) -> tuple[int, GlobalConfSnapshot]:
        mtime = self._snapshot_path.stat().st_mtime_ns
        if cached is not None and cached[0] == mtime:
            return cached

        snapshot = GlobalConfSnapshot.model_validate_json(
            self._snapshot_path.read_bytes()
        )
        self._probe.snapshot_loaded(
            path=str(self._snapshot_path), instance_count=len(snapshot.instances)
        )
        return mtime, snapshot
