"""Unit tests for the JSON snapshot global configuration directory."""

import json
import os
from datetime import UTC, datetime

import pytest

from serverconf.application.services import GlobalConfService
from serverconf.domain.value_objects import GlobalGroupId, MemberId, SubsystemId
from serverconf.infrastructure.globalconf_directory import GlobalConfSnapshotDirectory
from serverconf.ports.directory import IGlobalConfDirectory
from serverconf.ports.exceptions import DirectoryUnavailableError

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)

SNAPSHOT = {
    "expires_at": "2026-03-02T00:00:00Z",
    "instances": {
        "EE": {
            "members": [
                {
                    "member_class": "GOV",
                    "member_code": "1234",
                    "name": "Ministry",
                    "subsystems": ["payroll", "archive"],
                }
            ],
            "global_groups": [
                {"group_code": "security-servers", "description": "All servers"}
            ],
        },
        "FI": {
            "members": [
                {"member_class": "COM", "member_code": "999", "name": "Acme Oy"}
            ],
        },
    },
}


def _write(path, snapshot) -> None:
    path.write_text(json.dumps(snapshot))


@pytest.fixture
def snapshot_path(tmp_path):
    path = tmp_path / "snapshot.json"
    _write(path, SNAPSHOT)
    return path


@pytest.fixture
def directory(snapshot_path):
    return GlobalConfSnapshotDirectory(snapshot_path=snapshot_path, clock=lambda: NOW)


class TestProtocolCompliance:
    def test_implements_protocol(self, directory):
        assert isinstance(directory, IGlobalConfDirectory)


class TestListings:
    @pytest.mark.asyncio
    async def test_lists_members_and_subsystems(self, directory):
        members = await directory.list_members()

        assert [m.id for m in members] == [
            MemberId("EE", "GOV", "1234"),
            SubsystemId("EE", "GOV", "1234", "payroll"),
            SubsystemId("EE", "GOV", "1234", "archive"),
            MemberId("FI", "COM", "999"),
        ]
        assert {m.name for m in members[:3]} == {"Ministry"}

    @pytest.mark.asyncio
    async def test_lists_instances(self, directory):
        assert await directory.list_instance_identifiers() == ["EE", "FI"]

    @pytest.mark.asyncio
    async def test_lists_global_groups_of_instances(self, directory):
        groups = await directory.list_global_groups(["FI"])
        assert groups == []

        groups = await directory.list_global_groups()
        assert [g.id for g in groups] == [GlobalGroupId("EE", "security-servers")]

    @pytest.mark.asyncio
    async def test_unknown_instance_is_unavailable(self, directory):
        with pytest.raises(DirectoryUnavailableError, match="XX"):
            await directory.list_global_groups(["XX"])


class TestExistence:
    @pytest.mark.asyncio
    async def test_all_members_must_exist(self, directory):
        payroll = SubsystemId("EE", "GOV", "1234", "payroll")
        missing = SubsystemId("EE", "GOV", "1234", "missing")

        assert await directory.members_exist({payroll})
        assert not await directory.members_exist({payroll, missing})

    @pytest.mark.asyncio
    async def test_global_groups_exist(self, directory):
        assert await directory.global_groups_exist(
            {GlobalGroupId("EE", "security-servers")}
        )
        assert not await directory.global_groups_exist({GlobalGroupId("FI", "x")})


class TestSnapshotState:
    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        directory = GlobalConfSnapshotDirectory(snapshot_path=tmp_path / "absent.json")

        with pytest.raises(DirectoryUnavailableError):
            await directory.list_members()

    @pytest.mark.asyncio
    async def test_malformed_file(self, snapshot_path, directory):
        snapshot_path.write_text("{not json")

        with pytest.raises(DirectoryUnavailableError):
            await directory.list_instance_identifiers()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "member",
        [
            {"member_class": "GOV", "member_code": "", "name": "x"},
            {"member_class": "GOV", "member_code": "12:34", "name": "x"},
            {
                "member_class": "GOV",
                "member_code": "1",
                "name": "x",
                "subsystems": ["a/b"],
            },
        ],
    )
    async def test_invalid_member_identity_is_unavailable(
        self, snapshot_path, directory, member
    ):
        _write(
            snapshot_path,
            {**SNAPSHOT, "instances": {"EE": {"members": [member]}}},
        )

        with pytest.raises(DirectoryUnavailableError):
            await directory.list_members()
        with pytest.raises(DirectoryUnavailableError):
            await directory.members_exist({SubsystemId("EE", "GOV", "1", "x")})

    @pytest.mark.asyncio
    async def test_invalid_global_group_code_is_unavailable(
        self, snapshot_path, directory
    ):
        _write(
            snapshot_path,
            {
                **SNAPSHOT,
                "instances": {"EE": {"global_groups": [{"group_code": ""}]}},
            },
        )

        with pytest.raises(DirectoryUnavailableError):
            await directory.global_groups_exist({GlobalGroupId("EE", "admins")})

    @pytest.mark.asyncio
    async def test_invalid_entry_degrades_service_listings(self, snapshot_path):
        _write(
            snapshot_path,
            {
                **SNAPSHOT,
                "instances": {
                    "EE": {
                        "members": [
                            {
                                "member_class": "GOV",
                                "member_code": "",
                                "name": "x",
                                "subsystems": ["x"],
                            }
                        ]
                    }
                },
            },
        )
        service = GlobalConfService(
            GlobalConfSnapshotDirectory(snapshot_path=snapshot_path, clock=lambda: NOW)
        )

        assert await service.list_members() == []
        with pytest.raises(DirectoryUnavailableError):
            await service.client_identifiers_exist({SubsystemId("EE", "GOV", "1", "x")})

    @pytest.mark.asyncio
    async def test_expired_snapshot(self, snapshot_path):
        directory = GlobalConfSnapshotDirectory(
            snapshot_path=snapshot_path,
            clock=lambda: datetime(2026, 3, 5, tzinfo=UTC),
        )

        with pytest.raises(DirectoryUnavailableError, match="expired"):
            await directory.list_members()

    @pytest.mark.asyncio
    async def test_reloads_when_file_changes(self, snapshot_path, directory):
        assert await directory.list_instance_identifiers() == ["EE", "FI"]

        _write(snapshot_path, {**SNAPSHOT, "instances": {"LV": {}}})
        stat = snapshot_path.stat()
        os.utime(snapshot_path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000))

        assert await directory.list_instance_identifiers() == ["LV"]
