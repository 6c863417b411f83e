"""Unit tests for X-Road identity value objects."""

import pytest

from serverconf.domain.value_objects import (
    GlobalGroupId,
    LocalGroupId,
    MemberId,
    SubsystemId,
    XRoadObjectType,
    infer_object_type,
    parse_xroad_id,
)


class TestIdentityEquality:
    """Identities compare by value."""

    def test_equal_subsystems_are_equal_and_hash_alike(self):
        """Should treat subsystems with the same parts as the same identity."""
        a = SubsystemId("EE", "GOV", "1234", "sub")
        b = SubsystemId("EE", "GOV", "1234", "sub")
        assert a == b
        assert len({a, b}) == 1

    def test_variants_with_same_parts_differ(self):
        """Should distinguish a member from its subsystem."""
        assert MemberId("EE", "GOV", "1234") != SubsystemId("EE", "GOV", "1234", "x")

    def test_subsystem_exposes_its_member(self):
        subsystem = SubsystemId("EE", "GOV", "1234", "sub")
        assert subsystem.member_id == MemberId("EE", "GOV", "1234")


class TestIdentityValidation:
    """Identity parts must be non-empty and free of separators."""

    def test_rejects_empty_part(self):
        with pytest.raises(ValueError, match="must not be empty"):
            MemberId("EE", "", "1234")

    @pytest.mark.parametrize("code", ["a:b", "a/b"])
    def test_rejects_separator_in_part(self, code):
        with pytest.raises(ValueError, match="must not contain"):
            GlobalGroupId("EE", code)


class TestShortForm:
    """Tests for short-form rendering and parsing."""

    @pytest.mark.parametrize(
        ("identity", "short"),
        [
            (MemberId("EE", "GOV", "1234"), "EE:GOV/1234"),
            (SubsystemId("EE", "GOV", "1234", "sub"), "EE:GOV/1234:sub"),
            (GlobalGroupId("EE", "servers"), "EE:servers"),
            (LocalGroupId("admins"), "admins"),
        ],
    )
    def test_renders_short_form(self, identity, short):
        assert str(identity) == short

    @pytest.mark.parametrize(
        ("short", "object_type"),
        [
            ("EE:GOV/1234", XRoadObjectType.MEMBER),
            ("EE:GOV/1234:sub", XRoadObjectType.SUBSYSTEM),
            ("EE:servers", XRoadObjectType.GLOBALGROUP),
            ("admins", XRoadObjectType.LOCALGROUP),
        ],
    )
    def test_infers_object_type(self, short, object_type):
        assert infer_object_type(short) == object_type

    def test_parses_subsystem(self):
        assert parse_xroad_id("EE:GOV/1234:sub") == SubsystemId(
            "EE", "GOV", "1234", "sub"
        )

    def test_parses_with_explicit_type(self):
        assert parse_xroad_id("EE:servers", XRoadObjectType.GLOBALGROUP) == (
            GlobalGroupId("EE", "servers")
        )

    def test_rejects_member_form_when_subsystem_expected(self):
        """Should fail when the string does not match the requested variant."""
        with pytest.raises(ValueError, match="Invalid subsystem identifier"):
            parse_xroad_id("EE:GOV/1234", XRoadObjectType.SUBSYSTEM)

    def test_rejects_subsystem_form_when_member_expected(self):
        with pytest.raises(ValueError, match="Invalid member identifier"):
            parse_xroad_id("EE:GOV/1234:sub", XRoadObjectType.MEMBER)

    def test_rejects_global_group_without_instance(self):
        with pytest.raises(ValueError):
            parse_xroad_id("servers", XRoadObjectType.GLOBALGROUP)
