"""Value objects for the server configuration domain.

X-Road identities form a closed set of variants. Each variant is an
immutable value object with structural equality; code that needs to treat
variants differently dispatches on the ``object_type`` tag.

Short form (used in logs, API payloads and error messages):

    MEMBER       INSTANCE:CLASS/CODE
    SUBSYSTEM    INSTANCE:CLASS/CODE:SUBSYSTEM
    GLOBALGROUP  INSTANCE:GROUP
    LOCALGROUP   GROUP
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar

_RESERVED_CHARACTERS = (":", "/")


class XRoadObjectType(StrEnum):
    """Variant tag of an X-Road identity."""

    MEMBER = "MEMBER"
    SUBSYSTEM = "SUBSYSTEM"
    GLOBALGROUP = "GLOBALGROUP"
    LOCALGROUP = "LOCALGROUP"


def _require_parts(kind: str, **parts: str) -> None:
    for name, value in parts.items():
        if not value:
            raise ValueError(f"{kind} {name} must not be empty")
        if any(c in value for c in _RESERVED_CHARACTERS):
            raise ValueError(f"{kind} {name} must not contain ':' or '/': {value!r}")


@dataclass(frozen=True)
class MemberId:
    """Identity of an X-Road member (an organisation)."""

    xroad_instance: str
    member_class: str
    member_code: str

    object_type: ClassVar[XRoadObjectType] = XRoadObjectType.MEMBER

    def __post_init__(self) -> None:
        _require_parts(
            "Member",
            xroad_instance=self.xroad_instance,
            member_class=self.member_class,
            member_code=self.member_code,
        )

    def __str__(self) -> str:
        return self.to_short_string()

    def to_short_string(self) -> str:
        return f"{self.xroad_instance}:{self.member_class}/{self.member_code}"


@dataclass(frozen=True)
class SubsystemId:
    """Identity of a subsystem of an X-Road member."""

    xroad_instance: str
    member_class: str
    member_code: str
    subsystem_code: str

    object_type: ClassVar[XRoadObjectType] = XRoadObjectType.SUBSYSTEM

    def __post_init__(self) -> None:
        _require_parts(
            "Subsystem",
            xroad_instance=self.xroad_instance,
            member_class=self.member_class,
            member_code=self.member_code,
            subsystem_code=self.subsystem_code,
        )

    def __str__(self) -> str:
        return self.to_short_string()

    @property
    def member_id(self) -> MemberId:
        """The member owning this subsystem."""
        return MemberId(self.xroad_instance, self.member_class, self.member_code)

    def to_short_string(self) -> str:
        return (
            f"{self.xroad_instance}:{self.member_class}/{self.member_code}"
            f":{self.subsystem_code}"
        )


@dataclass(frozen=True)
class GlobalGroupId:
    """Identity of a global group defined in the global configuration."""

    xroad_instance: str
    group_code: str

    object_type: ClassVar[XRoadObjectType] = XRoadObjectType.GLOBALGROUP

    def __post_init__(self) -> None:
        _require_parts(
            "GlobalGroup",
            xroad_instance=self.xroad_instance,
            group_code=self.group_code,
        )

    def __str__(self) -> str:
        return self.to_short_string()

    def to_short_string(self) -> str:
        return f"{self.xroad_instance}:{self.group_code}"


@dataclass(frozen=True)
class LocalGroupId:
    """Identity of a local group.

    Local groups are scoped to a single client and carry no instance.
    """

    group_code: str

    object_type: ClassVar[XRoadObjectType] = XRoadObjectType.LOCALGROUP

    def __post_init__(self) -> None:
        _require_parts("LocalGroup", group_code=self.group_code)

    def __str__(self) -> str:
        return self.to_short_string()

    def to_short_string(self) -> str:
        return self.group_code


ClientId = MemberId | SubsystemId
XRoadId = MemberId | SubsystemId | GlobalGroupId | LocalGroupId


def infer_object_type(value: str) -> XRoadObjectType:
    """Infer the variant of a short-form identity string.

    Args:
        value: Identity in short form

    Returns:
        The variant tag implied by the separators present
    """
    if ":" not in value:
        return XRoadObjectType.LOCALGROUP
    if "/" not in value:
        return XRoadObjectType.GLOBALGROUP
    if value.count(":") >= 2:
        return XRoadObjectType.SUBSYSTEM
    return XRoadObjectType.MEMBER


def parse_xroad_id(
    value: str, object_type: XRoadObjectType | None = None
) -> XRoadId:
    """Parse a short-form identity string.

    Args:
        value: Identity in short form
        object_type: Expected variant. Inferred from the string when omitted.

    Returns:
        The identity value object

    Raises:
        ValueError: If the string does not match the variant's short form
    """
    if object_type is None:
        object_type = infer_object_type(value)

    match object_type:
        case XRoadObjectType.LOCALGROUP:
            return LocalGroupId(group_code=value)

        case XRoadObjectType.GLOBALGROUP:
            instance, sep, group_code = value.partition(":")
            if not sep:
                raise ValueError(f"Invalid global group identifier: {value!r}")
            return GlobalGroupId(xroad_instance=instance, group_code=group_code)

        case XRoadObjectType.MEMBER | XRoadObjectType.SUBSYSTEM:
            instance, sep, rest = value.partition(":")
            member_class, slash, member_part = rest.partition("/")
            if not sep or not slash:
                raise ValueError(f"Invalid client identifier: {value!r}")
            member_code, colon, subsystem_code = member_part.partition(":")

            if object_type == XRoadObjectType.MEMBER:
                if colon:
                    raise ValueError(f"Invalid member identifier: {value!r}")
                return MemberId(instance, member_class, member_code)

            if not colon:
                raise ValueError(f"Invalid subsystem identifier: {value!r}")
            return SubsystemId(instance, member_class, member_code, subsystem_code)

    raise ValueError(f"Unsupported object type: {object_type}")
