"""SQLAlchemy ORM model for the identifier table.

Every X-Road identity referenced by a client (its own identity, ACL
subjects, local group members) is stored once as an identifier row.
"""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import BigInteger, ColumnElement, String, UniqueConstraint, tuple_
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base
from serverconf.domain.value_objects import (
    GlobalGroupId,
    LocalGroupId,
    MemberId,
    SubsystemId,
    XRoadId,
    XRoadObjectType,
)

NATURAL_KEY_COLUMNS = (
    "object_type",
    "xroad_instance",
    "member_class",
    "member_code",
    "subsystem_code",
    "group_code",
)


class IdentifierModel(Base):
    """ORM model for identifier table.

    Absent parts are stored as empty strings so that the natural key
    over all parts is total and can back a unique constraint.
    """

    __tablename__ = "identifier"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    object_type: Mapped[str] = mapped_column(String(16), nullable=False)
    xroad_instance: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    member_class: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    member_code: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    subsystem_code: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    group_code: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    __table_args__ = (
        UniqueConstraint(*NATURAL_KEY_COLUMNS, name="uq_identifier_natural_key"),
    )

    @staticmethod
    def natural_key(xroad_id: XRoadId) -> dict[str, str]:
        """Column values identifying an X-Road identity."""
        key = dict.fromkeys(NATURAL_KEY_COLUMNS, "")
        key["object_type"] = xroad_id.object_type.value
        match xroad_id.object_type:
            case XRoadObjectType.MEMBER | XRoadObjectType.SUBSYSTEM:
                key["xroad_instance"] = xroad_id.xroad_instance
                key["member_class"] = xroad_id.member_class
                key["member_code"] = xroad_id.member_code
                if xroad_id.object_type == XRoadObjectType.SUBSYSTEM:
                    key["subsystem_code"] = xroad_id.subsystem_code
            case XRoadObjectType.GLOBALGROUP:
                key["xroad_instance"] = xroad_id.xroad_instance
                key["group_code"] = xroad_id.group_code
            case XRoadObjectType.LOCALGROUP:
                key["group_code"] = xroad_id.group_code
        return key

    @classmethod
    def natural_key_in(cls, xroad_ids: Collection[XRoadId]) -> ColumnElement[bool]:
        """WHERE clause matching rows of the given identities."""
        columns = [getattr(cls, name) for name in NATURAL_KEY_COLUMNS]
        values = [tuple(cls.natural_key(i).values()) for i in xroad_ids]
        return tuple_(*columns).in_(values)

    def to_domain(self) -> XRoadId:
        match XRoadObjectType(self.object_type):
            case XRoadObjectType.MEMBER:
                return MemberId(self.xroad_instance, self.member_class, self.member_code)
            case XRoadObjectType.SUBSYSTEM:
                return SubsystemId(
                    self.xroad_instance,
                    self.member_class,
                    self.member_code,
                    self.subsystem_code,
                )
            case XRoadObjectType.GLOBALGROUP:
                return GlobalGroupId(self.xroad_instance, self.group_code)
            case XRoadObjectType.LOCALGROUP:
                return LocalGroupId(self.group_code)

    def __repr__(self) -> str:
        return f"<IdentifierModel(id={self.id}, object_type={self.object_type})>"
