"""SQLAlchemy ORM models for a client and the rows it owns.

A client owns its service descriptions (and their services), endpoints,
local groups (and their members) and ACL rows. All of them are loaded and
persisted as one aggregate by the client repository.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infrastructure.database.models import Base, TimestampMixin
from serverconf.infrastructure.models.identifier import IdentifierModel


class ClientModel(Base, TimestampMixin):
    """ORM model for client table."""

    __tablename__ = "client"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    identifier_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("identifier.id", ondelete="RESTRICT"),
        nullable=False,
        unique=True,
    )

    identifier: Mapped[IdentifierModel] = relationship()
    service_descriptions: Mapped[list[ServiceDescriptionModel]] = relationship(
        back_populates="client", cascade="all, delete-orphan"
    )
    endpoints: Mapped[list[EndpointModel]] = relationship(
        cascade="all, delete-orphan"
    )
    local_groups: Mapped[list[LocalGroupModel]] = relationship(
        cascade="all, delete-orphan"
    )
    access_rights: Mapped[list[AccessRightModel]] = relationship(
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<ClientModel(id={self.id}, identifier_id={self.identifier_id})>"


class ServiceDescriptionModel(Base):
    """ORM model for service_description table."""

    __tablename__ = "service_description"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("client.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    disabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    disabled_notice: Mapped[str | None] = mapped_column(Text, nullable=True)
    refreshed_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    client: Mapped[ClientModel] = relationship(back_populates="service_descriptions")
    services: Mapped[list[ServiceModel]] = relationship(cascade="all, delete-orphan")


class ServiceModel(Base):
    """ORM model for service table."""

    __tablename__ = "service"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    service_description_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("service_description.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_code: Mapped[str] = mapped_column(String(255), nullable=False)
    service_version: Mapped[str | None] = mapped_column(String(255), nullable=True)
    title: Mapped[str | None] = mapped_column(Text, nullable=True)


class EndpointModel(Base):
    """ORM model for endpoint table.

    The base endpoint of a service has method ``*`` and path ``**``.
    """

    __tablename__ = "endpoint"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("client.id", ondelete="CASCADE"), nullable=False, index=True
    )
    service_code: Mapped[str] = mapped_column(String(255), nullable=False)
    method: Mapped[str] = mapped_column(String(16), nullable=False)
    path: Mapped[str] = mapped_column(Text, nullable=False)
    generated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class LocalGroupModel(Base):
    """ORM model for local_group table. Group codes are unique per client."""

    __tablename__ = "local_group"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("client.id", ondelete="CASCADE"), nullable=False, index=True
    )
    group_code: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    updated: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    members: Mapped[list[GroupMemberModel]] = relationship(
        cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("client_id", "group_code", name="uq_local_group_client_code"),
    )


class GroupMemberModel(Base):
    """ORM model for group_member table."""

    __tablename__ = "group_member"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    local_group_id: Mapped[int] = mapped_column(
        BigInteger,
        ForeignKey("local_group.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    identifier_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("identifier.id", ondelete="RESTRICT"), nullable=False
    )
    added: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    identifier: Mapped[IdentifierModel] = relationship()


class AccessRightModel(Base):
    """ORM model for access_right table.

    Unique over (endpoint_id, subject_id): a subject holds at most one
    right per endpoint.
    """

    __tablename__ = "access_right"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    client_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("client.id", ondelete="CASCADE"), nullable=False, index=True
    )
    endpoint_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("endpoint.id", ondelete="CASCADE"), nullable=False
    )
    subject_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("identifier.id", ondelete="RESTRICT"), nullable=False
    )
    rights_given: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    subject: Mapped[IdentifierModel] = relationship()

    __table_args__ = (
        UniqueConstraint(
            "endpoint_id", "subject_id", name="uq_access_right_endpoint_subject"
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<AccessRightModel(id={self.id}, endpoint_id={self.endpoint_id}, "
            f"subject_id={self.subject_id})>"
        )
