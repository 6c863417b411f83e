"""create server configuration tables

Revision ID: 3c1f0a9d2b7e
Revises:
Create Date: 2026-10-18 09:12:44.310582

Creates the client aggregate tables and the shared identifier table that
access rights and local group members reference.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c1f0a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=True)


def _fk_column(name: str, target: str, ondelete: str) -> sa.Column:
    return sa.Column(
        name,
        sa.BigInteger,
        sa.ForeignKey(f"{target}.id", ondelete=ondelete),
        nullable=False,
    )


def upgrade() -> None:
    """Create server configuration tables.

    Key constraints:
    - identifier natural key is unique (absent parts stored as '')
    - access_right is unique per (endpoint_id, subject_id)
    - local group codes are unique per client
    """
    op.create_table(
        "identifier",
        _id_column(),
        sa.Column("object_type", sa.String(16), nullable=False),
        sa.Column("xroad_instance", sa.String(255), nullable=False, server_default=""),
        sa.Column("member_class", sa.String(255), nullable=False, server_default=""),
        sa.Column("member_code", sa.String(255), nullable=False, server_default=""),
        sa.Column("subsystem_code", sa.String(255), nullable=False, server_default=""),
        sa.Column("group_code", sa.String(255), nullable=False, server_default=""),
        sa.UniqueConstraint(
            "object_type",
            "xroad_instance",
            "member_class",
            "member_code",
            "subsystem_code",
            "group_code",
            name="uq_identifier_natural_key",
        ),
    )

    op.create_table(
        "client",
        _id_column(),
        _fk_column("identifier_id", "identifier", "RESTRICT"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("identifier_id", name="uq_client_identifier_id"),
    )

    op.create_table(
        "service_description",
        _id_column(),
        _fk_column("client_id", "client", "CASCADE"),
        sa.Column("url", sa.Text, nullable=False),
        sa.Column("type", sa.String(16), nullable=False),
        sa.Column("disabled", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("disabled_notice", sa.Text, nullable=True),
        sa.Column("refreshed_date", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "ix_service_description_client_id", "service_description", ["client_id"]
    )

    op.create_table(
        "service",
        _id_column(),
        _fk_column("service_description_id", "service_description", "CASCADE"),
        sa.Column("service_code", sa.String(255), nullable=False),
        sa.Column("service_version", sa.String(255), nullable=True),
        sa.Column("title", sa.Text, nullable=True),
    )
    op.create_index(
        "ix_service_service_description_id", "service", ["service_description_id"]
    )

    op.create_table(
        "endpoint",
        _id_column(),
        _fk_column("client_id", "client", "CASCADE"),
        sa.Column("service_code", sa.String(255), nullable=False),
        sa.Column("method", sa.String(16), nullable=False),
        sa.Column("path", sa.Text, nullable=False),
        sa.Column("generated", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_endpoint_client_id", "endpoint", ["client_id"])

    op.create_table(
        "local_group",
        _id_column(),
        _fk_column("client_id", "client", "CASCADE"),
        sa.Column("group_code", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("updated", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "client_id", "group_code", name="uq_local_group_client_code"
        ),
    )
    op.create_index("ix_local_group_client_id", "local_group", ["client_id"])

    op.create_table(
        "group_member",
        _id_column(),
        _fk_column("local_group_id", "local_group", "CASCADE"),
        _fk_column("identifier_id", "identifier", "RESTRICT"),
        sa.Column("added", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_group_member_local_group_id", "group_member", ["local_group_id"])

    op.create_table(
        "access_right",
        _id_column(),
        _fk_column("client_id", "client", "CASCADE"),
        _fk_column("endpoint_id", "endpoint", "CASCADE"),
        _fk_column("subject_id", "identifier", "RESTRICT"),
        sa.Column("rights_given", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "endpoint_id", "subject_id", name="uq_access_right_endpoint_subject"
        ),
    )
    op.create_index("ix_access_right_client_id", "access_right", ["client_id"])


def downgrade() -> None:
    """Drop server configuration tables in dependency order."""
    op.drop_index("ix_access_right_client_id", table_name="access_right")
    op.drop_table("access_right")
    op.drop_index("ix_group_member_local_group_id", table_name="group_member")
    op.drop_table("group_member")
    op.drop_index("ix_local_group_client_id", table_name="local_group")
    op.drop_table("local_group")
    op.drop_index("ix_endpoint_client_id", table_name="endpoint")
    op.drop_table("endpoint")
    op.drop_index("ix_service_service_description_id", table_name="service")
    op.drop_table("service")
    op.drop_index(
        "ix_service_description_client_id", table_name="service_description"
    )
    op.drop_table("service_description")
    op.drop_table("client")
    op.drop_table("identifier")
