"""Initial schema: users, pins (PostGIS point), connect

Learn: The postgis extension must exist before the geometry column can be
created. users.email is unique only among rows with deleted_at IS NULL,
so a soft-deleted account does not block re-registration.

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from geoalchemy2 import Geometry
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS postgis")

    # ─── users ───────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        "uq_users_email_active",
        "users",
        ["email"],
        unique=True,
        postgresql_where=sa.text("deleted_at IS NULL"),
    )

    # ─── pins ────────────────────────────────────────────
    op.create_table(
        "pins",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "location",
            Geometry(geometry_type="POINT", srid=4326, spatial_index=False),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("edit_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_pins_user_active", "pins", ["user_id", "created_at"])
    op.create_index(
        "idx_pins_location", "pins", ["location"], postgresql_using="gist"
    )

    # ─── connect ─────────────────────────────────────────
    op.create_table(
        "connect",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("pins_id_1", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("pins_id_2", postgresql.ARRAY(sa.String()), nullable=False),
        sa.Column("show", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_connect_user_id", "connect", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_connect_user_id", table_name="connect")
    op.drop_table("connect")
    op.drop_index("idx_pins_location", table_name="pins")
    op.drop_index("ix_pins_user_active", table_name="pins")
    op.drop_table("pins")
    op.drop_index("uq_users_email_active", table_name="users")
    op.drop_table("users")
