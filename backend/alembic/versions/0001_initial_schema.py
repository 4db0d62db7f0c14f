"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates the users, events and announcements tables.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("name", sa.String(150), nullable=False, server_default=""),
        sa.Column(
            "role",
            sa.Enum("general-member", "e-board", "sponsor", "admin", name="userrole"),
            nullable=False,
            server_default="general-member",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("event_name", sa.String(255), nullable=False),
        sa.Column("event_description", sa.Text, nullable=False, server_default=""),
        sa.Column("event_location", sa.String(500), nullable=False, server_default=""),
        sa.Column("event_lat", sa.Float, nullable=True),
        sa.Column("event_long", sa.Float, nullable=True),
        sa.Column("event_date", sa.Date, nullable=False),
        sa.Column("event_time", sa.Time, nullable=True),
        sa.Column("event_hours", sa.Float, nullable=False, server_default="1"),
        sa.Column("event_hours_type", sa.String(50), nullable=True),
        sa.Column("event_limit", sa.Integer, nullable=True),
        sa.Column("check_in_window", sa.Integer, nullable=False, server_default="15"),
        sa.Column("check_in_radius", sa.Integer, nullable=False, server_default="100"),
        sa.Column("event_rsvped", sa.JSON, nullable=False),
        sa.Column("event_attending", sa.JSON, nullable=False),
        sa.Column("sponsors_attending", sa.JSON, nullable=False),
        sa.Column("is_hidden", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_by_id", sa.String(36), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_events_event_date", "events", ["event_date"])

    # --- announcements ---
    op.create_table(
        "announcements",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("is_pinned", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_by_id", sa.String(36), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("announcements")
    op.drop_index("ix_events_event_date", table_name="events")
    op.drop_table("events")
    op.drop_table("users")
    sa.Enum(name="userrole").drop(op.get_bind(), checkfirst=True)
