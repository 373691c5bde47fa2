"""Rooms, calendar quotas and reservations.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "rooms",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="2"),
        sa.Column("room_count", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("daily_prices", sa.Text()),
        sa.Column("weekday_prices", sa.Text()),
        *_timestamps(),
    )

    op.create_table(
        "room_quotas",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "room_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("rooms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("quota", sa.Integer(), nullable=False, server_default="0"),
        sa.UniqueConstraint("room_id", "date", name="uq_room_quota_date"),
    )

    reservation_status_enum = sa.Enum(
        "PENDING", "CONFIRMED", "CANCELED", name="reservationstatus"
    )
    payment_method_enum = sa.Enum("ON_SITE", "CREDIT_CARD", name="paymentmethod")

    op.create_table(
        "reservations",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "room_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("rooms.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("check_in", sa.Date(), nullable=False),
        sa.Column("check_out", sa.Date(), nullable=False),
        sa.Column("guest_count", sa.Integer(), nullable=False),
        sa.Column("total_price", sa.Numeric(12, 2), nullable=False),
        sa.Column("client_total_price", sa.Numeric(12, 2)),
        sa.Column("status", reservation_status_enum, nullable=False),
        sa.Column("payment_method", payment_method_enum, nullable=False),
        sa.Column("reservation_code", sa.String(length=32), nullable=False, unique=True),
        sa.Column("held_quota_ids", sa.Text()),
        *_timestamps(),
    )
    op.create_index("ix_reservations_room_id", "reservations", ["room_id"])


def downgrade() -> None:
    op.drop_index("ix_reservations_room_id", table_name="reservations")
    op.drop_table("reservations")
    sa.Enum(name="paymentmethod").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="reservationstatus").drop(op.get_bind(), checkfirst=True)
    op.drop_table("room_quotas")
    op.drop_table("rooms")
