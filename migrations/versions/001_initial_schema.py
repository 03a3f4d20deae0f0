"""Initial schema: preparers, booking_services, preparer_availability, appointments.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

rule_kind = sa.Enum("OPEN", "BLOCKED", name="rulekind")
appointment_status = sa.Enum(
    "REQUESTED",
    "SCHEDULED",
    "CONFIRMED",
    "PENDING_APPROVAL",
    "CANCELLED",
    "COMPLETED",
    "NO_SHOW",
    name="appointmentstatus",
)
appointment_type = sa.Enum(
    "PHONE_CALL", "VIDEO_CALL", "IN_PERSON", "CONSULTATION", "FOLLOW_UP", name="appointmenttype"
)


def upgrade() -> None:
    op.create_table(
        "preparers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("booking_enabled", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("allow_phone_bookings", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("allow_video_bookings", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("allow_in_person_bookings", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("require_approval_for_bookings", sa.Boolean(), nullable=False, server_default="false"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "booking_services",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False, server_default="60"),
        sa.Column("buffer_after_minutes", sa.Integer(), nullable=False, server_default="15"),
        sa.Column("availability_rule_ids", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "preparer_availability",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("preparer_id", sa.Integer(), nullable=False),
        sa.Column("kind", rule_kind, nullable=False, server_default="OPEN"),
        sa.Column("day_of_week", sa.Integer(), nullable=True),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("is_override", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("override_from", sa.Date(), nullable=True),
        sa.Column("override_until", sa.Date(), nullable=True),
        sa.Column("service_ids", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.ForeignKeyConstraint(["preparer_id"], ["preparers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_preparer_availability_preparer_id"), "preparer_availability", ["preparer_id"], unique=False
    )

    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("preparer_id", sa.Integer(), nullable=False),
        sa.Column("client_name", sa.String(), nullable=False),
        sa.Column("type", appointment_type, nullable=False, server_default="CONSULTATION"),
        sa.Column("subject", sa.String(), nullable=True),
        sa.Column("scheduled_for", sa.DateTime(), nullable=True),
        sa.Column("scheduled_end", sa.DateTime(), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("status", appointment_status, nullable=False, server_default="SCHEDULED"),
        sa.ForeignKeyConstraint(["preparer_id"], ["preparers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_appointments_preparer_id"), "appointments", ["preparer_id"], unique=False)
    op.create_index(op.f("ix_appointments_scheduled_for"), "appointments", ["scheduled_for"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_appointments_scheduled_for"), table_name="appointments")
    op.drop_index(op.f("ix_appointments_preparer_id"), table_name="appointments")
    op.drop_table("appointments")
    op.drop_index(op.f("ix_preparer_availability_preparer_id"), table_name="preparer_availability")
    op.drop_table("preparer_availability")
    op.drop_table("booking_services")
    op.drop_table("preparers")
    appointment_type.drop(op.get_bind(), checkfirst=True)
    appointment_status.drop(op.get_bind(), checkfirst=True)
    rule_kind.drop(op.get_bind(), checkfirst=True)
