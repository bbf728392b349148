"""Initial schema: members, places, schedules, attendees, routes, chat messages

Revision ID: 001_initial
Revises:
Create Date: 2025-01-06 00:00:00.000000

"""

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "member",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("nickname", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("profile_image_url", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_member_user_id", "member", ["user_id"], unique=True)

    op.create_table(
        "travelplace",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("country", sa.String(), nullable=False),
        sa.Column("city", sa.String(), nullable=False),
        sa.Column("district", sa.String(), nullable=False),
        sa.Column("address", sa.String(), nullable=False),
        sa.Column("detail_address", sa.String(), nullable=True),
        sa.Column("place_name", sa.String(), nullable=False),
        sa.Column("thumbnail_url", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_travelplace_country", "travelplace", ["country"])
    op.create_index("ix_travelplace_city", "travelplace", ["city"])
    op.create_index("ix_travelplace_district", "travelplace", ["district"])

    op.create_table(
        "travelschedule",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("schedule_name", sa.String(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "travelattendee",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("schedule_id", sa.Integer(), nullable=False),
        sa.Column("member_id", sa.Integer(), nullable=False),
        sa.Column("role", sa.String(), nullable=False),
        sa.Column("permission", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["schedule_id"], ["travelschedule.id"]),
        sa.ForeignKeyConstraint(["member_id"], ["member.id"]),
        sa.UniqueConstraint("schedule_id", "member_id", name="uq_schedule_attendee"),
    )
    op.create_index("ix_travelattendee_schedule_id", "travelattendee", ["schedule_id"])
    op.create_index("ix_travelattendee_member_id", "travelattendee", ["member_id"])

    op.create_table(
        "travelroute",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("schedule_id", sa.Integer(), nullable=False),
        sa.Column("place_id", sa.Integer(), nullable=False),
        sa.Column("route_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["schedule_id"], ["travelschedule.id"]),
        sa.ForeignKeyConstraint(["place_id"], ["travelplace.id"]),
        sa.UniqueConstraint("schedule_id", "route_order", name="uq_schedule_route_order"),
    )
    op.create_index("ix_travelroute_schedule_id", "travelroute", ["schedule_id"])

    # No foreign key: chat messages are keyed by schedule id only
    op.create_table(
        "chatmessage",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("schedule_id", sa.Integer(), nullable=False),
        sa.Column("sender_user_id", sa.String(), nullable=False),
        sa.Column("message", sa.String(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_chatmessage_schedule_id", "chatmessage", ["schedule_id"])


def downgrade() -> None:
    op.drop_index("ix_chatmessage_schedule_id", table_name="chatmessage")
    op.drop_table("chatmessage")
    op.drop_index("ix_travelroute_schedule_id", table_name="travelroute")
    op.drop_table("travelroute")
    op.drop_index("ix_travelattendee_member_id", table_name="travelattendee")
    op.drop_index("ix_travelattendee_schedule_id", table_name="travelattendee")
    op.drop_table("travelattendee")
    op.drop_table("travelschedule")
    op.drop_index("ix_travelplace_district", table_name="travelplace")
    op.drop_index("ix_travelplace_city", table_name="travelplace")
    op.drop_index("ix_travelplace_country", table_name="travelplace")
    op.drop_table("travelplace")
    op.drop_index("ix_member_user_id", table_name="member")
    op.drop_table("member")
