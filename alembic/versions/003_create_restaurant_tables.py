"""Create restaurant, reservation and seat allocation tables

Revision ID: 003
Revises: 002
Create Date: 2026-10-14

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "003"
down_revision: str | None = "002"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "restaurant",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column("rating_count", sa.Integer(), nullable=False),
        sa.Column("cuisines", sa.JSON(), nullable=False),
        sa.Column("price_for_two", sa.Integer(), nullable=False),
        sa.Column("address", sa.String(length=512), nullable=False),
        sa.Column("location", sa.String(length=128), nullable=False),
        sa.Column("opening_time", sa.String(length=16), nullable=False),
        sa.Column("closing_time", sa.String(length=16), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=False),
        sa.Column("main_image", sa.String(length=512), nullable=True),
        sa.Column("other_images", sa.JSON(), nullable=False),
        sa.Column("menu_images", sa.JSON(), nullable=False),
        sa.Column("time_slots", sa.JSON(), nullable=False),
        sa.Column("direction", sa.Text(), nullable=True),
        sa.Column("info", sa.JSON(), nullable=False),
        sa.Column("total_seats", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_restaurant_name"), "restaurant", ["name"], unique=False)
    op.create_index(op.f("ix_restaurant_location"), "restaurant", ["location"], unique=False)

    op.create_table(
        "reservation",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=256), nullable=False),
        sa.Column("restaurant_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.String(length=32), nullable=False),
        sa.Column("time_slot", sa.Integer(), nullable=False),
        sa.Column("guests", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["restaurant_id"], ["restaurant.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_reservation_email"), "reservation", ["email"], unique=False)
    op.create_index(op.f("ix_reservation_restaurant_id"), "reservation", ["restaurant_id"], unique=False)

    op.create_table(
        "seat_allocation",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("restaurant_id", sa.Integer(), nullable=False),
        sa.Column("date", sa.String(length=32), nullable=False),
        sa.Column("time_slot", sa.Integer(), nullable=False),
        sa.Column("booked_guests", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["restaurant_id"], ["restaurant.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("restaurant_id", "date", "time_slot", name="uq_seat_allocation_slot"),
    )
    op.create_index(op.f("ix_seat_allocation_restaurant_id"), "seat_allocation", ["restaurant_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_seat_allocation_restaurant_id"), table_name="seat_allocation")
    op.drop_table("seat_allocation")
    op.drop_index(op.f("ix_reservation_restaurant_id"), table_name="reservation")
    op.drop_index(op.f("ix_reservation_email"), table_name="reservation")
    op.drop_table("reservation")
    op.drop_index(op.f("ix_restaurant_location"), table_name="restaurant")
    op.drop_index(op.f("ix_restaurant_name"), table_name="restaurant")
    op.drop_table("restaurant")
