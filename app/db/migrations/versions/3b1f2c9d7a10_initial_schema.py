"""Initial schema: rooms, availability, bookings, receipts, promo codes

Revision ID: 3b1f2c9d7a10
Revises:
Create Date: 2026-10-19 10:12:04.118231

"""
from alembic import op
import sqlalchemy as sa


revision = "3b1f2c9d7a10"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    ]


def upgrade():
    op.create_table(
        "admins",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
    )
    op.create_index("ix_admins_id", "admins", ["id"])
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)

    op.create_table(
        "rooms",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=False),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("amenities", sa.JSON(), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column("beds", sa.Integer(), nullable=False),
        sa.Column("bathrooms", sa.Integer(), nullable=False),
        sa.Column("category_type", sa.String(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("breakfast_price", sa.Float(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "room_availability",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("room_id", sa.String(36), sa.ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("source", sa.String(), nullable=False),
        sa.Column("booking_id", sa.String(36), nullable=True),
        sa.Column("notes", sa.String(), nullable=True),
        sa.Column("updated_by", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("room_id", "date", name="uq_room_availability_room_date"),
    )
    op.create_index("ix_room_availability_room_id", "room_availability", ["room_id"])
    op.create_index("ix_room_availability_date", "room_availability", ["date"])
    op.create_index("ix_room_availability_booking_id", "room_availability", ["booking_id"])

    op.create_table(
        "room_images",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("room_id", sa.String(36), sa.ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False),
        sa.Column("image_url", sa.String(), nullable=False),
        sa.Column("public_id", sa.String(), nullable=False),
        sa.Column("is_primary", sa.Boolean(), nullable=False),
        sa.Column("order_index", sa.Integer(), nullable=False),
    )
    op.create_index("ix_room_images_room_id", "room_images", ["room_id"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("room_id", sa.String(36), sa.ForeignKey("rooms.id"), nullable=False),
        sa.Column("customer_name", sa.String(), nullable=False),
        sa.Column("customer_email", sa.String(), nullable=False),
        sa.Column("customer_phone", sa.String(), nullable=True),
        sa.Column("customer_id", sa.String(), nullable=True),
        sa.Column("check_in_date", sa.Date(), nullable=False),
        sa.Column("check_out_date", sa.Date(), nullable=False),
        sa.Column("guests", sa.Integer(), nullable=False),
        sa.Column("adults", sa.Integer(), nullable=False),
        sa.Column("children", sa.Integer(), nullable=False),
        sa.Column("children_ages", sa.String(), nullable=True),
        sa.Column("special_requests", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("total_price", sa.Float(), nullable=False),
        sa.Column("payment_status", sa.String(), nullable=False),
        sa.Column("booking_type", sa.String(), nullable=False),
        sa.Column("payment_id", sa.String(), nullable=True),
        sa.Column("razorpay_order_id", sa.String(), nullable=True),
        sa.Column("with_breakfast", sa.Boolean(), nullable=False),
        sa.Column("room_count", sa.Integer(), nullable=False),
        sa.Column("effective_adults", sa.Integer(), nullable=True),
        sa.Column("extra_guests", sa.Integer(), nullable=False),
        sa.Column("extra_guest_charges", sa.Float(), nullable=True),
        sa.Column("promo_code", sa.String(), nullable=True),
        sa.Column("discount_amount", sa.Float(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_bookings_room_id", "bookings", ["room_id"])

    op.create_table(
        "table_bookings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("customer_name", sa.String(), nullable=False),
        sa.Column("customer_email", sa.String(), nullable=False),
        sa.Column("customer_phone", sa.String(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(), nullable=False),
        sa.Column("guests", sa.Integer(), nullable=False),
        sa.Column("special_requests", sa.String(), nullable=True),
        sa.Column("table_number", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("booking_type", sa.String(), nullable=False),
        sa.Column("payment_status", sa.String(), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "receipts",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("booking_id", sa.String(36), sa.ForeignKey("bookings.id"), nullable=False),
        sa.Column("receipt_number", sa.String(), nullable=False, unique=True),
        sa.Column("payment_id", sa.String(), nullable=True),
        sa.Column("receipt_data", sa.Text(), nullable=False),
        sa.Column("extra_guests", sa.Integer(), nullable=True),
        sa.Column("extra_guest_charges", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_receipts_booking_id", "receipts", ["booking_id"], unique=True)

    op.create_table(
        "promo_codes",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("code", sa.String(), nullable=False),
        sa.Column("discount_amount", sa.Float(), nullable=False),
        sa.Column("expiry_date", sa.DateTime(), nullable=True),
        sa.Column("max_uses", sa.Integer(), nullable=True),
        sa.Column("current_uses", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("created_by", sa.Integer(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_promo_codes_code", "promo_codes", ["code"], unique=True)

    op.create_table(
        "promo_code_usage",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("promo_code_id", sa.String(36), sa.ForeignKey("promo_codes.id"), nullable=False),
        sa.Column("booking_id", sa.String(36), nullable=True),
        sa.Column("customer_id", sa.String(), nullable=True),
        sa.Column("device_id", sa.String(), nullable=True),
        sa.Column("discount_amount", sa.Float(), nullable=False),
        sa.Column("used_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_promo_code_usage_promo_code_id", "promo_code_usage", ["promo_code_id"])


def downgrade():
    op.drop_table("promo_code_usage")
    op.drop_table("promo_codes")
    op.drop_table("receipts")
    op.drop_table("table_bookings")
    op.drop_table("bookings")
    op.drop_table("room_images")
    op.drop_table("room_availability")
    op.drop_table("rooms")
    op.drop_table("admins")
