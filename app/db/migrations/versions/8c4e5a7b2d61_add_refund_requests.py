"""Add refund requests

Revision ID: 8c4e5a7b2d61
Revises: 3b1f2c9d7a10
Create Date: 2026-10-19 16:40:51.402117

"""
from alembic import op
import sqlalchemy as sa


revision = "8c4e5a7b2d61"
down_revision = "3b1f2c9d7a10"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "refund_requests",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("ticket_id", sa.String(), nullable=False),
        sa.Column("booking_id", sa.String(36), sa.ForeignKey("bookings.id"), nullable=False),
        sa.Column("customer_name", sa.String(), nullable=False),
        sa.Column("customer_email", sa.String(), nullable=False),
        sa.Column("customer_id", sa.String(), nullable=True),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("reason", sa.Text(), nullable=False),
        sa.Column("status", sa.String(), nullable=False),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("reviewed_by", sa.String(), nullable=True),
        sa.Column("refund_id", sa.String(), nullable=True),
        sa.Column("refund_status", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_refund_requests_ticket_id", "refund_requests", ["ticket_id"], unique=True)
    op.create_index("ix_refund_requests_booking_id", "refund_requests", ["booking_id"])


def downgrade():
    op.drop_index("ix_refund_requests_booking_id", table_name="refund_requests")
    op.drop_index("ix_refund_requests_ticket_id", table_name="refund_requests")
    op.drop_table("refund_requests")
