import uuid
from datetime import datetime

from sqlalchemy import Column, String, Float, Text, DateTime, ForeignKey
from app.db.session import Base
from app.models.enums import RefundStatus


class RefundRequest(Base):
    __tablename__ = "refund_requests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    ticket_id = Column(String, nullable=False, unique=True, index=True)  # RR-XXXXXX-XXXXX
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False, index=True)

    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_id = Column(String, nullable=True)

    amount = Column(Float, nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(String, nullable=False, default=RefundStatus.PENDING.value)
    admin_notes = Column(Text, nullable=True)
    reviewed_by = Column(String, nullable=True)  # admin email

    # Gateway outcome
    refund_id = Column(String, nullable=True)
    refund_status = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
