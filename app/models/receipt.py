import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, Text, DateTime, ForeignKey
from app.db.session import Base


class Receipt(Base):
    __tablename__ = "receipts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False, unique=True, index=True)
    receipt_number = Column(String, nullable=False, unique=True)
    payment_id = Column(String, nullable=True)

    # Serialized ReceiptData (JSON)
    receipt_data = Column(Text, nullable=False)

    extra_guests = Column(Integer, nullable=True)
    extra_guest_charges = Column(Float, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
