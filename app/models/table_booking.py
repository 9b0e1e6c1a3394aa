import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Date, DateTime
from app.db.session import Base
from app.models.enums import TableBookingStatus, BookingType, PaymentStatus


class TableBooking(Base):
    __tablename__ = "table_bookings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True, default="")

    date = Column(Date, nullable=False)
    time = Column(String, nullable=False)  # HH:MM
    guests = Column(Integer, nullable=False)
    special_requests = Column(String, nullable=True, default="")
    table_number = Column(String, nullable=True)

    status = Column(String, nullable=False, default=TableBookingStatus.PENDING.value)
    booking_type = Column(String, nullable=False, default=BookingType.ONLINE.value)
    payment_status = Column(String, nullable=False, default=PaymentStatus.PENDING.value)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
