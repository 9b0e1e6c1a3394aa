import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Date, DateTime, Float, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.models.enums import BookingStatus, PaymentStatus, BookingType


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    room_id = Column(String(36), ForeignKey("rooms.id"), nullable=False, index=True)

    # Guest
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, nullable=True)
    customer_id = Column(String, nullable=True)

    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)

    guests = Column(Integer, nullable=False, default=1)
    adults = Column(Integer, nullable=False, default=1)
    children = Column(Integer, nullable=False, default=0)
    children_ages = Column(String, nullable=True)  # JSON list
    special_requests = Column(String, nullable=True, default="")

    status = Column(String, nullable=False, default=BookingStatus.PENDING.value)
    total_price = Column(Float, nullable=False)

    # PAYMENT FIELDS
    payment_status = Column(String, nullable=False, default=PaymentStatus.PENDING.value)
    booking_type = Column(String, nullable=False, default=BookingType.ONLINE.value)
    payment_id = Column(String, nullable=True)
    razorpay_order_id = Column(String, nullable=True)

    with_breakfast = Column(Boolean, nullable=False, default=False)
    room_count = Column(Integer, nullable=False, default=1)
    effective_adults = Column(Integer, nullable=True)
    extra_guests = Column(Integer, nullable=False, default=0)
    extra_guest_charges = Column(Float, nullable=True)

    promo_code = Column(String, nullable=True)
    discount_amount = Column(Float, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    room = relationship("Room", back_populates="bookings")
