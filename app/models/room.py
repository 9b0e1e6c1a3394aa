import uuid
from datetime import datetime

from sqlalchemy import Column, String, Boolean, Float, Integer, DateTime, JSON
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.models.enums import RoomCategory, RoomStatus


class Room(Base):
    __tablename__ = "rooms"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    image_url = Column(String, nullable=True)
    amenities = Column(JSON, default=list)

    capacity = Column(Integer, nullable=False, default=2)
    beds = Column(Integer, nullable=False, default=1)
    bathrooms = Column(Integer, nullable=False, default=1)
    category_type = Column(String, nullable=False, default=RoomCategory.ROYAL_EXECUTIVE.value)

    # Pricing fields
    price = Column(Float, nullable=False)  # per night
    breakfast_price = Column(Float, nullable=False, default=0.0)  # per person per night

    # Aggregate availability, derived from room_availability rows
    is_available = Column(Boolean, nullable=False, default=True)
    status = Column(String, nullable=False, default=RoomStatus.AVAILABLE.value)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # RELATIONSHIPS -------------------------------------

    availability = relationship("RoomAvailability", back_populates="room", cascade="all, delete")
    images = relationship("RoomImage", back_populates="room", cascade="all, delete")
    bookings = relationship("Booking", back_populates="room")

    @property
    def price_per_night(self):
        return self.price
