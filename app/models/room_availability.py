import uuid
from datetime import datetime

from sqlalchemy import Column, String, Date, DateTime, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.models.enums import AvailabilityStatus, AvailabilitySource


class RoomAvailability(Base):
    __tablename__ = "room_availability"
    __table_args__ = (
        UniqueConstraint("room_id", "date", name="uq_room_availability_room_date"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    room_id = Column(String(36), ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)

    status = Column(String, nullable=False, default=AvailabilityStatus.AVAILABLE.value)
    source = Column(String, nullable=False, default=AvailabilitySource.SYSTEM.value)

    # Non-owning back-reference; no FK so deleting a booking never cascades here
    booking_id = Column(String(36), nullable=True, index=True)
    notes = Column(String, nullable=True)
    updated_by = Column(Integer, nullable=True)  # admin id

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    room = relationship("Room", back_populates="availability")
