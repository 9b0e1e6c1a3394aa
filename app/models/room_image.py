import uuid

from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from app.db.session import Base


class RoomImage(Base):
    __tablename__ = "room_images"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    room_id = Column(String(36), ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True)

    image_url = Column(String, nullable=False)
    public_id = Column(String, nullable=False)  # Cloudinary public ID (for delete)

    is_primary = Column(Boolean, default=False, nullable=False)  # Mark main/cover image
    order_index = Column(Integer, default=0, nullable=False)

    room = relationship("Room", back_populates="images")
