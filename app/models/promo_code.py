import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.models.enums import PromoStatus


class PromoCode(Base):
    __tablename__ = "promo_codes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    code = Column(String, nullable=False, unique=True, index=True)
    discount_amount = Column(Float, nullable=False)

    expiry_date = Column(DateTime, nullable=True)  # no expiry when null
    max_uses = Column(Integer, nullable=True)  # unlimited when null
    current_uses = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default=PromoStatus.ACTIVE.value)

    created_by = Column(Integer, nullable=True)  # admin id
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    usages = relationship("PromoCodeUsage", back_populates="promo_code")


class PromoCodeUsage(Base):
    __tablename__ = "promo_code_usage"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    promo_code_id = Column(String(36), ForeignKey("promo_codes.id"), nullable=False, index=True)
    booking_id = Column(String(36), nullable=True)
    customer_id = Column(String, nullable=True)
    device_id = Column(String, nullable=True)
    discount_amount = Column(Float, nullable=False, default=0.0)
    used_at = Column(DateTime, default=datetime.utcnow)

    promo_code = relationship("PromoCode", back_populates="usages")
