from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.models.enums import RefundStatus


class RefundRequestCreate(BaseModel):
    booking_id: str
    customer_name: str = Field(min_length=2)
    customer_email: EmailStr
    customer_id: Optional[str] = None
    amount: float = Field(gt=0)
    reason: str = Field(min_length=10)


class RefundDecision(BaseModel):
    admin_notes: Optional[str] = None


class RefundRequestOut(BaseModel):
    id: str
    ticket_id: str
    booking_id: str
    customer_name: str
    customer_email: str
    customer_id: Optional[str] = None
    amount: float
    reason: str
    status: RefundStatus
    admin_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    refund_id: Optional[str] = None
    refund_status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
