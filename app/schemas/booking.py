from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from app.models.enums import BookingStatus, BookingType, PaymentStatus

# Alias so fields named "date" do not shadow the type inside class bodies
Day = date


class GuestInfo(BaseModel):
    customer_name: str = Field(min_length=1)
    customer_email: EmailStr
    customer_phone: Optional[str] = None
    customer_id: Optional[str] = None


class StayDetails(BaseModel):
    check_in_date: date
    check_out_date: date
    guests: int = Field(ge=1)
    adults: Optional[int] = Field(default=None, ge=1)
    children: int = Field(default=0, ge=0)
    children_ages: List[int] = []
    effective_adults: Optional[int] = Field(default=None, ge=1)
    with_breakfast: bool = False
    room_count: int = Field(default=1, ge=1)
    special_requests: Optional[str] = ""

    @model_validator(mode="after")
    def check_dates(self):
        if self.check_out_date <= self.check_in_date:
            raise ValueError("check_out_date must be after check_in_date")
        return self


class PaymentInfo(BaseModel):
    payment_id: Optional[str] = None
    payment_method: Optional[str] = None
    payment_status: PaymentStatus = PaymentStatus.PENDING


class PromoApplication(BaseModel):
    code: str
    device_id: Optional[str] = None


class HotelBookingCreate(BaseModel):
    room_id: str
    guest: GuestInfo
    stay: StayDetails
    payment: Optional[PaymentInfo] = None
    booking_type: BookingType = BookingType.ONLINE
    promo: Optional[PromoApplication] = None
    create_payment_order: bool = False


class BookingUpdate(BaseModel):
    customer_name: Optional[str] = None
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = None
    special_requests: Optional[str] = None
    with_breakfast: Optional[bool] = None


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class VerifyPayment(BaseModel):
    razorpay_payment_id: str
    razorpay_order_id: str
    razorpay_signature: str


class BookingOut(BaseModel):
    id: str
    room_id: str
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    customer_id: Optional[str] = None
    check_in_date: date
    check_out_date: date
    guests: int
    adults: int
    children: int
    special_requests: Optional[str] = None
    total_price: float
    status: BookingStatus
    payment_status: PaymentStatus
    booking_type: BookingType
    payment_id: Optional[str] = None
    razorpay_order_id: Optional[str] = None
    with_breakfast: bool
    room_count: int
    effective_adults: Optional[int] = None
    extra_guests: int
    extra_guest_charges: Optional[float] = None
    promo_code: Optional[str] = None
    discount_amount: Optional[float] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TableBookingCreate(BaseModel):
    customer_name: str = Field(min_length=1)
    customer_email: EmailStr
    customer_phone: Optional[str] = ""
    date: Day
    time: str = Field(pattern=r"^\d{2}:\d{2}$")
    guests: int = Field(ge=1)
    special_requests: Optional[str] = ""
    table_number: Optional[str] = None
    booking_type: BookingType = BookingType.ONLINE


class TableBookingUpdate(BaseModel):
    date: Optional[Day] = None
    time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    guests: Optional[int] = Field(default=None, ge=1)
    special_requests: Optional[str] = None
    table_number: Optional[str] = None
    status: Optional[str] = None
    payment_status: Optional[PaymentStatus] = None


class TableBookingOut(BaseModel):
    id: str
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    date: Day
    time: str
    guests: int
    special_requests: Optional[str] = None
    table_number: Optional[str] = None
    status: str
    booking_type: BookingType
    payment_status: str

    model_config = {"from_attributes": True}
