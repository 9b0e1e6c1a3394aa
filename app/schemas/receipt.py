from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel


class ReceiptRequest(BaseModel):
    booking_id: str
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    room_id: str
    room_name: str
    check_in_date: date
    check_out_date: date
    guests: int
    price: float
    payment_id: str
    payment_method: str
    include_qr_code: bool = False
    room_type: Optional[str] = None
    price_per_night: Optional[float] = None
    nights: Optional[int] = None
    with_breakfast: bool = False
    breakfast_price: Optional[float] = None
    room_count: Optional[int] = None
    adults: Optional[int] = None
    children: Optional[int] = None
    promo_code: Optional[str] = None
    discount_amount: Optional[float] = None
    original_price: Optional[float] = None
    extra_guests: Optional[int] = None


class BookingReceiptRequest(BaseModel):
    booking_id: str
    payment_method: str = "Razorpay"
    include_qr_code: bool = True


class ReceiptData(BaseModel):
    """Line items and amounts stored with every receipt."""

    booking_id: str
    receipt_number: str
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    room_name: str
    room_type: str = "Standard"
    price_per_night: float
    nights: int
    check_in_date: date
    check_out_date: date
    guests: int
    adults: int
    children: int = 0
    room_count: int = 1
    price: float
    cgst: float
    sgst: float
    tax: float
    total: float
    with_breakfast: bool = False
    breakfast_price: float = 0
    breakfast_total: float = 0
    extra_guests: Optional[int] = None
    extra_guest_charges: Optional[float] = None
    promo_code: Optional[str] = None
    discount_amount: Optional[float] = None
    original_price: Optional[float] = None
    payment_method: str
    payment_id: str
    transaction_date: datetime
    qr_code_data: Optional[str] = None
    paid_stamp: bool = True


class ReceiptOut(BaseModel):
    id: str
    booking_id: str
    receipt_number: str
    payment_id: Optional[str] = None
    extra_guests: Optional[int] = None
    extra_guest_charges: Optional[float] = None
    created_at: Optional[datetime] = None
    data: ReceiptData
