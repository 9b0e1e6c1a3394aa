import math
from datetime import date, datetime

from qrcode.exceptions import DataOverflowError

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging_config import get_logger
from app.db.store import DataStore
from app.models.enums import PaymentStatus
from app.schemas.receipt import ReceiptData, ReceiptOut, ReceiptRequest
from app.utils.pricing import EXTRA_GUEST_RATE, breakfast_total, nights_between, tax_breakdown
from app.utils.qrcode_gen import booking_link, generate_qr_data_url

logger = get_logger()

RECEIPT_PREFIX = "RP"


def generate_receipt_number(booking_id: str, on: date | None = None) -> str:
    on = on or date.today()
    return f"{RECEIPT_PREFIX}-{on.strftime('%Y%m%d')}-{booking_id[:6].upper()}"


def get_receipt_by_booking_id(store: DataStore, booking_id: str):
    return store.first("receipts", {"booking_id": booking_id})


def parse_receipt_data(raw: str) -> ReceiptData:
    return ReceiptData.model_validate_json(raw)


def receipt_out(receipt) -> ReceiptOut:
    return ReceiptOut(
        id=receipt.id,
        booking_id=receipt.booking_id,
        receipt_number=receipt.receipt_number,
        payment_id=receipt.payment_id,
        extra_guests=receipt.extra_guests,
        extra_guest_charges=receipt.extra_guest_charges,
        created_at=receipt.created_at,
        data=parse_receipt_data(receipt.receipt_data),
    )


def _qr_code(booking_id: str):
    try:
        return generate_qr_data_url(booking_link(booking_id))
    except (DataOverflowError, OSError, ValueError) as e:
        logger.error(f"QR code generation failed for booking {booking_id}, continuing without it: {e}")
        return None


def generate_receipt(store: DataStore, params: ReceiptRequest, now: datetime | None = None):
    """Create the receipt for a booking, or return the one already stored."""
    existing = get_receipt_by_booking_id(store, params.booking_id)
    if existing is not None:
        logger.bind(log_type="payment").info(f"Receipt already exists for booking {params.booking_id}")
        return existing

    if store.first("bookings", {"id": params.booking_id}) is None:
        raise NotFoundError("Booking not found")

    now = now or datetime.now()
    nights = params.nights or math.ceil((params.check_out_date - params.check_in_date).days)

    room_total = params.price
    price_per_night = params.price_per_night or (room_total / nights if nights > 0 else room_total)
    taxes = tax_breakdown(room_total)

    adults = params.adults or params.guests
    children = params.children or 0
    breakfast_price = params.breakfast_price or 0

    extra_guest_charges = None
    if params.extra_guests and params.extra_guests > 0:
        extra_guest_charges = params.extra_guests * EXTRA_GUEST_RATE * max(nights, 1)

    data = ReceiptData(
        booking_id=params.booking_id,
        receipt_number=generate_receipt_number(params.booking_id, now.date()),
        customer_name=params.customer_name,
        customer_email=params.customer_email,
        customer_phone=params.customer_phone,
        room_name=params.room_name,
        room_type=params.room_type or "Standard",
        price_per_night=price_per_night,
        nights=nights,
        check_in_date=params.check_in_date,
        check_out_date=params.check_out_date,
        guests=params.guests,
        adults=adults,
        children=children,
        room_count=params.room_count or 1,
        price=room_total,
        cgst=taxes.cgst,
        sgst=taxes.sgst,
        tax=taxes.tax,
        total=taxes.total,
        with_breakfast=params.with_breakfast,
        breakfast_price=breakfast_price,
        breakfast_total=(
            breakfast_total(breakfast_price, adults + children, max(nights, 1))
            if params.with_breakfast else 0
        ),
        extra_guests=params.extra_guests,
        extra_guest_charges=extra_guest_charges,
        promo_code=params.promo_code,
        discount_amount=params.discount_amount,
        original_price=params.original_price,
        payment_method=params.payment_method,
        payment_id=params.payment_id,
        transaction_date=now,
        qr_code_data=_qr_code(params.booking_id) if params.include_qr_code else None,
        paid_stamp=True,
    )

    receipt = store.insert("receipts", {
        "booking_id": params.booking_id,
        "receipt_number": data.receipt_number,
        "payment_id": params.payment_id,
        "receipt_data": data.model_dump_json(),
        "extra_guests": params.extra_guests,
        "extra_guest_charges": extra_guest_charges,
    })

    logger.bind(log_type="payment").info(
        f"Receipt Generated | Receipt={receipt.receipt_number} | Booking={params.booking_id}"
    )
    return receipt


def generate_receipt_for_booking(store: DataStore, booking_id: str, payment_method: str = "Razorpay",
                                 include_qr_code: bool = True, now: datetime | None = None):
    existing = get_receipt_by_booking_id(store, booking_id)
    if existing is not None:
        return existing

    booking = store.first("bookings", {"id": booking_id})
    if booking is None:
        raise NotFoundError("Booking not found")
    if booking.payment_status != PaymentStatus.PAID:
        raise ValidationError("Receipts are issued for paid bookings only")

    room = store.first("rooms", {"id": booking.room_id})
    if room is None:
        raise NotFoundError("Room not found")

    discount = booking.discount_amount or None
    params = ReceiptRequest(
        booking_id=booking.id,
        customer_name=booking.customer_name,
        customer_email=booking.customer_email,
        customer_phone=booking.customer_phone,
        room_id=room.id,
        room_name=room.name,
        room_type=room.category_type,
        check_in_date=booking.check_in_date,
        check_out_date=booking.check_out_date,
        guests=booking.guests,
        adults=booking.adults,
        children=booking.children,
        price=booking.total_price,
        price_per_night=room.price,
        nights=nights_between(booking.check_in_date, booking.check_out_date),
        payment_id=booking.payment_id or booking.razorpay_order_id or "N/A",
        payment_method=payment_method,
        include_qr_code=include_qr_code,
        with_breakfast=booking.with_breakfast,
        breakfast_price=room.breakfast_price,
        room_count=booking.room_count,
        promo_code=booking.promo_code,
        discount_amount=discount,
        original_price=booking.total_price + discount if discount else None,
        extra_guests=booking.extra_guests,
    )
    return generate_receipt(store, params, now=now)
