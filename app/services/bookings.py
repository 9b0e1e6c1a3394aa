"""Hotel and restaurant booking lifecycle."""
import json
from datetime import date

from app.core.exceptions import (
    AvailabilityError,
    NotFoundError,
    PromoInvalidError,
    ValidationError,
)
from app.core.logging_config import get_logger
from app.db.store import DataStore
from app.models.enums import (
    AvailabilityStatus,
    BookingStatus,
    BookingType,
    PaymentStatus,
    TableBookingStatus,
)
from app.schemas.booking import (
    GuestInfo,
    PaymentInfo,
    PromoApplication,
    StayDetails,
    TableBookingCreate,
)
from app.services import availability, promo_codes
from app.utils.pricing import quote_stay

logger = get_logger()

ALLOWED_TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.CHECKED_IN, BookingStatus.CANCELLED},
    BookingStatus.CHECKED_IN: {BookingStatus.CHECKED_OUT},
    BookingStatus.CHECKED_OUT: set(),
    BookingStatus.CANCELLED: set(),
}

BOOKING_DAY_STATUS = {
    BookingType.ONLINE: AvailabilityStatus.ONLINE_BOOKING,
    BookingType.OFFLINE: AvailabilityStatus.OFFLINE_BOOKING,
}

EDITABLE_FIELDS = {
    "customer_name",
    "customer_email",
    "customer_phone",
    "special_requests",
    "with_breakfast",
}


def get_booking(store: DataStore, booking_id: str):
    booking = store.first("bookings", {"id": booking_id})
    if booking is None:
        raise NotFoundError("Booking not found")
    return booking


def list_bookings(store: DataStore, status=None):
    filters = {"status": BookingStatus(status)} if status else None
    return store.query("bookings", filters, order_by="check_in_date")


# ---------------------------------------------------------------------
# CREATE
# ---------------------------------------------------------------------
def create_hotel_booking(store: DataStore, room_id: str, guest: GuestInfo, stay: StayDetails,
                         payment: PaymentInfo | None = None,
                         booking_type: BookingType = BookingType.ONLINE,
                         promo: PromoApplication | None = None):
    """Price, validate and persist a room booking, then claim its nights.

    Availability is re-checked right before the insert, but the check and the
    write are separate store calls: two requests racing for the same last
    free night can both succeed.
    """
    if not guest.customer_name.strip() or not guest.customer_email:
        raise ValidationError("Customer name and email are required")
    if stay.check_out_date <= stay.check_in_date:
        raise ValidationError("Check-out date must be after check-in date")

    room = store.first("rooms", {"id": room_id})
    if room is None:
        raise NotFoundError("Room not found")

    booking_type = BookingType(booking_type)
    payment = payment or PaymentInfo()
    adults = stay.adults or stay.guests
    effective_adults = stay.effective_adults or adults

    quote = quote_stay(
        room,
        stay.check_in_date,
        stay.check_out_date,
        adults=adults,
        children=stay.children,
        effective_adults=effective_adults,
        with_breakfast=stay.with_breakfast,
    )
    total_price = quote.total
    discount = None

    if promo is not None:
        result = promo_codes.validate_promo_code(
            store, promo.code, total_price, guest.customer_id, promo.device_id
        )
        if not result.valid:
            raise PromoInvalidError(result.message)
        discount = result.discount_amount
        total_price = result.final_amount

    if not availability.is_room_available(store, room.id, stay.check_in_date, stay.check_out_date):
        raise AvailabilityError("Room is not available for the selected dates")

    booking = store.insert("bookings", {
        "room_id": room.id,
        "customer_name": guest.customer_name.strip(),
        "customer_email": guest.customer_email,
        "customer_phone": guest.customer_phone,
        "customer_id": guest.customer_id,
        "check_in_date": stay.check_in_date,
        "check_out_date": stay.check_out_date,
        "guests": stay.guests,
        "adults": adults,
        "children": stay.children,
        "children_ages": json.dumps(stay.children_ages) if stay.children_ages else None,
        "special_requests": stay.special_requests or "",
        "total_price": total_price,
        "status": BookingStatus.PENDING,
        "payment_status": payment.payment_status,
        "payment_id": payment.payment_id,
        "booking_type": booking_type,
        "with_breakfast": stay.with_breakfast,
        "room_count": stay.room_count,
        "effective_adults": effective_adults,
        "extra_guests": quote.extra_guests,
        "extra_guest_charges": quote.extra_guest_charges if quote.extra_guests > 0 else None,
        "promo_code": promo.code.strip().upper() if promo else None,
        "discount_amount": discount,
    })

    availability.mark_booking_days(store, booking, BOOKING_DAY_STATUS[booking_type])

    logger.bind(log_type="booking").info(
        f"Booking Created | Booking={booking.id} | Room={room.id} | "
        f"{booking.check_in_date}..{booking.check_out_date} | Total={total_price}"
    )
    return booking


# ---------------------------------------------------------------------
# STATUS
# ---------------------------------------------------------------------
def transition_booking(store: DataStore, booking_id: str, new_status):
    booking = get_booking(store, booking_id)
    current = BookingStatus(booking.status)
    new_status = BookingStatus(new_status)

    if new_status not in ALLOWED_TRANSITIONS[current]:
        raise ValidationError(f"Cannot change booking from {current.value} to {new_status.value}")

    store.update("bookings", {"id": booking_id}, {"status": new_status})

    if new_status == BookingStatus.CONFIRMED:
        _redeem_booking_promo(store, booking)

    if new_status == BookingStatus.CANCELLED:
        availability.release_booking_days(store, booking)

    logger.bind(log_type="booking").info(
        f"Booking Status | Booking={booking_id} | {current.value} -> {new_status.value}"
    )
    return get_booking(store, booking_id)


def _redeem_booking_promo(store: DataStore, booking):
    if not booking.promo_code:
        return
    original = booking.total_price + (booking.discount_amount or 0)
    try:
        promo_codes.redeem_promo_code(
            store,
            booking.promo_code,
            original,
            booking_id=booking.id,
            customer_id=booking.customer_id,
        )
    except PromoInvalidError as exc:
        # The discount is already in total_price; the booking stands either way
        logger.bind(log_type="booking").warning(
            f"Promo Not Redeemed | Booking={booking.id} | Code={booking.promo_code} | "
            f"{exc.message} | Needs admin review"
        )


def confirm_payment(store: DataStore, booking_id: str, payment_id: str, razorpay_order_id=None):
    """Record a successful payment: the booking becomes confirmed and its promo is redeemed."""
    booking = get_booking(store, booking_id)

    # Idempotency check
    if booking.payment_status == PaymentStatus.PAID and booking.status != BookingStatus.PENDING:
        return booking

    if booking.status != BookingStatus.PENDING:
        raise ValidationError(f"Cannot confirm payment for a {booking.status} booking")

    patch = {
        "payment_status": PaymentStatus.PAID,
        "payment_id": payment_id,
        "status": BookingStatus.CONFIRMED,
    }
    if razorpay_order_id:
        patch["razorpay_order_id"] = razorpay_order_id
    store.update("bookings", {"id": booking_id}, patch)
    _redeem_booking_promo(store, booking)

    logger.bind(log_type="payment").info(f"Payment Confirmed | Booking={booking_id} | Payment={payment_id}")
    return get_booking(store, booking_id)


def mark_payment_failed(store: DataStore, booking_id: str):
    get_booking(store, booking_id)
    store.update("bookings", {"id": booking_id}, {"payment_status": PaymentStatus.FAILED})
    logger.bind(log_type="payment").info(f"Payment Failed | Booking={booking_id}")
    return get_booking(store, booking_id)


def set_payment_order(store: DataStore, booking_id: str, order_id: str):
    store.update("bookings", {"id": booking_id}, {"razorpay_order_id": order_id})
    return get_booking(store, booking_id)


# ---------------------------------------------------------------------
# UPDATE / CHECKOUT / DELETE
# ---------------------------------------------------------------------
def update_booking(store: DataStore, booking_id: str, patch: dict):
    get_booking(store, booking_id)

    if "status" in patch:
        raise ValidationError("Use the status endpoint to change booking status")
    unknown = set(patch) - EDITABLE_FIELDS
    if unknown:
        raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")
    if not patch:
        return get_booking(store, booking_id)

    store.update("bookings", {"id": booking_id}, patch)
    logger.bind(log_type="booking").info(f"Booking Updated | Booking={booking_id} | Fields={sorted(patch)}")
    return get_booking(store, booking_id)


def checkout_room(store: DataStore, room_id: str, booking_id: str, today: date | None = None):
    booking = get_booking(store, booking_id)
    if booking.room_id != room_id:
        raise ValidationError("Booking does not belong to this room")
    if booking.status not in (BookingStatus.CONFIRMED, BookingStatus.CHECKED_IN):
        raise ValidationError(f"Cannot check out a {booking.status} booking")

    store.call("checkout_room", booking_id=booking_id, today=today or date.today())

    logger.bind(log_type="booking").info(f"Room Checked Out | Room={room_id} | Booking={booking_id}")
    return get_booking(store, booking_id)


def delete_booking(store: DataStore, booking_id: str):
    booking = get_booking(store, booking_id)

    # Receipts and refund requests reference the booking, remove them first
    store.delete("receipts", {"booking_id": booking_id})
    store.delete("refund_requests", {"booking_id": booking_id})
    availability.release_booking_days(store, booking)
    store.delete("bookings", {"id": booking_id})

    logger.bind(log_type="booking").info(f"Booking Deleted | Booking={booking_id}")


# ---------------------------------------------------------------------
# RESTAURANT TABLES
# ---------------------------------------------------------------------
def create_table_booking(store: DataStore, data: TableBookingCreate):
    booking = store.insert("table_bookings", {
        "customer_name": data.customer_name.strip(),
        "customer_email": data.customer_email,
        "customer_phone": data.customer_phone or "",
        "date": data.date,
        "time": data.time,
        "guests": data.guests,
        "special_requests": data.special_requests or "",
        "table_number": data.table_number,
        "status": TableBookingStatus.PENDING,
        "payment_status": PaymentStatus.PENDING,
        "booking_type": data.booking_type,
    })
    logger.bind(log_type="booking").info(
        f"Table Booking Created | Booking={booking.id} | {booking.date} {booking.time} | Guests={booking.guests}"
    )
    return booking


def get_table_booking(store: DataStore, booking_id: str):
    booking = store.first("table_bookings", {"id": booking_id})
    if booking is None:
        raise NotFoundError("Table booking not found")
    return booking


def list_table_bookings(store: DataStore, status=None):
    filters = {"status": TableBookingStatus(status)} if status else None
    return store.query("table_bookings", filters, order_by="date")


def update_table_booking(store: DataStore, booking_id: str, patch: dict):
    get_table_booking(store, booking_id)
    if "status" in patch:
        patch["status"] = TableBookingStatus(patch["status"])
    if patch:
        store.update("table_bookings", {"id": booking_id}, patch)
    return get_table_booking(store, booking_id)


def delete_table_booking(store: DataStore, booking_id: str):
    get_table_booking(store, booking_id)
    store.delete("table_bookings", {"id": booking_id})
