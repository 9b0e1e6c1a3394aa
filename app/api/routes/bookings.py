from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.core.config import RAZORPAY_KEY_ID
from app.core.dependencies import get_session, get_store, require_admin
from app.core.logging_config import get_logger
from app.core.session import AuthSession
from app.db.store import DataStore
from app.models.enums import BookingStatus, BookingType, PaymentStatus
from app.schemas.booking import (
    BookingOut,
    BookingStatusUpdate,
    BookingUpdate,
    HotelBookingCreate,
    VerifyPayment,
)
from app.services import bookings
from app.utils.razorpay_client import create_order, verify_signature

router = APIRouter(prefix="/bookings", tags=["Bookings"])
logger = get_logger()


# ---------------------------------------------------------------------
# CREATE BOOKING
# ---------------------------------------------------------------------
@router.post("/", response_model=dict)
def create_booking(data: HotelBookingCreate, store: DataStore = Depends(get_store),
                   session: AuthSession = Depends(get_session)):
    payment, booking_type = data.payment, data.booking_type

    # Only front-desk staff record offline or already-paid bookings
    if not session.is_admin:
        if payment is not None or booking_type != BookingType.ONLINE:
            logger.bind(log_type="booking").warning(
                f"Guest booking payment fields ignored | Room={data.room_id} | Type={booking_type.value}"
            )
        payment, booking_type = None, BookingType.ONLINE

    booking = bookings.create_hotel_booking(
        store,
        data.room_id,
        data.guest,
        data.stay,
        payment=payment,
        booking_type=booking_type,
        promo=data.promo,
    )

    # ---- ONLINE PAYMENT ----
    if data.create_payment_order and booking_type == BookingType.ONLINE:
        rp_order = create_order(booking.id, booking.total_price)
        booking = bookings.set_payment_order(store, booking.id, rp_order["id"])

        logger.bind(log_type="payment").info(
            f"Razorpay order created | Booking={booking.id} | Order={rp_order['id']}"
        )

        return {
            "message": "Proceed with online payment",
            "booking": BookingOut.model_validate(booking),
            "razorpay_order_id": rp_order["id"],
            "razorpay_key_id": RAZORPAY_KEY_ID,
        }

    return {
        "message": "Booking created",
        "booking": BookingOut.model_validate(booking),
    }


# ---------------------------------------------------------------------
# VERIFY PAYMENT
# ---------------------------------------------------------------------
@router.post("/{booking_id}/verify-payment")
def verify_payment(booking_id: str, data: VerifyPayment, store: DataStore = Depends(get_store)):
    booking = bookings.get_booking(store, booking_id)

    # Idempotency check
    if booking.payment_status == PaymentStatus.PAID and booking.status != BookingStatus.PENDING:
        return {"message": "Payment already verified", "booking": BookingOut.model_validate(booking)}

    if not booking.razorpay_order_id:
        raise HTTPException(status_code=400, detail="No payment order exists for this booking")

    if booking.razorpay_order_id != data.razorpay_order_id:
        raise HTTPException(status_code=400, detail="Order does not match this booking")

    if not verify_signature(data.razorpay_order_id, data.razorpay_payment_id, data.razorpay_signature):
        bookings.mark_payment_failed(store, booking_id)
        raise HTTPException(status_code=400, detail="Invalid payment signature")

    booking = bookings.confirm_payment(
        store,
        booking_id,
        data.razorpay_payment_id,
        razorpay_order_id=data.razorpay_order_id,
    )
    return {"message": "Payment verified successfully", "booking": BookingOut.model_validate(booking)}


# ---------------------------------------------------------------------
# ADMIN — RECORD OFFLINE PAYMENT
# ---------------------------------------------------------------------
@router.post("/{booking_id}/confirm-payment", response_model=BookingOut)
def record_payment(booking_id: str, payment_id: str, store: DataStore = Depends(get_store),
                   session: AuthSession = Depends(require_admin)):
    return bookings.confirm_payment(store, booking_id, payment_id)


# ---------------------------------------------------------------------
# ADMIN — LIST / DETAILS
# ---------------------------------------------------------------------
@router.get("/", response_model=list[BookingOut])
def list_bookings(status: Optional[BookingStatus] = None, store: DataStore = Depends(get_store),
                  session: AuthSession = Depends(require_admin)):
    return bookings.list_bookings(store, status)


@router.get("/{booking_id}", response_model=BookingOut)
def get_booking(booking_id: str, store: DataStore = Depends(get_store),
                session: AuthSession = Depends(require_admin)):
    return bookings.get_booking(store, booking_id)


# ---------------------------------------------------------------------
# ADMIN — STATUS CHANGE
# ---------------------------------------------------------------------
@router.patch("/{booking_id}/status", response_model=BookingOut)
def change_status(booking_id: str, data: BookingStatusUpdate, store: DataStore = Depends(get_store),
                  session: AuthSession = Depends(require_admin)):
    return bookings.transition_booking(store, booking_id, data.status)


# ---------------------------------------------------------------------
# ADMIN — EDIT GUEST DETAILS
# ---------------------------------------------------------------------
@router.put("/{booking_id}", response_model=BookingOut)
def edit_booking(booking_id: str, data: BookingUpdate, store: DataStore = Depends(get_store),
                 session: AuthSession = Depends(require_admin)):
    return bookings.update_booking(store, booking_id, data.model_dump(exclude_unset=True))


# ---------------------------------------------------------------------
# ADMIN — CHECKOUT
# ---------------------------------------------------------------------
@router.post("/{booking_id}/checkout", response_model=BookingOut)
def checkout(booking_id: str, room_id: str, store: DataStore = Depends(get_store),
             session: AuthSession = Depends(require_admin)):
    return bookings.checkout_room(store, room_id, booking_id)


# ---------------------------------------------------------------------
# ADMIN — DELETE
# ---------------------------------------------------------------------
@router.delete("/{booking_id}")
def delete_booking(booking_id: str, store: DataStore = Depends(get_store),
                   session: AuthSession = Depends(require_admin)):
    bookings.delete_booking(store, booking_id)
    logger.bind(log_type="admin").info(f"Booking {booking_id} deleted by {session.email}")
    return {"message": "Booking deleted successfully"}
