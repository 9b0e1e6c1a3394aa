"""Server-side procedures reachable through ``DataStore.call``.

Each procedure receives the open session and runs inside the caller's
transaction; ``DataStore.call`` commits once it returns.
"""
import secrets
import string
from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.booking import Booking
from app.models.enums import (
    AvailabilitySource,
    AvailabilityStatus,
    BookingStatus,
    RoomStatus,
    ACTIVE_BOOKING_STATUSES,
    BLOCKING_STATUSES,
    BOOKING_AVAILABILITY_STATUSES,
    CLOSED_AVAILABILITY_STATUSES,
)
from app.models.promo_code import PromoCode
from app.models.refund_request import RefundRequest
from app.models.room import Room
from app.models.room_availability import RoomAvailability
from app.utils.dates import date_range

PROMO_CODE_ALPHABET = string.ascii_uppercase + string.digits


def _values(statuses):
    return [s.value for s in statuses]


def check_room_availability(db: Session, room_id: str, check_in_date: date, check_out_date: date) -> bool:
    blocked = (
        db.query(RoomAvailability.id)
        .filter(
            RoomAvailability.room_id == room_id,
            RoomAvailability.date >= check_in_date,
            RoomAvailability.date < check_out_date,
            RoomAvailability.status.in_(_values(BLOCKING_STATUSES)),
        )
        .first()
    )
    return blocked is None


def _upsert_day(db: Session, room_id: str, day: date, status: str, source: str,
                booking_id=None, notes=None, admin_id=None):
    row = (
        db.query(RoomAvailability)
        .filter(RoomAvailability.room_id == room_id, RoomAvailability.date == day)
        .first()
    )
    if row is None:
        row = RoomAvailability(room_id=room_id, date=day)
        db.add(row)

    row.status = status
    row.source = source
    row.booking_id = booking_id
    row.notes = notes
    row.updated_by = admin_id
    return row


def bulk_update_room_availability(db: Session, room_ids, start_date: date, end_date: date,
                                  status: str, source: str, notes=None, admin_id=None,
                                  booking_id=None) -> int:
    """Upsert one row per (room, date) for dates in [start_date, end_date)."""
    touched = 0
    for room_id in room_ids:
        for day in date_range(start_date, end_date):
            _upsert_day(db, room_id, day, status, source, booking_id, notes, admin_id)
            touched += 1
        db.flush()
    return touched


def refresh_room_aggregate(db: Session, room_id: str) -> bool:
    """Flip the room back to available when no closed dates remain.

    Returns False and leaves the room untouched while any maintenance or
    unavailable row is still recorded for it.
    """
    closed = (
        db.query(RoomAvailability.id)
        .filter(
            RoomAvailability.room_id == room_id,
            RoomAvailability.status.in_(_values(CLOSED_AVAILABILITY_STATUSES)),
        )
        .first()
    )
    if closed is not None:
        return False

    room = db.query(Room).filter(Room.id == room_id).first()
    if room is not None:
        room.status = RoomStatus.AVAILABLE.value
        room.is_available = True
    return True


def _claimed_elsewhere(db: Session, row: RoomAvailability, booking_id: str) -> bool:
    if not row.booking_id or row.booking_id == booking_id:
        return False
    claimant = db.query(Booking).filter(Booking.id == row.booking_id).first()
    return claimant is not None and claimant.status in _values(ACTIVE_BOOKING_STATUSES)


def release_booking_days(db: Session, room_id: str, booking_id: str, from_date: date | None = None) -> int:
    """Reset booking claims on a room to available, skipping days held by other active bookings."""
    q = db.query(RoomAvailability).filter(
        RoomAvailability.room_id == room_id,
        RoomAvailability.status.in_(_values(BOOKING_AVAILABILITY_STATUSES)),
    )
    if from_date is not None:
        q = q.filter(RoomAvailability.date >= from_date)
    else:
        q = q.filter(RoomAvailability.booking_id == booking_id)

    released = 0
    for row in q.all():
        if _claimed_elsewhere(db, row, booking_id):
            continue
        row.status = AvailabilityStatus.AVAILABLE.value
        row.source = AvailabilitySource.SYSTEM.value
        row.booking_id = None
        released += 1
    db.flush()
    return released


def checkout_room(db: Session, booking_id: str, today: date | None = None) -> bool:
    booking = db.query(Booking).filter(Booking.id == booking_id).first()
    if booking is None:
        raise NotFoundError("Booking not found")

    booking.status = BookingStatus.CHECKED_OUT.value
    release_booking_days(db, booking.room_id, booking.id, from_date=today or date.today())
    refresh_room_aggregate(db, booking.room_id)
    return True


def initialize_room_availability(db: Session, days_ahead: int = 365, today: date | None = None) -> int:
    start = today or date.today()
    end = start + timedelta(days=days_ahead)
    created = 0

    for room in db.query(Room).all():
        existing = {
            d for (d,) in db.query(RoomAvailability.date).filter(
                RoomAvailability.room_id == room.id,
                RoomAvailability.date >= start,
                RoomAvailability.date < end,
            )
        }
        for day in date_range(start, end):
            if day in existing:
                continue
            db.add(RoomAvailability(
                room_id=room.id,
                date=day,
                status=AvailabilityStatus.AVAILABLE.value,
                source=AvailabilitySource.SYSTEM.value,
            ))
            created += 1
    db.flush()
    return created


def check_availability_conflicts(db: Session, room_id: str, start_date: date, end_date: date):
    return (
        db.query(Booking)
        .filter(
            Booking.room_id == room_id,
            Booking.status.in_(_values(ACTIVE_BOOKING_STATUSES)),
            Booking.check_in_date < end_date,
            Booking.check_out_date > start_date,
        )
        .order_by(Booking.check_in_date.asc())
        .all()
    )


def generate_promo_code(db: Session, length: int = 8) -> str:
    while True:
        code = "".join(secrets.choice(PROMO_CODE_ALPHABET) for _ in range(length))
        if not db.query(PromoCode.id).filter(PromoCode.code == code).first():
            return code


def generate_refund_ticket_id(db: Session, now: datetime | None = None) -> str:
    """RR-<last 6 digits of the epoch millis>-<5 random characters>."""
    stamp = str(int((now or datetime.utcnow()).timestamp() * 1000))[-6:]
    while True:
        ticket_id = f"RR-{stamp}-" + "".join(secrets.choice(PROMO_CODE_ALPHABET) for _ in range(5))
        if not db.query(RefundRequest.id).filter(RefundRequest.ticket_id == ticket_id).first():
            return ticket_id


PROCEDURES = {
    "check_room_availability": check_room_availability,
    "bulk_update_room_availability": bulk_update_room_availability,
    "refresh_room_aggregate": refresh_room_aggregate,
    "release_booking_days": release_booking_days,
    "checkout_room": checkout_room,
    "initialize_room_availability": initialize_room_availability,
    "check_availability_conflicts": check_availability_conflicts,
    "generate_promo_code": generate_promo_code,
    "generate_refund_ticket_id": generate_refund_ticket_id,
}
