"""Room availability: per-day status records and the rules that read them."""
from datetime import date, timedelta

from pydantic import BaseModel

from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging_config import get_logger
from app.db.store import DataStore
from app.models.enums import (
    AvailabilitySource,
    AvailabilityStatus,
    RoomStatus,
    STATUS_PRIORITY,
    BOOKING_AVAILABILITY_STATUSES,
)
from app.utils.dates import date_range, to_date

logger = get_logger()

# Aggregate room fields written after a bulk update, keyed by the new day status
ROOM_AGGREGATE = {
    AvailabilityStatus.MAINTENANCE: (RoomStatus.MAINTENANCE, False),
    AvailabilityStatus.UNAVAILABLE: (RoomStatus.UNAVAILABLE, False),
    AvailabilityStatus.ONLINE_BOOKING: (RoomStatus.BOOKED, True),
    AvailabilityStatus.OFFLINE_BOOKING: (RoomStatus.BOOKED, True),
}


class AvailabilityDay(BaseModel):
    room_id: str
    date: date
    status: AvailabilityStatus
    source: AvailabilitySource
    booking_id: str | None = None
    notes: str | None = None


def inclusive_end(end: date) -> date:
    """Turn an inclusive end date into the exclusive bound the resolver expects."""
    return to_date(end) + timedelta(days=1)


def _validate_range(start, end):
    start, end = to_date(start), to_date(end)
    if end <= start:
        raise ValidationError("End date must be after start date")
    return start, end


def _require_room(store: DataStore, room_id: str):
    room = store.first("rooms", {"id": room_id})
    if room is None:
        raise NotFoundError("Room not found")
    return room


# ---------------------------------------------------------------------
# STATUS RESOLUTION
# ---------------------------------------------------------------------
def resolve_status(statuses) -> AvailabilityStatus:
    """Pick the most restrictive status; no statuses means available."""
    resolved = AvailabilityStatus.AVAILABLE
    for status in statuses:
        status = AvailabilityStatus(status)
        if STATUS_PRIORITY[status] < STATUS_PRIORITY[resolved]:
            resolved = status
    return resolved


def display_label(status) -> str:
    status = AvailabilityStatus(status)
    if status in BOOKING_AVAILABILITY_STATUSES:
        return RoomStatus.BOOKED.value
    return status.value


def resolve_display_status(store: DataStore, room_id: str, start, end) -> AvailabilityStatus:
    start, end = _validate_range(start, end)
    rows = store.query("room_availability", {
        "room_id": room_id,
        "date__gte": start,
        "date__lt": end,
    })
    return resolve_status(row.status for row in rows)


# ---------------------------------------------------------------------
# AVAILABILITY CHECKS
# ---------------------------------------------------------------------
def is_room_available(store: DataStore, room_id: str, check_in, check_out) -> bool:
    check_in, check_out = _validate_range(check_in, check_out)
    _require_room(store, room_id)
    return store.call(
        "check_room_availability",
        room_id=room_id,
        check_in_date=check_in,
        check_out_date=check_out,
    )


def get_available_rooms(store: DataStore, check_in, check_out):
    check_in, check_out = _validate_range(check_in, check_out)
    available = []
    for room in store.query("rooms", order_by="name"):
        if store.call("check_room_availability", room_id=room.id,
                      check_in_date=check_in, check_out_date=check_out):
            available.append(room)
    return available


def get_room_calendar(store: DataStore, room_id: str, start, end) -> list[AvailabilityDay]:
    start, end = _validate_range(start, end)
    _require_room(store, room_id)

    rows = {
        row.date: row
        for row in store.query("room_availability", {
            "room_id": room_id,
            "date__gte": start,
            "date__lt": end,
        })
    }

    calendar = []
    for day in date_range(start, end):
        row = rows.get(day)
        if row is None:
            calendar.append(AvailabilityDay(
                room_id=room_id,
                date=day,
                status=AvailabilityStatus.AVAILABLE,
                source=AvailabilitySource.SYSTEM,
            ))
            continue
        calendar.append(AvailabilityDay(
            room_id=room_id,
            date=day,
            status=row.status,
            source=row.source,
            booking_id=row.booking_id,
            notes=row.notes,
        ))
    return calendar


def check_availability_conflicts(store: DataStore, room_id: str, start, end):
    start, end = _validate_range(start, end)
    return store.call("check_availability_conflicts", room_id=room_id, start_date=start, end_date=end)


# ---------------------------------------------------------------------
# MUTATIONS
# ---------------------------------------------------------------------
def bulk_update_availability(store: DataStore, room_ids, start_date, end_date, status,
                             source=AvailabilitySource.ADMIN, notes=None, admin_id=None) -> int:
    """Set ``status`` on every (room, date) for dates in [start_date, end_date).

    ``end_date`` is exclusive; wrap an inclusive end with ``inclusive_end``.
    The day rows for every room are written by one procedure call and commit
    together. Each room's aggregate status is then updated in its own commit,
    so a store failure there can leave some aggregates stale while the day
    rows are already saved.
    """
    start_date, end_date = _validate_range(start_date, end_date)
    status = AvailabilityStatus(status)
    source = AvailabilitySource(source)
    if not room_ids:
        raise ValidationError("At least one room is required")

    for room_id in room_ids:
        _require_room(store, room_id)

    touched = store.call(
        "bulk_update_room_availability",
        room_ids=list(room_ids),
        start_date=start_date,
        end_date=end_date,
        status=status,
        source=source,
        notes=notes,
        admin_id=admin_id,
    )

    for room_id in room_ids:
        _update_room_aggregate(store, room_id, status)

    logger.bind(log_type="availability").info(
        f"Availability updated | Rooms={list(room_ids)} | {start_date}..{end_date} | "
        f"Status={status.value} | Source={source.value}"
    )
    return touched


def _update_room_aggregate(store: DataStore, room_id: str, status: AvailabilityStatus):
    if status == AvailabilityStatus.AVAILABLE:
        # Partial availability: leave the room alone while closed days remain
        if not store.call("refresh_room_aggregate", room_id=room_id):
            logger.bind(log_type="availability").info(
                f"Room {room_id} still has maintenance/unavailable days; status unchanged"
            )
        return

    room_status, is_available = ROOM_AGGREGATE[status]
    store.update("rooms", {"id": room_id}, {"status": room_status, "is_available": is_available})


def mark_booking_days(store: DataStore, booking, status: AvailabilityStatus) -> int:
    """Claim the nights of a booking on its room's calendar."""
    return store.call(
        "bulk_update_room_availability",
        room_ids=[booking.room_id],
        start_date=booking.check_in_date,
        end_date=booking.check_out_date,
        status=status,
        source=AvailabilitySource.BOOKING,
        booking_id=booking.id,
    )


def release_booking_days(store: DataStore, booking) -> int:
    return store.call("release_booking_days", room_id=booking.room_id, booking_id=booking.id)


def initialize_room_availability(store: DataStore, days_ahead: int = 365) -> int:
    if days_ahead <= 0:
        raise ValidationError("days_ahead must be positive")
    created = store.call("initialize_room_availability", days_ahead=days_ahead)
    logger.bind(log_type="availability").info(f"Initialized {created} availability rows ({days_ahead} days)")
    return created
