from datetime import date

from fastapi import APIRouter, Depends

from app.core.dependencies import get_store, require_admin
from app.core.session import AuthSession
from app.db.store import DataStore
from app.schemas.booking import BookingOut
from app.schemas.room import AvailabilityDayOut, AvailabilityUpdate
from app.services import availability

router = APIRouter(prefix="/availability", tags=["Availability"])


# =====================================================================
# CHECK ONE ROOM
# =====================================================================
@router.get("/rooms/{room_id}/check")
def check_room(room_id: str, check_in: date, check_out: date, store: DataStore = Depends(get_store)):
    available = availability.is_room_available(store, room_id, check_in, check_out)
    return {
        "room_id": room_id,
        "check_in_date": check_in,
        "check_out_date": check_out,
        "available": available,
    }


# =====================================================================
# DISPLAY STATUS FOR A RANGE
# =====================================================================
@router.get("/rooms/{room_id}/status")
def room_display_status(room_id: str, start_date: date, end_date: date,
                        store: DataStore = Depends(get_store)):
    status = availability.resolve_display_status(store, room_id, start_date, end_date)
    return {
        "room_id": room_id,
        "status": status,
        "label": availability.display_label(status),
    }


# =====================================================================
# CALENDAR
# =====================================================================
@router.get("/rooms/{room_id}/calendar", response_model=list[AvailabilityDayOut])
def room_calendar(room_id: str, start_date: date, end_date: date, store: DataStore = Depends(get_store)):
    days = availability.get_room_calendar(store, room_id, start_date, end_date)
    return [
        AvailabilityDayOut(**day.model_dump(), label=availability.display_label(day.status))
        for day in days
    ]


# =====================================================================
# BOOKINGS OVERLAPPING A RANGE  (Admin Only)
# =====================================================================
@router.get("/rooms/{room_id}/conflicts", response_model=list[BookingOut])
def room_conflicts(room_id: str, start_date: date, end_date: date, store: DataStore = Depends(get_store),
                   session: AuthSession = Depends(require_admin)):
    return availability.check_availability_conflicts(store, room_id, start_date, end_date)


# =====================================================================
# BULK UPDATE  (Admin Only)
# =====================================================================
@router.post("/bulk-update")
def bulk_update(data: AvailabilityUpdate, store: DataStore = Depends(get_store),
                session: AuthSession = Depends(require_admin)):
    # Admin calendars send an inclusive end date
    updated = availability.bulk_update_availability(
        store,
        data.room_ids,
        data.start_date,
        availability.inclusive_end(data.end_date),
        data.status,
        source=data.source,
        notes=data.notes,
        admin_id=session.admin_id,
    )
    return {"message": "Availability updated", "updated": updated}


# =====================================================================
# INITIALIZE CALENDAR  (Admin Only)
# =====================================================================
@router.post("/initialize")
def initialize(days_ahead: int = 365, store: DataStore = Depends(get_store),
               session: AuthSession = Depends(require_admin)):
    created = availability.initialize_room_availability(store, days_ahead)
    return {"message": "Availability initialized", "created": created}
