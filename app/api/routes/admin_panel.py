from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.dependencies import get_db, require_admin
from app.core.session import AuthSession
from app.models.admin import Admin
from app.models.booking import Booking
from app.models.enums import ACTIVE_BOOKING_STATUSES, BookingStatus, RoomStatus
from app.models.room import Room
from app.models.table_booking import TableBooking
from app.schemas.admin import AdminOut

router = APIRouter(prefix="/admin-panel", tags=["Admin Panel"])


# ==================================================
# DASHBOARD STATS
# ==================================================
@router.get("/stats")
def admin_stats(db: Session = Depends(get_db), session: AuthSession = Depends(require_admin)):
    today = date.today()
    active = [s.value for s in ACTIVE_BOOKING_STATUSES]

    return {
        "total_rooms": db.query(Room).count(),
        "available_rooms": db.query(Room).filter(Room.status == RoomStatus.AVAILABLE.value).count(),
        "total_bookings": db.query(Booking).count(),
        "pending_bookings": db.query(Booking).filter(Booking.status == BookingStatus.PENDING.value).count(),
        # Guests staying tonight
        "today_bookings": db.query(Booking).filter(
            Booking.status.in_(active),
            Booking.check_in_date <= today,
            Booking.check_out_date > today,
        ).count(),
        "today_table_bookings": db.query(TableBooking).filter(TableBooking.date == today).count(),
    }


# ==================================================
# GET ALL ADMINS
# ==================================================
@router.get("/admins", response_model=list[AdminOut])
def get_all_admins(db: Session = Depends(get_db), session: AuthSession = Depends(require_admin)):
    return db.query(Admin).all()
