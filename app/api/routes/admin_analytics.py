from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.dependencies import get_db, require_admin
from app.core.logging_config import get_logger
from app.core.session import AuthSession
from app.models.booking import Booking
from app.models.enums import BookingType, PaymentStatus
from app.models.room import Room

router = APIRouter(prefix="/admin-analytics", tags=["Admin Analytics"])
logger = get_logger()

PAID = PaymentStatus.PAID.value


# =====================================================================
# 1. TOTAL REVENUE (ALL TIME)
# =====================================================================
@router.get("/revenue/total")
def total_revenue(db: Session = Depends(get_db), session: AuthSession = Depends(require_admin)):
    total = db.query(func.sum(Booking.total_price)).filter(
        Booking.payment_status == PAID
    ).scalar()

    total = float(total or 0)

    logger.bind(log_type="admin").info(f"Admin {session.email} checked total revenue → {total}")

    return {"total_revenue": total}


# =====================================================================
# 2. MONTHLY REVENUE
# =====================================================================
@router.get("/revenue/monthly")
def monthly_revenue(year: int, db: Session = Depends(get_db), session: AuthSession = Depends(require_admin)):
    results = (
        db.query(
            func.extract("month", Booking.check_in_date).label("month"),
            func.sum(Booking.total_price).label("revenue"),
        )
        .filter(
            func.extract("year", Booking.check_in_date) == year,
            Booking.payment_status == PAID,
        )
        .group_by(func.extract("month", Booking.check_in_date))
        .order_by("month")
        .all()
    )

    monthly_data = [
        {"month": int(r.month), "revenue": float(r.revenue or 0)} for r in results
    ]

    logger.bind(log_type="admin").info(f"Admin checked monthly revenue for {year}")

    return {"year": year, "monthly_revenue": monthly_data}


# =====================================================================
# 3. REVENUE PER ROOM
# =====================================================================
@router.get("/revenue/rooms")
def revenue_per_room(db: Session = Depends(get_db), session: AuthSession = Depends(require_admin)):
    results = (
        db.query(
            Room.id,
            Room.name,
            func.sum(Booking.total_price).label("revenue"),
        )
        .join(Booking, Booking.room_id == Room.id)
        .filter(Booking.payment_status == PAID)
        .group_by(Room.id, Room.name)
        .order_by(func.sum(Booking.total_price).desc())
        .all()
    )

    data = [
        {"room_id": r.id, "room_name": r.name, "revenue": float(r.revenue or 0)}
        for r in results
    ]

    logger.bind(log_type="admin").info("Admin checked revenue per room")

    return data


# =====================================================================
# 4. BOOKING COUNT PER ROOM
# =====================================================================
@router.get("/bookings/room-count")
def booking_count_per_room(db: Session = Depends(get_db), session: AuthSession = Depends(require_admin)):
    results = (
        db.query(
            Room.id,
            Room.name,
            func.count(Booking.id).label("booking_count"),
        )
        .join(Booking, Booking.room_id == Room.id)
        .group_by(Room.id, Room.name)
        .order_by(func.count(Booking.id).desc())
        .all()
    )

    data = [
        {"room_id": r.id, "room_name": r.name, "booking_count": r.booking_count}
        for r in results
    ]

    logger.bind(log_type="admin").info("Admin checked booking count per room")

    return data


# =====================================================================
# 5. PAYMENT STATISTICS
# =====================================================================
@router.get("/payments/stats")
def payment_stats(db: Session = Depends(get_db), session: AuthSession = Depends(require_admin)):
    def count(booking_type: BookingType, payment_status: PaymentStatus):
        return (
            db.query(func.count(Booking.id))
            .filter(
                Booking.booking_type == booking_type.value,
                Booking.payment_status == payment_status.value,
            )
            .scalar()
        )

    online = count(BookingType.ONLINE, PaymentStatus.PAID)
    offline = count(BookingType.OFFLINE, PaymentStatus.PAID)
    failed_online = count(BookingType.ONLINE, PaymentStatus.FAILED)

    logger.bind(log_type="admin").info("Admin checked payment stats")

    return {
        "online_payments": online or 0,
        "offline_payments": offline or 0,
        "failed_online_payments": failed_online or 0,
    }
