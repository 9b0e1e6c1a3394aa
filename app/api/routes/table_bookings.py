from typing import Optional

from fastapi import APIRouter, Depends

from app.core.dependencies import get_store, require_admin
from app.core.session import AuthSession
from app.db.store import DataStore
from app.models.enums import TableBookingStatus
from app.schemas.booking import TableBookingCreate, TableBookingOut, TableBookingUpdate
from app.services import bookings

router = APIRouter(prefix="/table-bookings", tags=["Table Bookings"])


# =====================================================================
# RESERVE A TABLE
# =====================================================================
@router.post("/", response_model=TableBookingOut)
def create_table_booking(data: TableBookingCreate, store: DataStore = Depends(get_store)):
    return bookings.create_table_booking(store, data)


# =====================================================================
# ADMIN — LIST / DETAILS
# =====================================================================
@router.get("/", response_model=list[TableBookingOut])
def list_table_bookings(status: Optional[TableBookingStatus] = None, store: DataStore = Depends(get_store),
                        session: AuthSession = Depends(require_admin)):
    return bookings.list_table_bookings(store, status)


@router.get("/{booking_id}", response_model=TableBookingOut)
def get_table_booking(booking_id: str, store: DataStore = Depends(get_store),
                      session: AuthSession = Depends(require_admin)):
    return bookings.get_table_booking(store, booking_id)


# =====================================================================
# ADMIN — UPDATE
# =====================================================================
@router.put("/{booking_id}", response_model=TableBookingOut)
def update_table_booking(booking_id: str, data: TableBookingUpdate, store: DataStore = Depends(get_store),
                         session: AuthSession = Depends(require_admin)):
    return bookings.update_table_booking(store, booking_id, data.model_dump(exclude_unset=True))


# =====================================================================
# ADMIN — DELETE
# =====================================================================
@router.delete("/{booking_id}")
def delete_table_booking(booking_id: str, store: DataStore = Depends(get_store),
                         session: AuthSession = Depends(require_admin)):
    bookings.delete_table_booking(store, booking_id)
    return {"message": "Table booking deleted successfully"}
