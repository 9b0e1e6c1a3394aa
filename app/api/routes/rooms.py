from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from app.core.dependencies import get_store, require_admin
from app.core.logging_config import get_logger
from app.core.session import AuthSession
from app.db.store import DataStore
from app.models.enums import ACTIVE_BOOKING_STATUSES, RoomStatus
from app.schemas.room import QuoteRequest, RoomCreate, RoomOut, RoomStatusUpdate, RoomUpdate
from app.services import availability
from app.utils.pricing import PriceQuote, quote_stay

router = APIRouter(prefix="/rooms", tags=["Rooms"])
logger = get_logger()


def get_room_or_404(store: DataStore, room_id: str):
    room = store.first("rooms", {"id": room_id})
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room


# =====================================================================
# CREATE ROOM  (Admin Only)
# =====================================================================
@router.post("/", response_model=RoomOut)
def create_room(data: RoomCreate, store: DataStore = Depends(get_store),
                session: AuthSession = Depends(require_admin)):
    room = store.insert("rooms", data.model_dump())
    logger.bind(log_type="admin").info(f"Room created | Room={room.id} | By={session.email}")
    return room


# =====================================================================
# EDIT ROOM  (Admin Only)
# =====================================================================
@router.put("/{room_id}", response_model=RoomOut)
def edit_room(room_id: str, data: RoomUpdate, store: DataStore = Depends(get_store),
              session: AuthSession = Depends(require_admin)):
    get_room_or_404(store, room_id)

    patch = data.model_dump(exclude_unset=True)
    if patch:
        store.update("rooms", {"id": room_id}, patch)

    logger.bind(log_type="admin").info(f"Room updated | Room={room_id} | Fields={sorted(patch)}")
    return get_room_or_404(store, room_id)


# =====================================================================
# ROOM STATUS  (Admin Only)
# =====================================================================
@router.patch("/{room_id}/status", response_model=RoomOut)
def update_room_status(room_id: str, data: RoomStatusUpdate, store: DataStore = Depends(get_store),
                       session: AuthSession = Depends(require_admin)):
    get_room_or_404(store, room_id)
    store.update("rooms", {"id": room_id}, {"status": data.status, "is_available": data.is_available})
    return get_room_or_404(store, room_id)


# =====================================================================
# DELETE ROOM  (Admin Only)
# =====================================================================
@router.delete("/{room_id}")
def delete_room(room_id: str, store: DataStore = Depends(get_store),
                session: AuthSession = Depends(require_admin)):
    get_room_or_404(store, room_id)

    if store.first("bookings", {"room_id": room_id, "status__in": list(ACTIVE_BOOKING_STATUSES)}):
        raise HTTPException(status_code=400, detail="Room has active bookings")

    store.delete("room_availability", {"room_id": room_id})
    store.delete("room_images", {"room_id": room_id})
    store.delete("rooms", {"id": room_id})

    logger.bind(log_type="admin").info(f"Room deleted | Room={room_id} | By={session.email}")
    return {"message": "Room deleted successfully"}


# =====================================================================
# LIST ROOMS
# =====================================================================
@router.get("/", response_model=list[RoomOut])
def list_rooms(store: DataStore = Depends(get_store)):
    return store.query("rooms", order_by="name")


# =====================================================================
# AVAILABLE ROOMS FOR A STAY
# =====================================================================
@router.get("/available", response_model=list[RoomOut])
def available_rooms(check_in: date, check_out: date, store: DataStore = Depends(get_store)):
    rooms = availability.get_available_rooms(store, check_in, check_out)

    # Annotate with the range result, not the stored aggregate
    return [
        RoomOut.model_validate(room).model_copy(update={"is_available": True, "status": RoomStatus.AVAILABLE})
        for room in rooms
    ]


# =====================================================================
# ROOM DETAILS
# =====================================================================
@router.get("/{room_id}", response_model=RoomOut)
def get_room(room_id: str, store: DataStore = Depends(get_store)):
    return get_room_or_404(store, room_id)


# =====================================================================
# PRICE QUOTE
# =====================================================================
@router.post("/{room_id}/quote", response_model=PriceQuote)
def quote_room(room_id: str, data: QuoteRequest, store: DataStore = Depends(get_store)):
    room = get_room_or_404(store, room_id)

    if data.check_out_date <= data.check_in_date:
        raise HTTPException(status_code=400, detail="Check-out date must be after check-in date")

    return quote_stay(
        room,
        data.check_in_date,
        data.check_out_date,
        adults=data.adults,
        children=data.children,
        effective_adults=data.effective_adults,
        with_breakfast=data.with_breakfast,
    )
