from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from app.core.dependencies import get_store, require_admin
from app.core.session import AuthSession
from app.db.store import DataStore
from app.schemas.receipt import BookingReceiptRequest, ReceiptOut, ReceiptRequest
from app.services import receipts
from app.utils.receipt_render import render_receipt_html

router = APIRouter(prefix="/receipts", tags=["Receipts"])


def get_receipt_or_404(store: DataStore, booking_id: str):
    receipt = receipts.get_receipt_by_booking_id(store, booking_id)
    if not receipt:
        raise HTTPException(status_code=404, detail="Receipt not found")
    return receipt


# =====================================================================
# GENERATE FROM EXPLICIT AMOUNTS  (Admin Only)
# =====================================================================
@router.post("/", response_model=ReceiptOut)
def generate_receipt(data: ReceiptRequest, store: DataStore = Depends(get_store),
                     session: AuthSession = Depends(require_admin)):
    return receipts.receipt_out(receipts.generate_receipt(store, data))


# =====================================================================
# GENERATE FROM A STORED BOOKING
# =====================================================================
@router.post("/from-booking", response_model=ReceiptOut)
def generate_booking_receipt(data: BookingReceiptRequest, store: DataStore = Depends(get_store)):
    receipt = receipts.generate_receipt_for_booking(
        store,
        data.booking_id,
        payment_method=data.payment_method,
        include_qr_code=data.include_qr_code,
    )
    return receipts.receipt_out(receipt)


# =====================================================================
# FETCH
# =====================================================================
@router.get("/{booking_id}", response_model=ReceiptOut)
def get_receipt(booking_id: str, store: DataStore = Depends(get_store)):
    return receipts.receipt_out(get_receipt_or_404(store, booking_id))


# =====================================================================
# PRINTABLE HTML
# =====================================================================
@router.get("/{booking_id}/html", response_class=HTMLResponse)
def get_receipt_html(booking_id: str, store: DataStore = Depends(get_store)):
    receipt = get_receipt_or_404(store, booking_id)
    return render_receipt_html(receipts.parse_receipt_data(receipt.receipt_data))
