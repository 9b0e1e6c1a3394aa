from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from razorpay.errors import BadRequestError, GatewayError, ServerError

from app.core.dependencies import get_store, require_admin
from app.core.logging_config import get_logger
from app.core.session import AuthSession
from app.db.store import DataStore
from app.models.enums import BookingType, RefundStatus
from app.schemas.refund import RefundDecision, RefundRequestCreate, RefundRequestOut
from app.services import bookings, refunds
from app.utils.razorpay_client import refund_payment

router = APIRouter(prefix="/refund-requests", tags=["Refund Requests"])
logger = get_logger()


# =====================================================================
# GUEST — REQUEST A REFUND
# =====================================================================
@router.post("/", response_model=RefundRequestOut)
def create_refund_request(data: RefundRequestCreate, store: DataStore = Depends(get_store)):
    return refunds.create_refund_request(
        store,
        data.booking_id,
        data.customer_name,
        data.customer_email,
        data.amount,
        data.reason,
        customer_id=data.customer_id,
    )


# =====================================================================
# ADMIN — LIST / DETAILS
# =====================================================================
@router.get("/", response_model=list[RefundRequestOut])
def list_refund_requests(status: Optional[RefundStatus] = None, store: DataStore = Depends(get_store),
                         session: AuthSession = Depends(require_admin)):
    return refunds.list_refund_requests(store, status)


@router.get("/{request_id}", response_model=RefundRequestOut)
def get_refund_request(request_id: str, store: DataStore = Depends(get_store),
                       session: AuthSession = Depends(require_admin)):
    return refunds.get_refund_request(store, request_id)


# =====================================================================
# ADMIN — APPROVE (AND PAY BACK)
# =====================================================================
@router.post("/{request_id}/approve", response_model=RefundRequestOut)
def approve_refund_request(request_id: str, data: RefundDecision, store: DataStore = Depends(get_store),
                           session: AuthSession = Depends(require_admin)):
    request = refunds.approve_refund_request(store, request_id, data.admin_notes, reviewed_by=session.email)
    booking = bookings.get_booking(store, request.booking_id)

    # Cash and front-desk payments are handed back at the counter
    if booking.booking_type != BookingType.ONLINE or not booking.payment_id:
        return refunds.record_refund_initiated(store, request_id, refund_status="manual")

    try:
        rp_refund = refund_payment(booking.payment_id, request.amount)
    except (BadRequestError, GatewayError, ServerError) as e:
        refunds.record_refund_failed(store, request_id, str(e))
        raise HTTPException(status_code=502, detail="Refund could not be initiated with the payment gateway")

    return refunds.record_refund_initiated(
        store, request_id, refund_id=rp_refund.get("id"), refund_status=rp_refund.get("status")
    )


# =====================================================================
# ADMIN — REJECT
# =====================================================================
@router.post("/{request_id}/reject", response_model=RefundRequestOut)
def reject_refund_request(request_id: str, data: RefundDecision, store: DataStore = Depends(get_store),
                          session: AuthSession = Depends(require_admin)):
    return refunds.reject_refund_request(store, request_id, data.admin_notes, reviewed_by=session.email)


# =====================================================================
# ADMIN — DELETE
# =====================================================================
@router.delete("/{request_id}")
def delete_refund_request(request_id: str, store: DataStore = Depends(get_store),
                          session: AuthSession = Depends(require_admin)):
    refunds.delete_refund_request(store, request_id)
    return {"message": "Refund request deleted successfully"}
