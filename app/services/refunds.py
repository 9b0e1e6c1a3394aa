"""Guest refund requests and their admin review."""
from app.core.exceptions import NotFoundError, ValidationError
from app.core.logging_config import get_logger
from app.db.store import DataStore
from app.models.enums import OPEN_REFUND_STATUSES, PaymentStatus, RefundStatus

logger = get_logger()

MIN_REASON_LENGTH = 10


def get_refund_request(store: DataStore, request_id: str):
    request = store.first("refund_requests", {"id": request_id})
    if request is None:
        raise NotFoundError("Refund request not found")
    return request


def list_refund_requests(store: DataStore, status=None):
    filters = {"status": RefundStatus(status)} if status else None
    return store.query("refund_requests", filters, order_by="-created_at")


# ---------------------------------------------------------------------
# GUEST REQUEST
# ---------------------------------------------------------------------
def create_refund_request(store: DataStore, booking_id: str, customer_name: str, customer_email: str,
                          amount, reason: str, customer_id=None):
    """Open a refund ticket against a paid booking.

    The requester must quote the email on the booking, the amount cannot
    exceed what was paid, and a booking holds at most one open request.
    """
    booking = store.first("bookings", {"id": booking_id})
    if booking is None:
        raise NotFoundError("Booking not found")

    if (customer_email or "").strip().lower() != booking.customer_email.lower():
        raise ValidationError("Email does not match the booking")
    if booking.payment_status != PaymentStatus.PAID:
        raise ValidationError("Only paid bookings can be refunded")
    if amount is None or amount <= 0:
        raise ValidationError("Refund amount must be positive")
    if amount > booking.total_price:
        raise ValidationError("Refund amount cannot exceed the amount paid")
    if len((reason or "").strip()) < MIN_REASON_LENGTH:
        raise ValidationError("Please provide a detailed reason for the refund request")

    if store.first("refund_requests", {"booking_id": booking_id, "status__in": list(OPEN_REFUND_STATUSES)}):
        raise ValidationError("A refund request for this booking is already open")

    request = store.insert("refund_requests", {
        "ticket_id": store.call("generate_refund_ticket_id"),
        "booking_id": booking_id,
        "customer_name": (customer_name or booking.customer_name).strip(),
        "customer_email": booking.customer_email,
        "customer_id": customer_id or booking.customer_id,
        "amount": amount,
        "reason": reason.strip(),
        "status": RefundStatus.PENDING,
    })

    logger.bind(log_type="payment").info(
        f"Refund Requested | Ticket={request.ticket_id} | Booking={booking_id} | Amount={amount}"
    )
    return request


# ---------------------------------------------------------------------
# ADMIN REVIEW
# ---------------------------------------------------------------------
def _move(store: DataStore, request_id: str, allowed, patch: dict):
    request = get_refund_request(store, request_id)
    allowed = [RefundStatus(s) for s in allowed]

    # Guarded on the current status so two reviewers cannot both act on one request
    updated = store.update("refund_requests", {"id": request_id, "status__in": allowed}, patch)
    if not updated:
        raise ValidationError(f"Cannot change a {request.status} refund request to {patch['status'].value}")
    return get_refund_request(store, request_id)


def approve_refund_request(store: DataStore, request_id: str, admin_notes=None, reviewed_by=None):
    """Accept a request; a failed gateway attempt may be approved again."""
    request = _move(store, request_id, (RefundStatus.PENDING, RefundStatus.REFUND_FAILED), {
        "status": RefundStatus.APPROVED,
        "admin_notes": admin_notes,
        "reviewed_by": reviewed_by,
    })
    logger.bind(log_type="admin").info(f"Refund Approved | Ticket={request.ticket_id} | By={reviewed_by}")
    return request


def reject_refund_request(store: DataStore, request_id: str, admin_notes=None, reviewed_by=None):
    request = _move(store, request_id, (RefundStatus.PENDING,), {
        "status": RefundStatus.REJECTED,
        "admin_notes": admin_notes,
        "reviewed_by": reviewed_by,
    })
    logger.bind(log_type="admin").info(f"Refund Rejected | Ticket={request.ticket_id} | By={reviewed_by}")
    return request


def record_refund_initiated(store: DataStore, request_id: str, refund_id=None, refund_status=None):
    """The money is on its way back: the booking's payment becomes refunded."""
    request = _move(store, request_id, (RefundStatus.APPROVED,), {
        "status": RefundStatus.REFUND_INITIATED,
        "refund_id": refund_id,
        "refund_status": refund_status,
    })
    store.update("bookings", {"id": request.booking_id}, {"payment_status": PaymentStatus.REFUNDED})

    logger.bind(log_type="payment").info(
        f"Refund Initiated | Ticket={request.ticket_id} | Booking={request.booking_id} | Refund={refund_id}"
    )
    return request


def record_refund_failed(store: DataStore, request_id: str, error: str):
    request = _move(store, request_id, (RefundStatus.APPROVED,), {
        "status": RefundStatus.REFUND_FAILED,
        "refund_status": error,
    })
    logger.bind(log_type="payment").error(f"Refund Failed | Ticket={request.ticket_id} | {error}")
    return request


def delete_refund_request(store: DataStore, request_id: str):
    get_refund_request(store, request_id)
    store.delete("refund_requests", {"id": request_id})
    logger.bind(log_type="admin").info(f"Refund Request Deleted | Request={request_id}")
