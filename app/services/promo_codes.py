from datetime import datetime

from pydantic import BaseModel

from app.core.exceptions import NotFoundError, PromoInvalidError, ValidationError
from app.core.logging_config import get_logger
from app.db.store import DataStore
from app.models.enums import PromoStatus
from app.utils.pricing import apply_discount

logger = get_logger()


class PromoValidationResult(BaseModel):
    valid: bool
    message: str | None = None
    original_amount: float | None = None
    discount_amount: float | None = None  # actual discount, not the new total
    final_amount: float | None = None


def _normalize(code: str) -> str:
    return (code or "").strip().upper()


def _usable_promo(store: DataStore, code: str, amount, customer_id=None, device_id=None, now=None):
    """Return the promo row if it can be applied, else raise PromoInvalidError."""
    now = now or datetime.utcnow()
    code = _normalize(code)
    if not code:
        raise PromoInvalidError("Please enter a promo code")
    if amount is None or amount <= 0:
        raise PromoInvalidError("Order amount must be greater than zero")

    promo = store.first("promo_codes", {"code": code})
    if promo is None:
        raise PromoInvalidError("Invalid promo code")

    if promo.status != PromoStatus.ACTIVE:
        raise PromoInvalidError(f"This promo code is {promo.status}")

    if promo.expiry_date is not None and now > promo.expiry_date:
        raise PromoInvalidError("This promo code has expired")

    if promo.max_uses is not None and promo.current_uses >= promo.max_uses:
        raise PromoInvalidError("This promo code has reached its usage limit")

    for field, value in (("customer_id", customer_id), ("device_id", device_id)):
        if value and store.first("promo_code_usage", {"promo_code_id": promo.id, field: value}):
            raise PromoInvalidError("You have already used this promo code")

    return promo


def validate_promo_code(store: DataStore, code: str, amount, customer_id=None, device_id=None,
                        now=None) -> PromoValidationResult:
    """Check a code against an order amount without touching usage counters."""
    try:
        promo = _usable_promo(store, code, amount, customer_id, device_id, now)
    except PromoInvalidError as exc:
        return PromoValidationResult(valid=False, message=exc.message)

    discount, final = apply_discount(amount, promo.discount_amount)
    return PromoValidationResult(
        valid=True,
        message="Promo code applied successfully",
        original_amount=amount,
        discount_amount=discount,
        final_amount=final,
    )


def redeem_promo_code(store: DataStore, code: str, amount, booking_id=None, customer_id=None,
                      device_id=None, now=None) -> PromoValidationResult:
    """Count one use of a code for a finalized booking."""
    promo = _usable_promo(store, code, amount, customer_id, device_id, now)
    discount, final = apply_discount(amount, promo.discount_amount)

    uses = promo.current_uses + 1
    patch = {"current_uses": uses}
    if promo.max_uses is not None and uses >= promo.max_uses:
        patch["status"] = PromoStatus.USED

    # Compare-and-swap on current_uses so two finalizations cannot both take the last use
    updated = store.update("promo_codes", {"id": promo.id, "current_uses": promo.current_uses}, patch)
    if not updated:
        raise PromoInvalidError("This promo code has reached its usage limit")

    store.insert("promo_code_usage", {
        "promo_code_id": promo.id,
        "booking_id": booking_id,
        "customer_id": customer_id,
        "device_id": device_id,
        "discount_amount": discount,
    })

    logger.bind(log_type="booking").info(
        f"Promo Redeemed | Code={promo.code} | Booking={booking_id} | Discount={discount}"
    )
    return PromoValidationResult(
        valid=True,
        original_amount=amount,
        discount_amount=discount,
        final_amount=final,
    )


def create_promo_code(store: DataStore, code: str | None, discount_amount, expiry_date=None,
                      max_uses=None, generate_random_code: bool = False, created_by=None):
    if discount_amount is None or discount_amount <= 0:
        raise ValidationError("Discount amount must be greater than zero")
    if max_uses is not None and max_uses < 1:
        raise ValidationError("max_uses must be at least 1")

    if generate_random_code:
        code = store.call("generate_promo_code")

    code = _normalize(code)
    if not code:
        raise ValidationError("Promo code is required")
    if store.first("promo_codes", {"code": code}):
        raise ValidationError(f"Promo code {code} already exists")

    promo = store.insert("promo_codes", {
        "code": code,
        "discount_amount": discount_amount,
        "expiry_date": expiry_date,
        "max_uses": max_uses,
        "current_uses": 0,
        "status": PromoStatus.ACTIVE,
        "created_by": created_by,
    })

    logger.bind(log_type="admin").info(f"Promo code {code} created by admin {created_by}")
    return promo


def delete_promo_code(store: DataStore, promo_id: str):
    promo = store.first("promo_codes", {"id": promo_id})
    if promo is None:
        raise NotFoundError("Promo code not found")
    code = promo.code

    # Usage rows reference the code, remove them first
    store.delete("promo_code_usage", {"promo_code_id": promo_id})
    store.delete("promo_codes", {"id": promo_id})

    logger.bind(log_type="admin").info(f"Promo code {code} deleted")


def list_promo_codes(store: DataStore):
    return store.query("promo_codes", order_by="-created_at")


def expire_promo_codes(store: DataStore, now=None) -> int:
    now = now or datetime.utcnow()
    return store.update(
        "promo_codes",
        {"status": PromoStatus.ACTIVE, "expiry_date__lt": now},
        {"status": PromoStatus.EXPIRED},
    )
