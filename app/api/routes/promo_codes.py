from fastapi import APIRouter, Depends

from app.core.dependencies import get_store, require_admin
from app.core.session import AuthSession
from app.db.store import DataStore
from app.schemas.promo import PromoCodeCreate, PromoCodeOut, PromoValidateRequest
from app.services import promo_codes
from app.services.promo_codes import PromoValidationResult

router = APIRouter(prefix="/promo-codes", tags=["Promo Codes"])


# =====================================================================
# VALIDATE (PUBLIC, NO SIDE EFFECTS)
# =====================================================================
@router.post("/validate", response_model=PromoValidationResult)
def validate_promo_code(data: PromoValidateRequest, store: DataStore = Depends(get_store)):
    return promo_codes.validate_promo_code(
        store,
        data.promo_code,
        data.total_amount,
        customer_id=data.customer_id,
        device_id=data.device_id,
    )


# =====================================================================
# ADMIN — CREATE
# =====================================================================
@router.post("/", response_model=PromoCodeOut)
def create_promo_code(data: PromoCodeCreate, store: DataStore = Depends(get_store),
                      session: AuthSession = Depends(require_admin)):
    return promo_codes.create_promo_code(
        store,
        data.code,
        data.discount_amount,
        expiry_date=data.expiry_date,
        max_uses=data.max_uses,
        generate_random_code=data.generate_random_code,
        created_by=session.admin_id,
    )


# =====================================================================
# ADMIN — LIST
# =====================================================================
@router.get("/", response_model=list[PromoCodeOut])
def list_promo_codes(store: DataStore = Depends(get_store), session: AuthSession = Depends(require_admin)):
    return promo_codes.list_promo_codes(store)


# =====================================================================
# ADMIN — EXPIRE PAST-DUE CODES
# =====================================================================
@router.post("/expire")
def expire_promo_codes(store: DataStore = Depends(get_store), session: AuthSession = Depends(require_admin)):
    expired = promo_codes.expire_promo_codes(store)
    return {"message": "Expired promo codes updated", "expired": expired}


# =====================================================================
# ADMIN — DELETE
# =====================================================================
@router.delete("/{promo_id}")
def delete_promo_code(promo_id: str, store: DataStore = Depends(get_store),
                      session: AuthSession = Depends(require_admin)):
    promo_codes.delete_promo_code(store, promo_id)
    return {"message": "Promo code deleted successfully"}
