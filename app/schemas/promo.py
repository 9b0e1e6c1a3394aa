from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.models.enums import PromoStatus


class PromoCodeCreate(BaseModel):
    code: Optional[str] = None
    discount_amount: float = Field(gt=0)
    expiry_date: Optional[datetime] = None
    max_uses: Optional[int] = Field(default=None, ge=1)
    generate_random_code: bool = False

    @model_validator(mode="after")
    def check_code(self):
        if not self.generate_random_code and not (self.code or "").strip():
            raise ValueError("code is required unless generate_random_code is set")
        return self


class PromoCodeOut(BaseModel):
    id: str
    code: str
    discount_amount: float
    expiry_date: Optional[datetime] = None
    max_uses: Optional[int] = None
    current_uses: int
    status: PromoStatus
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PromoValidateRequest(BaseModel):
    promo_code: str
    total_amount: float
    customer_id: Optional[str] = None
    device_id: Optional[str] = None
