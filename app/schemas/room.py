from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from app.models.enums import (
    AvailabilitySource,
    AvailabilityStatus,
    RoomCategory,
    RoomStatus,
)


class RoomBase(BaseModel):
    name: str = Field(min_length=1)
    description: str
    price: float = Field(gt=0)
    capacity: int = Field(default=2, ge=1)
    beds: int = Field(default=1, ge=1)
    bathrooms: int = Field(default=1, ge=0)
    amenities: List[str] = []
    image_url: Optional[str] = None
    category_type: RoomCategory = RoomCategory.ROYAL_EXECUTIVE
    breakfast_price: float = Field(default=0.0, ge=0)


class RoomCreate(RoomBase):
    pass


class RoomUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, gt=0)
    capacity: Optional[int] = Field(default=None, ge=1)
    beds: Optional[int] = None
    bathrooms: Optional[int] = None
    amenities: Optional[List[str]] = None
    image_url: Optional[str] = None
    category_type: Optional[RoomCategory] = None
    breakfast_price: Optional[float] = Field(default=None, ge=0)


class RoomStatusUpdate(BaseModel):
    status: RoomStatus
    is_available: bool


class RoomOut(RoomBase):
    id: str
    is_available: bool
    status: RoomStatus
    price_per_night: float

    model_config = {"from_attributes": True}


class QuoteRequest(BaseModel):
    check_in_date: date
    check_out_date: date
    adults: int = Field(ge=1)
    children: int = Field(default=0, ge=0)
    effective_adults: Optional[int] = None
    with_breakfast: bool = False


class DateRange(BaseModel):
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date <= self.start_date:
            raise ValueError("end_date must be after start_date")
        return self


class AvailabilityUpdate(BaseModel):
    room_ids: List[str] = Field(min_length=1)
    start_date: date
    end_date: date  # inclusive; the service receives end_date + 1 day
    status: AvailabilityStatus
    source: AvailabilitySource = AvailabilitySource.ADMIN
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class AvailabilityDayOut(BaseModel):
    room_id: str
    date: date
    status: AvailabilityStatus
    source: AvailabilitySource
    booking_id: Optional[str] = None
    notes: Optional[str] = None
    label: Optional[str] = None


class RoomImageOut(BaseModel):
    id: str
    url: str
    public_id: str
    is_primary: bool
    order_index: int
