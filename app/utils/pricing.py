import math
from datetime import date, datetime

from pydantic import BaseModel

from app.models.enums import RoomCategory

# ₹600 per extra adult per night
EXTRA_GUEST_RATE = 600

# CGST and SGST, each charged at this rate on the room total
TAX_RATE = 0.061


class TaxBreakdown(BaseModel):
    cgst: float
    sgst: float
    tax: float
    total: float  # equals the room total; tax is informational


class PriceQuote(BaseModel):
    nights: int
    price_per_night: float
    base_price: float
    extra_guests: int
    extra_guest_charges: float
    breakfast_price: float
    breakfast_total: float
    cgst: float
    sgst: float
    total: float


def _as_datetime(value):
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def nights_between(check_in, check_out) -> int:
    """Whole nights between two dates, rounded half-up, never less than 1."""
    delta = _as_datetime(check_out) - _as_datetime(check_in)
    days = abs(delta.total_seconds()) / 86400
    return max(1, int(math.floor(days + 0.5)))


def calculate_total_price(nightly_price, check_in, check_out, extra_guest_count: int = 0):
    nights = nights_between(check_in, check_out)

    # Base room price
    total = nightly_price * nights

    # Extra guest charges (₹600 per extra adult per night)
    if extra_guest_count > 0:
        total += extra_guest_count * EXTRA_GUEST_RATE * nights

    return total


def base_capacity(category) -> int:
    """Adults included in the nightly price: 1 for Royal Deluxe, 2 otherwise."""
    return 1 if category == RoomCategory.ROYAL_DELUXE else 2


def extra_guests_for(category, effective_adults: int) -> int:
    return max(0, (effective_adults or 0) - base_capacity(category))


def tax_breakdown(room_total) -> TaxBreakdown:
    cgst = round(room_total * TAX_RATE, 2)
    sgst = round(room_total * TAX_RATE, 2)
    return TaxBreakdown(
        cgst=cgst,
        sgst=sgst,
        tax=round(cgst + sgst, 2),
        # Not added to the guest-facing total
        total=room_total,
    )


def breakfast_total(price_per_person, total_guests: int, nights: int):
    return (price_per_person or 0) * total_guests * nights


def apply_discount(amount, discount):
    """Return (discount_applied, final_amount); the final amount never goes negative."""
    applied = min(max(discount, 0), amount)
    return applied, amount - applied


def quote_stay(room, check_in, check_out, adults: int, children: int = 0,
               effective_adults: int | None = None, with_breakfast: bool = False) -> PriceQuote:
    nights = nights_between(check_in, check_out)
    extra = extra_guests_for(room.category_type, effective_adults or adults)
    total = calculate_total_price(room.price, check_in, check_out, extra)
    taxes = tax_breakdown(total)

    breakfast_price = room.breakfast_price or 0
    breakfast = breakfast_total(breakfast_price, adults + children, nights) if with_breakfast else 0

    return PriceQuote(
        nights=nights,
        price_per_night=room.price,
        base_price=room.price * nights,
        extra_guests=extra,
        extra_guest_charges=extra * EXTRA_GUEST_RATE * nights,
        breakfast_price=breakfast_price if with_breakfast else 0,
        breakfast_total=breakfast,
        cgst=taxes.cgst,
        sgst=taxes.sgst,
        total=total,
    )
