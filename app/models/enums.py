from enum import Enum


class RoomCategory(str, Enum):
    ROYAL_DELUXE = "Royal Deluxe"
    ROYAL_EXECUTIVE = "Royal Executive"
    ROYAL_SUITE = "Royal Suite"


class RoomStatus(str, Enum):
    AVAILABLE = "available"
    BOOKED = "booked"
    MAINTENANCE = "maintenance"
    UNAVAILABLE = "unavailable"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    ONLINE_BOOKING = "online-booking"
    OFFLINE_BOOKING = "offline-booking"
    MAINTENANCE = "maintenance"
    UNAVAILABLE = "unavailable"


class AvailabilitySource(str, Enum):
    ADMIN = "admin"
    SYSTEM = "system"
    BOOKING = "booking"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class BookingType(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"


class TableBookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PromoStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
    USED = "used"


class RefundStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REFUND_INITIATED = "refund_initiated"
    REFUND_FAILED = "refund_failed"


# Lower number wins when several statuses compete for the same room/date
STATUS_PRIORITY = {
    AvailabilityStatus.MAINTENANCE: 1,
    AvailabilityStatus.UNAVAILABLE: 2,
    AvailabilityStatus.OFFLINE_BOOKING: 3,
    AvailabilityStatus.ONLINE_BOOKING: 4,
    AvailabilityStatus.AVAILABLE: 5,
}

BOOKING_AVAILABILITY_STATUSES = (
    AvailabilityStatus.ONLINE_BOOKING,
    AvailabilityStatus.OFFLINE_BOOKING,
)

CLOSED_AVAILABILITY_STATUSES = (
    AvailabilityStatus.MAINTENANCE,
    AvailabilityStatus.UNAVAILABLE,
)

BLOCKING_STATUSES = BOOKING_AVAILABILITY_STATUSES + CLOSED_AVAILABILITY_STATUSES

# Bookings that still hold their dates
ACTIVE_BOOKING_STATUSES = (
    BookingStatus.PENDING,
    BookingStatus.CONFIRMED,
    BookingStatus.CHECKED_IN,
)

# Requests still waiting on an admin decision or a gateway call
OPEN_REFUND_STATUSES = (
    RefundStatus.PENDING,
    RefundStatus.APPROVED,
)
