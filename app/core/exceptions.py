from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class BookingEngineError(Exception):
    """Base class for errors raised by the booking domain engine."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingEngineError):
    """Missing or malformed input. Reported to the caller, never retried."""

    status_code = 400


class AvailabilityError(BookingEngineError):
    """The room is not free for the requested range."""

    status_code = 409


class NotFoundError(BookingEngineError):
    status_code = 404


class StoreError(BookingEngineError):
    """The underlying data-store call failed. The caller may retry."""

    status_code = 503


class PromoInvalidError(BookingEngineError):
    """Promo code unknown, expired, exhausted or already redeemed."""

    status_code = 400


async def booking_engine_error_handler(request: Request, exc: BookingEngineError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(BookingEngineError, booking_engine_error_handler)
