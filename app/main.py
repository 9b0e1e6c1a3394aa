from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import (
    admin_analytics,
    admin_panel,
    auth,
    availability,
    bookings,
    promo_codes,
    receipts,
    refund_requests,
    room_images,
    rooms,
    table_bookings,
)
from app.core.exceptions import register_exception_handlers

# ⭐ Import logging system
from app.core.logging_config import get_logger

logger = get_logger()

app = FastAPI(
    title="Royal Pavilion Booking API",
    version="1.0.0",
    description="API for Room Availability, Bookings, Receipts, Promo Codes, Refunds & Admin Management"
)

# ⭐ Request Logging Middleware
@app.middleware("http")
async def log_requests(request, call_next):
    logger.info(f"REQUEST: {request.method} {request.url}")

    try:
        response = await call_next(request)
        logger.info(f"RESPONSE: {response.status_code} {request.url}")
        return response

    except Exception as e:
        logger.error(f"ERROR: {request.url} -> {str(e)}")
        raise e


# ⭐ CORS (important for frontend)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Can restrict later for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Domain errors -> {"detail": ...} with their HTTP status
register_exception_handlers(app)

# -------- ROUTERS REGISTER ORDER MATTERS --------
app.include_router(auth.router)
app.include_router(rooms.router)
app.include_router(room_images.router)
app.include_router(availability.router)
app.include_router(bookings.router)
app.include_router(table_bookings.router)
app.include_router(receipts.router)
app.include_router(promo_codes.router)
app.include_router(refund_requests.router)
app.include_router(admin_panel.router)
app.include_router(admin_analytics.router)

@app.get("/", tags=["Root"])
def root():
    return {"message": "Backend running successfully"}
