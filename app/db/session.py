from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.core.config import DATABASE_URL

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


def load_models():
    """Import every model module so the tables register on Base.metadata."""
    from app.models import (  # noqa: F401
        admin,
        booking,
        promo_code,
        receipt,
        refund_request,
        room,
        room_availability,
        room_image,
        table_booking,
    )


def init_db(bind=None):
    load_models()
    Base.metadata.create_all(bind=bind or engine)
