import os
from datetime import date

os.environ.setdefault("LOG_DIR", "logs")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.dependencies import get_db
from app.core.jwt import create_access_token
from app.core.security import hash_password
from app.db.session import init_db
from app.db.store import DataStore
from app.main import app
from app.models.admin import Admin
from app.models.enums import RoomCategory
from app.schemas.booking import GuestInfo, StayDetails
from app.services import bookings

CHECK_IN = date(2030, 3, 10)
CHECK_OUT = date(2030, 3, 13)


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def store(db):
    return DataStore(db)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    admin = Admin(name="Front Desk", email="desk@theroyalpavilion.in", password_hash=hash_password("s3cret!"))
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def admin_headers(admin):
    token = create_access_token({"sub": admin.email, "role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_room(store):
    def _make(**overrides):
        row = {
            "name": "Executive 101",
            "description": "King bed, city view",
            "price": 3000.0,
            "breakfast_price": 250.0,
            "capacity": 3,
            "category_type": RoomCategory.ROYAL_EXECUTIVE,
        }
        row.update(overrides)
        return store.insert("rooms", row)

    return _make


@pytest.fixture
def room(make_room):
    return make_room()


@pytest.fixture
def make_booking(store):
    def _make(room, check_in=CHECK_IN, check_out=CHECK_OUT, guests=2, **kwargs):
        guest = GuestInfo(
            customer_name=kwargs.pop("customer_name", "Asha Patil"),
            customer_email=kwargs.pop("customer_email", "asha@example.com"),
            customer_phone=kwargs.pop("customer_phone", "+91 9800000000"),
            customer_id=kwargs.pop("customer_id", None),
        )
        stay = StayDetails(
            check_in_date=check_in,
            check_out_date=check_out,
            guests=guests,
            adults=kwargs.pop("adults", guests),
            children=kwargs.pop("children", 0),
            with_breakfast=kwargs.pop("with_breakfast", False),
        )
        return bookings.create_hotel_booking(store, room.id, guest, stay, **kwargs)

    return _make
