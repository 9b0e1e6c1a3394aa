from enum import Enum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import BookingEngineError, StoreError
from app.core.logging_config import get_logger
from app.db.procedures import PROCEDURES
from app.models.booking import Booking
from app.models.promo_code import PromoCode, PromoCodeUsage
from app.models.receipt import Receipt
from app.models.refund_request import RefundRequest
from app.models.room import Room
from app.models.room_availability import RoomAvailability
from app.models.room_image import RoomImage
from app.models.table_booking import TableBooking

logger = get_logger()

TABLES = {
    "rooms": Room,
    "room_availability": RoomAvailability,
    "room_images": RoomImage,
    "bookings": Booking,
    "table_bookings": TableBooking,
    "receipts": Receipt,
    "promo_codes": PromoCode,
    "promo_code_usage": PromoCodeUsage,
    "refund_requests": RefundRequest,
}

OPERATORS = {
    "eq": lambda col, v: col == v,
    "ne": lambda col, v: col != v,
    "lt": lambda col, v: col < v,
    "lte": lambda col, v: col <= v,
    "gt": lambda col, v: col > v,
    "gte": lambda col, v: col >= v,
    "in": lambda col, v: col.in_(v),
    "is_null": lambda col, v: col.is_(None) if v else col.isnot(None),
}


def _plain(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple, set)):
        return [_plain(v) for v in value]
    return value


class DataStore:
    """Generic relational data store over a SQLAlchemy session.

    Exposes the five verbs the booking engine relies on: ``query``,
    ``insert``, ``update``, ``delete`` and ``call``. Filters are dicts keyed
    by column name, optionally suffixed with an operator
    (``{"date__gte": start, "status__in": [...]}``).

    Every mutating verb commits on success. Database failures are rolled back
    and surfaced as ``StoreError``; nothing is retried here.
    """

    def __init__(self, db: Session):
        self.db = db

    # ---------------------------------------------------------------
    # HELPERS
    # ---------------------------------------------------------------
    def _model(self, table: str):
        try:
            return TABLES[table]
        except KeyError:
            raise StoreError(f"Unknown table '{table}'")

    def _criteria(self, model, filters: dict | None):
        criteria = []
        for key, value in (filters or {}).items():
            name, _, op = key.partition("__")
            column = getattr(model, name, None)
            if column is None or (op or "eq") not in OPERATORS:
                raise StoreError(f"Invalid filter '{key}' on {model.__tablename__}")
            criteria.append(OPERATORS[op or "eq"](column, _plain(value)))
        return criteria

    def _fail(self, action: str, table: str, exc: Exception):
        self.db.rollback()
        logger.error(f"STORE {action} {table} failed -> {exc}")
        raise StoreError(f"Data store {action} on '{table}' failed") from exc

    # ---------------------------------------------------------------
    # VERBS
    # ---------------------------------------------------------------
    def query(self, table: str, filters: dict | None = None, order_by=None, limit: int | None = None):
        model = self._model(table)
        try:
            q = self.db.query(model).filter(*self._criteria(model, filters))
            if order_by:
                desc = order_by.startswith("-")
                column = getattr(model, order_by.lstrip("-"))
                q = q.order_by(column.desc() if desc else column.asc())
            if limit:
                q = q.limit(limit)
            return q.all()
        except SQLAlchemyError as exc:
            self._fail("query", table, exc)

    def first(self, table: str, filters: dict | None = None):
        rows = self.query(table, filters, limit=1)
        return rows[0] if rows else None

    def insert(self, table: str, row: dict):
        model = self._model(table)
        try:
            obj = model(**{k: _plain(v) for k, v in row.items()})
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
            return obj
        except SQLAlchemyError as exc:
            self._fail("insert", table, exc)

    def update(self, table: str, filters: dict, patch: dict) -> int:
        model = self._model(table)
        try:
            count = (
                self.db.query(model)
                .filter(*self._criteria(model, filters))
                .update({k: _plain(v) for k, v in patch.items()}, synchronize_session="fetch")
            )
            self.db.commit()
            return count
        except SQLAlchemyError as exc:
            self._fail("update", table, exc)

    def delete(self, table: str, filters: dict) -> int:
        model = self._model(table)
        try:
            count = (
                self.db.query(model)
                .filter(*self._criteria(model, filters))
                .delete(synchronize_session="fetch")
            )
            self.db.commit()
            return count
        except SQLAlchemyError as exc:
            self._fail("delete", table, exc)

    def call(self, procedure: str, **args):
        """Run a server-side procedure inside a single transaction."""
        fn = PROCEDURES.get(procedure)
        if fn is None:
            raise StoreError(f"Unknown procedure '{procedure}'")
        try:
            result = fn(self.db, **{k: _plain(v) for k, v in args.items()})
            self.db.commit()
            return result
        except BookingEngineError:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self._fail("call", procedure, exc)
