from datetime import date, datetime, timedelta

from app.core.exceptions import ValidationError


def date_range(start: date, end: date):
    """Yield every date in [start, end)."""
    day = start
    while day < end:
        yield day
        day += timedelta(days=1)


def to_date(value) -> date:
    """Accept a date, datetime or ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            raise ValidationError(f"Invalid date format (YYYY-MM-DD): {value}")
    raise ValidationError(f"Invalid date: {value!r}")
