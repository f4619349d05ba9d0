from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.constants import ISO_DATE_FORMAT, TIME_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def require_iso_date(value: Optional[str], field_name: str) -> date:
    """Like parse_iso_date but reports bad input as a ValidationError."""
    try:
        return parse_iso_date((value or "").strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a date in YYYY-MM-DD format")


def format_iso_date(value: Optional[date]) -> Optional[str]:
    if value is None:
        return None
    return value.strftime(ISO_DATE_FORMAT)


def coerce_date(value) -> Optional[date]:
    """Normalize DATE values coming back from the driver (date, datetime or text)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value)[:10])


def require_time(value: Optional[str], field_name: str) -> time:
    try:
        return datetime.strptime((value or "").strip(), TIME_FORMAT).time()
    except ValueError:
        raise ValidationError(f"{field_name} must be a time in HH:MM format")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
