"""
UTC calendar-date helpers shared by grouping and aggregation.

Every function here works on plain ``datetime.date`` values obtained through
``normalize_date``; local timezones never take part.
"""
import math
from datetime import date, datetime, timedelta, timezone
from typing import Any

from trainlog.core.exceptions import InvalidRecordError


def normalize_date(value: Any, record_id: Any = None) -> date:
    """
    Reduce a record date to its UTC calendar date.

    Accepts ``date``, ``datetime`` (naive values are taken as UTC) and ISO-8601
    strings such as ``2025-12-01`` or ``2025-12-01T00:00:00.000Z``.

    Raises:
        InvalidRecordError: if the value is missing or cannot be parsed
    """
    if value is None:
        raise InvalidRecordError(f"Workout {record_id} has no date", record_id=record_id)

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return date(value.year, value.month, value.day)

    if isinstance(value, date):
        return date(value.year, value.month, value.day)

    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            if text.endswith(("Z", "z")):
                text = text[:-1] + "+00:00"
            return normalize_date(datetime.fromisoformat(text), record_id)
        except ValueError:
            raise InvalidRecordError(
                f"Workout {record_id} has an invalid date: {value!r}",
                record_id=record_id,
            ) from None

    raise InvalidRecordError(
        f"Workout {record_id} has an unsupported date type: {type(value).__name__}",
        record_id=record_id,
    )


def month_key(day: date) -> str:
    """``YYYY-MM`` key; sorts chronologically as a plain string."""
    return f"{day.year:04d}-{day.month:02d}"


def week_start(day: date) -> date:
    """Monday on or before ``day``."""
    # weekday(): Monday=0 ... Sunday=6
    return day - timedelta(days=day.weekday())


def sunday_week_start(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def iso_week_number(day: date) -> int:
    """
    ISO week-of-year using the nearest-Thursday method.

    Boundary dates may belong to the neighbouring year's numbering:
    2023-01-01 is week 52 (of 2022), 2024-12-30 is week 1 (of 2025).
    """
    thursday = day + timedelta(days=3 - day.weekday())
    year_start = date(thursday.year, 1, 1)
    return math.ceil(((thursday - year_start).days + 1) / 7)


def last_day_of_month(year: int, month: int) -> date:
    if month == 12:
        return date(year, 12, 31)
    return date(year, month + 1, 1) - timedelta(days=1)
