"""Time-of-day and calendar date helpers."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

import pandas as pd


def parse_time_string(value) -> Optional[time]:
    """
    Parse an HH:MM or HH:MM:SS string into a time.

    Returns None for empty or malformed values instead of raising.
    """
    if value is None:
        return None
    if isinstance(value, time):
        return value
    text = str(value).strip()
    if not text:
        return None
    parts = text.split(":")
    if len(parts) not in (2, 3):
        return None
    try:
        numbers = [int(p) for p in parts]
    except ValueError:
        return None
    try:
        return time(*numbers)
    except ValueError:
        return None


def parse_hour(value, default: int) -> int:
    """Hour component of an HH:MM string, or default."""
    parsed = parse_time_string(value)
    return parsed.hour if parsed is not None else default


def combine(day: date, value) -> Optional[datetime]:
    """Combine a calendar day with an HH:MM string."""
    parsed = parse_time_string(value)
    if parsed is None:
        return None
    return datetime.combine(day, parsed)


def to_date(value) -> Optional[date]:
    """
    Coerce a scheduled date (date, datetime, ISO string) to a date.

    Unparseable values give None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        ts = pd.Timestamp(str(value))
    except (ValueError, TypeError):
        return None
    if pd.isna(ts):
        return None
    return ts.date()


def fractional_hour(moment: datetime) -> float:
    return moment.hour + moment.minute / 60
