"""Half-open date-range overlap and calendar-day normalization."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta

from dateutil.parser import isoparse

from lodging.domain.models import Reservation

ONE_DAY = timedelta(days=1)


def overlaps(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Return True if [start_a, end_a) and [start_b, end_b) share at least one day.

    A range ending on day X and another starting on day X do not overlap,
    so a checkout and a check-in can happen on the same day.
    """
    return start_a < end_b and end_a > start_b


def find_conflicts(
    new_start: date,
    new_end: date,
    existing: Iterable[Reservation],
) -> list[Reservation]:
    """Return the reservations that overlap the given range."""
    return [
        reservation
        for reservation in existing
        if overlaps(reservation.start_date, reservation.end_date, new_start, new_end)
    ]


def to_calendar_day(value: date | datetime | str) -> date:
    """Drop any time-of-day component, returning the calendar date.

    Strings are read as ISO 8601 (``2025-08-15`` or ``2025-08-15T10:30:00Z``).
    The date is taken as written; no timezone conversion happens.
    """
    if isinstance(value, str):
        value = isoparse(value)
    if isinstance(value, datetime):
        return value.date()
    return value
