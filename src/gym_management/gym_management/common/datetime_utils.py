from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Optional

from ..core.enums import MembershipStanding
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def today() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it.
    """
    return date.today()


def validate_month(year: int, month: int) -> tuple[int, int]:
    if not 1 <= int(month) <= 12:
        raise ValidationError("Month must be between 1 and 12")
    if not 1 <= int(year) <= 9999:
        raise ValidationError("Invalid year")
    return int(year), int(month)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of the month, both inclusive."""
    year, month = validate_month(year, month)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move `delta` months forward (or backward), rolling the year over."""
    year, month = validate_month(year, month)
    index = year * 12 + (month - 1) + int(delta)
    return index // 12, index % 12 + 1


def next_month(year: int, month: int) -> tuple[int, int]:
    return shift_month(year, month, 1)


def previous_month(year: int, month: int) -> tuple[int, int]:
    return shift_month(year, month, -1)


def membership_standing(due_date: Optional[date], reference: Optional[date] = None) -> MembershipStanding:
    if due_date is None:
        return MembershipStanding.NO_DATE
    reference = reference or today()
    if due_date >= reference:
        return MembershipStanding.CURRENT
    return MembershipStanding.OVERDUE
