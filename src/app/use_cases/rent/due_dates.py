"""Rent due date calculation

Pure functions of (payment_due_day, reference_date). Callers read "today"
once and pass it in.
"""

from calendar import monthrange
from datetime import date, datetime
from typing import Optional, Union


def add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the target month's length"""
    total = value.month - 1 + months
    year = value.year + total // 12
    month = total % 12 + 1
    day = min(value.day, monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def calculate_next_due_date(
    payment_due_day: int,
    reference_date: Optional[Union[date, datetime]] = None,
) -> date:
    """
    Next calendar date on which rent is due

    The due date falls in the reference month when the reference day has not
    passed payment_due_day, otherwise in the following month. Days that do not
    exist in that month (e.g. 31 in February) clamp to the month's last day.

    Args:
        payment_due_day: Preferred day of month (1-31, not validated)
        reference_date: Date to count from (default: today)

    Returns:
        Due date without time component
    """
    if reference_date is None:
        reference_date = date.today()
    elif isinstance(reference_date, datetime):
        reference_date = reference_date.date()

    year = reference_date.year
    month = reference_date.month

    if reference_date.day > payment_due_day:
        if month == 12:
            year += 1
            month = 1
        else:
            month += 1

    last_day = monthrange(year, month)[1]
    day = min(max(payment_due_day, 1), last_day)
    return date(year, month, day)
