"""
DayNotes Backend — Date Window Calculator
===========================================

What:  Pure functions returning inclusive (start, end) date pairs.
Who:   EarningsService (month listing and billing-cycle summary) and
       NoteService (month filter on GET /api/notes).

Windows:
    calendar_month_window(2024, 2)  → (2024-02-01, 2024-02-29)
    billing_cycle_window(2024, 3)   → (2024-03-21, 2024-04-20)
    billing_cycle_window(2024, 12)  → (2024-12-21, 2025-01-20)

Both ends are inclusive; callers filter with `>= start AND <= end`.
"""

import calendar
from datetime import date
from typing import Tuple

from daynotes.exceptions import ValidationError

# The payroll cycle runs from this day of month M ...
CYCLE_START_DAY = 21
# ... through this day of month M + 1.
CYCLE_END_DAY = 20


def _check_month(year: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationError(
            message=f"month must be between 1 and 12, got {month}",
            field="month",
        )
    if not date.min.year <= year < date.max.year:
        raise ValidationError(message=f"year {year} is out of range", field="year")


def calendar_month_window(year: int, month: int) -> Tuple[date, date]:
    """First and last day of the given calendar month."""
    _check_month(year, month)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def billing_cycle_window(year: int, month: int) -> Tuple[date, date]:
    """
    The 21st of `month` through the 20th of the following month.

    December rolls over into January of the next year.
    """
    _check_month(year, month)
    if month == 12:
        end_year, end_month = year + 1, 1
    else:
        end_year, end_month = year, month + 1
    return date(year, month, CYCLE_START_DAY), date(end_year, end_month, CYCLE_END_DAY)
