"""
Date utilities for rent scheduling
Month arithmetic, due-date clamping and window checks
"""

from datetime import date, datetime
from dateutil.relativedelta import relativedelta
from typing import Iterator, Union

# Months with 31 days (1-based)
_LONG_MONTHS = (1, 3, 5, 7, 8, 10, 12)


def is_leap_year(year: int) -> bool:
    """
    Leap year check used for billing
    Divisible by 4 and not by 100; the 400-year exception is not applied,
    so 2000 and 2400 count as common years.
    """
    return year % 4 == 0 and year % 100 != 0


def last_day_of_month(year: int, month: int) -> int:
    """
    Number of days in a month
    Args:
        year: Calendar year
        month: 1-12
    Returns:
        28-31
    """
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in _LONG_MONTHS:
        return 31
    return 30


def normalize_date(value: Union[date, datetime]) -> date:
    """Drop the time of day from a datetime; dates pass through"""
    if isinstance(value, datetime):
        return value.date()
    return value


def first_day_of_month(d: date) -> date:
    return normalize_date(d).replace(day=1)


def next_month(d: date) -> date:
    """First day of the month after d"""
    return first_day_of_month(d) + relativedelta(months=1)


def due_date_for(month_start: date, billing_day: int) -> date:
    """
    Due date for the month containing month_start
    billing_day is clamped to the month's last day (31 -> 30, Feb -> 28/29)
    """
    last_day = last_day_of_month(month_start.year, month_start.month)
    return date(month_start.year, month_start.month, min(billing_day, last_day))


def months_between(start: date, end: date) -> int:
    """Whole calendar months from start to end, ignoring the day of month"""
    return (end.year - start.year) * 12 + (end.month - start.month)


def is_date_in_window(d: date, window_start: date, window_end: date) -> bool:
    return window_start <= d <= window_end


def same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month


def iter_month_starts(start: date, end: date) -> Iterator[date]:
    """
    Yield the first day of every month from start's month through end's month
    Nothing is yielded when start is after end.
    """
    if normalize_date(start) > normalize_date(end):
        return
    current = first_day_of_month(start)
    last = first_day_of_month(end)
    while True:
        yield current
        # Stop on the last month without stepping past it (9999-12 has no successor)
        if current >= last:
            return
        current = next_month(current)
