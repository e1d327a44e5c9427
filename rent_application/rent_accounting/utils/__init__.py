"""
Utility functions for rent scheduling
"""

from .date_utils import (
    is_leap_year,
    last_day_of_month,
    due_date_for,
    months_between,
    iter_month_starts,
)

from .money import (
    PRORATION_DAYS,
    to_decimal,
    round_currency,
    prorate_days,
    prorate_remaining,
    apply_rate_change,
    is_change_permitted,
)

__all__ = [
    # Date utilities
    'is_leap_year',
    'last_day_of_month',
    'due_date_for',
    'months_between',
    'iter_month_starts',

    # Money utilities
    'PRORATION_DAYS',
    'to_decimal',
    'round_currency',
    'prorate_days',
    'prorate_remaining',
    'apply_rate_change',
    'is_change_permitted',
]
