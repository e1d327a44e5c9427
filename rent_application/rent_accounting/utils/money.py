"""
Money utilities for rent calculations
Decimal coercion, cent rounding, proration and rate-change arithmetic
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")

# Proration always divides by a 30-day period, whatever the month length
PRORATION_DAYS = 30


def to_decimal(value: Number) -> Decimal:
    """
    Coerce a numeric input to Decimal
    Floats go through str() so 0.1 means one tenth, not its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid numeric value: {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"Invalid numeric value: {value!r}")
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value!r}")
    return result


def round_currency(value: Decimal) -> Decimal:
    """Round to cents, halves away from zero"""
    value = to_decimal(value)
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus two decimals
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def prorate_days(rate: Decimal, days: int, period_days: int = PRORATION_DAYS) -> Decimal:
    """
    Charge for a number of days out of a fixed-length period
    Args:
        rate: Full-period rate
        days: Days being charged
        period_days: Period length used as denominator
    Returns:
        Unrounded prorated amount
    """
    return rate * days / period_days


def prorate_remaining(rate: Decimal, days_after_due: int, period_days: int = PRORATION_DAYS) -> Decimal:
    """
    Charge for what is left of a period that started days_after_due days ago
    rate * (1 - days_after_due / period_days)
    """
    return rate * (1 - Decimal(days_after_due) / period_days)


def apply_rate_change(rate: Decimal, change_factor: Decimal) -> Decimal:
    """Compound one change onto the running rate at full precision"""
    return rate * (1 + change_factor)


def is_change_permitted(change_factor: Decimal, occupied: bool) -> bool:
    """
    Increases apply only to occupied units, decreases only to vacant ones
    A zero factor is never applied.
    """
    if change_factor > 0:
        return occupied
    if change_factor < 0:
        return not occupied
    return False
