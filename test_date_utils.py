#!/usr/bin/env python3
"""
Tests for the calendar and money helpers used by the schedule generator
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from rent_application.rent_accounting.utils.date_utils import (
    due_date_for,
    first_day_of_month,
    is_leap_year,
    iter_month_starts,
    last_day_of_month,
    months_between,
    next_month,
    normalize_date,
)
from rent_application.rent_accounting.utils.money import (
    apply_rate_change,
    is_change_permitted,
    prorate_days,
    prorate_remaining,
    round_currency,
    to_decimal,
)


@pytest.mark.parametrize("year, expected", [
    (2023, False),
    (2024, True),
    (1900, False),
    (2100, False),
    # Century years are never leap years under the billing rule
    (2000, False),
])
def test_is_leap_year(year, expected):
    assert is_leap_year(year) is expected


def test_last_day_of_month():
    assert [last_day_of_month(2023, m) for m in range(1, 13)] == [
        31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31,
    ]
    assert last_day_of_month(2024, 2) == 29
    assert last_day_of_month(2000, 2) == 28


def test_due_date_for_clamps_to_month_end():
    assert due_date_for(date(2023, 1, 1), 15) == date(2023, 1, 15)
    assert due_date_for(date(2023, 2, 1), 31) == date(2023, 2, 28)
    assert due_date_for(date(2024, 2, 1), 30) == date(2024, 2, 29)
    assert due_date_for(date(2023, 4, 1), 31) == date(2023, 4, 30)
    assert due_date_for(date(2000, 2, 1), 29) == date(2000, 2, 28)


def test_months_between_ignores_day_of_month():
    assert months_between(date(2023, 1, 31), date(2023, 2, 1)) == 1
    assert months_between(date(2023, 3, 1), date(2023, 3, 31)) == 0
    assert months_between(date(2022, 11, 15), date(2023, 2, 1)) == 3
    assert months_between(date(2023, 5, 1), date(2023, 2, 1)) == -3


def test_month_navigation():
    assert normalize_date(datetime(2023, 5, 17, 13, 45)) == date(2023, 5, 17)
    assert normalize_date(date(2023, 5, 17)) == date(2023, 5, 17)
    assert first_day_of_month(date(2023, 5, 17)) == date(2023, 5, 1)
    assert next_month(date(2023, 1, 31)) == date(2023, 2, 1)
    assert next_month(date(2023, 12, 5)) == date(2024, 1, 1)


def test_iter_month_starts():
    assert list(iter_month_starts(date(2023, 11, 20), date(2024, 2, 3))) == [
        date(2023, 11, 1), date(2023, 12, 1), date(2024, 1, 1), date(2024, 2, 1),
    ]
    assert list(iter_month_starts(date(2023, 3, 31), date(2023, 3, 31))) == [date(2023, 3, 1)]
    assert list(iter_month_starts(date(2023, 4, 1), date(2023, 3, 31))) == []


def test_to_decimal():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(100) == Decimal("100")
    assert to_decimal("46.67") == Decimal("46.67")
    assert to_decimal(Decimal("-0.25")) == Decimal("-0.25")

    for bad in ("abc", None, True, "NaN", float("inf")):
        with pytest.raises(ValueError):
            to_decimal(bad)


@pytest.mark.parametrize("value, expected", [
    (Decimal("46.666666"), Decimal("46.67")),
    (Decimal("0.125"), Decimal("0.13")),
    (Decimal("-0.125"), Decimal("-0.13")),
    (Decimal("2.675"), Decimal("2.68")),
    (Decimal("110"), Decimal("110.00")),
])
def test_round_currency_half_away_from_zero(value, expected):
    assert round_currency(value) == expected


def test_proration_arithmetic():
    assert round_currency(prorate_days(Decimal("100"), 14)) == Decimal("46.67")
    assert round_currency(prorate_days(Decimal("100"), 23)) == Decimal("76.67")
    assert round_currency(prorate_remaining(Decimal("100"), 5)) == Decimal("83.33")
    assert prorate_days(Decimal("300"), 10, period_days=60) == Decimal("50")


def test_apply_rate_change_compounds():
    rate = apply_rate_change(Decimal("100"), Decimal("0.1"))
    rate = apply_rate_change(rate, Decimal("0.1"))
    assert rate == Decimal("121")
    assert apply_rate_change(Decimal("100"), Decimal("-0.1")) == Decimal("90")


@pytest.mark.parametrize("factor, occupied, expected", [
    (Decimal("0.1"), True, True),
    (Decimal("0.1"), False, False),
    (Decimal("-0.1"), False, True),
    (Decimal("-0.1"), True, False),
    (Decimal("0"), True, False),
    (Decimal("0"), False, False),
])
def test_is_change_permitted(factor, occupied, expected):
    assert is_change_permitted(factor, occupied) is expected


def test_iter_month_starts_stops_at_last_representable_month():
    assert list(iter_month_starts(date(9999, 11, 1), date(9999, 12, 31))) == [
        date(9999, 11, 1), date(9999, 12, 1),
    ]


def test_round_currency_beyond_default_precision():
    # 27 integer digits plus cents does not fit the default 28-digit context
    assert round_currency(Decimal("101813919695093546798743524.755")) == Decimal(
        "101813919695093546798743524.76"
    )
    assert round_currency(Decimal("1.5E+40")).as_tuple().exponent == -2
    assert round_currency(Decimal("1.5E+40")) == Decimal("1.5E+40")
