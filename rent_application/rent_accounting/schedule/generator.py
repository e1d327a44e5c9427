"""
Rent Schedule Generator
Builds the billing schedule for a unit over a reporting window

Two passes:
  - Opening charge: at most one prorated record dated at the lease start
  - Monthly walk: one record per month on the (clamped) billing day, with
    rate changes applied on the change cadence when occupancy permits
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Tuple, Union
import logging

from rent_application.rent_accounting.core.models import (
    BillingRecord,
    OccupancyBasis,
    RateChangeTiming,
    SchedulePolicy,
    ScheduleRequest,
)
from rent_application.rent_accounting.utils.date_utils import (
    due_date_for,
    first_day_of_month,
    is_date_in_window,
    iter_month_starts,
    last_day_of_month,
    months_between,
    normalize_date,
    same_month,
)
from rent_application.rent_accounting.utils.money import (
    Number,
    apply_rate_change,
    is_change_permitted,
    prorate_days,
    prorate_remaining,
    round_currency,
    to_decimal,
)

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class _WalkState:
    """Accumulator threaded through the monthly walk"""
    current_rate: Decimal
    # Occupancy of the last billed regular due date
    previous_occupied: Optional[bool] = None


def compute_schedule(
    base_rate: Number,
    lease_start: DateLike,
    window_start: DateLike,
    window_end: DateLike,
    billing_day: int,
    change_frequency_months: int,
    change_factor: Number,
    policy: Optional[SchedulePolicy] = None,
) -> List[BillingRecord]:
    """
    Billing schedule for one unit over [window_start, window_end]

    Args:
        base_rate: Starting rate per billing period
        lease_start: Date the tenant's lease starts
        window_start: First date of the reporting window
        window_end: Last date of the reporting window
        billing_day: Day of month the rent is due (clamped to the month length)
        change_frequency_months: Months between permitted rate changes,
            counted from the first day of window_start's month
        change_factor: Signed fraction, positive to increase, negative to decrease
        policy: Rate-change timing and occupancy gate (defaults to same period,
            current occupancy)
    Returns:
        Records in due-date order: one per billed month, plus the opening
        prorated record (if any) placed at the lease start
    """
    request = ScheduleRequest(
        base_rate=to_decimal(base_rate),
        lease_start=normalize_date(lease_start),
        window_start=normalize_date(window_start),
        window_end=normalize_date(window_end),
        billing_day=billing_day,
        change_frequency_months=change_frequency_months,
        change_factor=to_decimal(change_factor),
        policy=policy or SchedulePolicy(),
    )
    return compute_schedule_for(request)


def compute_schedule_for(request: ScheduleRequest) -> List[BillingRecord]:
    """Billing schedule for an already-built ScheduleRequest"""
    records = _walk_months(request)

    opening = calculate_opening_record(request)
    if opening:
        # Due dates before the lease start (vacant months) come first
        index = next(
            (i for i, record in enumerate(records) if record.due_date >= opening.due_date),
            len(records),
        )
        records.insert(index, opening)

    logger.info(
        f"📅 Rent schedule {request.window_start} → {request.window_end}: "
        f"{len(records)} records (opening charge: {'yes' if opening else 'no'})"
    )
    return records


# ============================================================================
# Opening (prorated) charge
# ============================================================================

def calculate_opening_record(request: ScheduleRequest) -> Optional[BillingRecord]:
    """
    Prorated record for the lease start, when the lease starts inside the window
    The record is dated on the lease start itself and is always occupied.
    """
    lease_start = request.lease_start
    if not is_date_in_window(lease_start, request.window_start, request.window_end):
        return None

    amount = calculate_prorated_amount(request.base_rate, lease_start, request.billing_day)
    if amount is None:
        return None

    logger.debug(f"Opening charge on {lease_start}: {amount} (billing day {request.billing_day})")
    return BillingRecord(
        occupied=True,
        amount=round_currency(amount),
        due_date=lease_start,
        is_prorated=True,
    )


def calculate_prorated_amount(rate: Decimal, lease_start: date, billing_day: int) -> Optional[Decimal]:
    """
    Partial-period charge for a lease starting off the billing day
    Returns None when the lease starts on the (clamped) due date.
    """
    lease_day = lease_start.day
    last_day = last_day_of_month(lease_start.year, lease_start.month)
    due_this_month = due_date_for(lease_start, billing_day)

    # Billing day runs past the end of a short month
    if billing_day > last_day and lease_day < last_day:
        return prorate_days(rate, last_day - lease_day)

    # Lease starts before this month's due date
    if lease_day < billing_day and lease_start < due_this_month:
        return prorate_days(rate, billing_day - lease_day)

    # Lease starts after this month's due date
    if lease_day > billing_day and lease_start > due_this_month:
        return prorate_remaining(rate, lease_day - billing_day)

    return None


# ============================================================================
# Monthly walk
# ============================================================================

def should_skip_due_date(due_date: date, lease_start: date, billing_day: int) -> bool:
    """
    True when the lease-start month's due date is already covered by the opening charge
    """
    if not same_month(due_date, lease_start):
        return False

    if lease_start > due_date:
        return True

    last_day = last_day_of_month(due_date.year, due_date.month)
    return billing_day > last_day and lease_start.day < last_day


def is_rate_change_due(months_since_base: int, change_frequency_months: int) -> bool:
    return months_since_base > 0 and months_since_base % change_frequency_months == 0


def _walk_months(request: ScheduleRequest) -> List[BillingRecord]:
    records: List[BillingRecord] = []
    state = _WalkState(current_rate=request.base_rate)
    reference_month = first_day_of_month(request.window_start)

    for month_start in iter_month_starts(request.window_start, request.window_end):
        due_date = due_date_for(month_start, request.billing_day)

        if not is_date_in_window(due_date, request.window_start, request.window_end):
            logger.debug(f"Skipping {due_date}: outside window")
            continue

        if should_skip_due_date(due_date, request.lease_start, request.billing_day):
            logger.debug(f"Skipping {due_date}: covered by opening charge on {request.lease_start}")
            continue

        state, record = _bill_period(state, request, months_between(reference_month, month_start), due_date)
        records.append(record)

    return records


def _bill_period(
    state: _WalkState,
    request: ScheduleRequest,
    months_since_base: int,
    due_date: date,
) -> Tuple[_WalkState, BillingRecord]:
    """
    Bill one due date
    Returns the next walk state and the record for this due date.
    """
    occupied = due_date >= request.lease_start
    policy = request.policy

    gate_occupied = occupied
    if policy.occupancy_basis == OccupancyBasis.PREVIOUS and state.previous_occupied is not None:
        gate_occupied = state.previous_occupied

    rate_before = state.current_rate
    new_rate = rate_before
    if is_rate_change_due(months_since_base, request.change_frequency_months):
        if is_change_permitted(request.change_factor, gate_occupied):
            new_rate = apply_rate_change(rate_before, request.change_factor)
            logger.debug(f"Rate change on {due_date}: {rate_before} → {new_rate}")
        else:
            logger.debug(
                f"Rate change on {due_date} blocked "
                f"(factor={request.change_factor}, occupied={gate_occupied})"
            )

    if policy.rate_change_timing == RateChangeTiming.NEXT_DUE_DATE:
        billed_rate = rate_before
    else:
        billed_rate = new_rate

    record = BillingRecord(
        occupied=occupied,
        amount=round_currency(billed_rate),
        due_date=due_date,
    )
    return _WalkState(current_rate=new_rate, previous_occupied=occupied), record
