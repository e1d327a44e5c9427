"""
Data models for the rent schedule calculator
Inputs, policy switches and the billing records produced per due date
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import List, Optional


class RateChangeTiming(str, Enum):
    """When a rate change found on a due cycle reaches the billed amount"""
    SAME_PERIOD = "same_period"      # billed on the due date that triggered it
    NEXT_DUE_DATE = "next_due_date"  # billed from the following due date


class OccupancyBasis(str, Enum):
    """Which occupancy state gates a rate change"""
    CURRENT = "current"    # occupancy on the due date being billed
    PREVIOUS = "previous"  # occupancy on the previous billed due date


@dataclass(frozen=True)
class SchedulePolicy:
    """Policy switches for the rate-change walk (defaults: same period, current occupancy)"""
    rate_change_timing: RateChangeTiming = RateChangeTiming.SAME_PERIOD
    occupancy_basis: OccupancyBasis = OccupancyBasis.CURRENT

    def to_dict(self) -> dict:
        return {
            'rate_change_timing': self.rate_change_timing.value,
            'occupancy_basis': self.occupancy_basis.value,
        }


@dataclass
class ScheduleRequest:
    """Complete input for one unit's billing schedule"""

    base_rate: Decimal

    # Dates
    lease_start: date
    window_start: date
    window_end: date

    # Nominal day of month, clamped to the month's last day
    billing_day: int

    # Rate changes
    change_frequency_months: int
    change_factor: Decimal  # signed fraction: 0.1 = +10%, -0.1 = -10%

    policy: SchedulePolicy = field(default_factory=SchedulePolicy)


@dataclass(frozen=True)
class BillingRecord:
    """Single row of the billing schedule"""
    occupied: bool
    amount: Decimal
    due_date: date

    # Opening (partial period) charge posted on the lease start date
    is_prorated: bool = False

    @property
    def vacant(self) -> bool:
        return not self.occupied

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            'occupied': self.occupied,
            'vacancy': self.vacant,
            'amount': f"{self.amount:.2f}",
            'due_date': self.due_date.isoformat(),
            'is_prorated': self.is_prorated,
        }


@dataclass
class ScheduleSummary:
    """Totals for one unit's schedule"""
    period_count: int = 0
    occupied_periods: int = 0
    vacant_periods: int = 0
    total_amount: Decimal = Decimal("0.00")
    opening_amount: Optional[Decimal] = None
    final_rate: Optional[Decimal] = None

    def to_dict(self) -> dict:
        return {
            'period_count': self.period_count,
            'occupied_periods': self.occupied_periods,
            'vacant_periods': self.vacant_periods,
            'total_amount': f"{self.total_amount:.2f}",
            'opening_amount': f"{self.opening_amount:.2f}" if self.opening_amount is not None else None,
            'final_rate': f"{self.final_rate:.2f}" if self.final_rate is not None else None,
        }


def summarize_schedule(records: List[BillingRecord]) -> ScheduleSummary:
    """
    Roll a schedule up into counts and totals
    final_rate is the amount of the last regular (non-prorated) record
    """
    summary = ScheduleSummary()
    for record in records:
        summary.period_count += 1
        if record.occupied:
            summary.occupied_periods += 1
        else:
            summary.vacant_periods += 1
        summary.total_amount += record.amount
        if record.is_prorated:
            summary.opening_amount = record.amount
        else:
            summary.final_rate = record.amount
    return summary
