"""
Rent accounting core: billing schedule generation for leased units
"""

from .core.models import (
    BillingRecord,
    OccupancyBasis,
    RateChangeTiming,
    SchedulePolicy,
    ScheduleRequest,
    ScheduleSummary,
    summarize_schedule,
)
from .schedule.generator import compute_schedule, compute_schedule_for

__all__ = [
    'BillingRecord',
    'OccupancyBasis',
    'RateChangeTiming',
    'SchedulePolicy',
    'ScheduleRequest',
    'ScheduleSummary',
    'summarize_schedule',
    'compute_schedule',
    'compute_schedule_for',
]
