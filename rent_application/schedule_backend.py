"""
Rent Schedule Backend API
Parses and validates schedule requests, returns billing records and totals
"""

from flask import Blueprint, request, jsonify, current_app
from datetime import date, datetime
from typing import Any, Dict, List, Optional
import logging
from rent_application.rent_accounting.core.models import (
    OccupancyBasis,
    RateChangeTiming,
    SchedulePolicy,
    ScheduleRequest,
    summarize_schedule,
)
from rent_application.rent_accounting.schedule.generator import compute_schedule_for
from rent_application.rent_accounting.utils.money import to_decimal

# Create blueprint
schedule_bp = Blueprint('schedule', __name__, url_prefix='/api')

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    'base_rate',
    'lease_start_date',
    'window_start_date',
    'window_end_date',
    'billing_day',
    'change_frequency_months',
    'change_factor',
)


class ScheduleRequestError(ValueError):
    """Raised when a schedule payload cannot be turned into a ScheduleRequest"""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__('; '.join(errors))


def _parse_date(date_str: Any) -> Optional[date]:
    """Parse date string to date object"""
    if not date_str:
        return None
    if isinstance(date_str, datetime):
        return date_str.date()
    if isinstance(date_str, date):
        return date_str
    try:
        return datetime.strptime(str(date_str), '%Y-%m-%d').date()
    except (ValueError, TypeError):
        return None


def _parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        parsed = float(value)
    except (ValueError, TypeError, OverflowError):
        return None
    if not parsed.is_integer():
        return None
    return int(parsed)


def _parse_policy(data: Dict[str, Any], defaults: Dict[str, str], errors: List[str]) -> SchedulePolicy:
    timing_raw = data.get('rate_change_timing') or defaults.get('rate_change_timing', 'same_period')
    basis_raw = data.get('occupancy_basis') or defaults.get('occupancy_basis', 'current')

    timing = RateChangeTiming.SAME_PERIOD
    basis = OccupancyBasis.CURRENT
    try:
        timing = RateChangeTiming(str(timing_raw).lower())
    except ValueError:
        valid = ', '.join(t.value for t in RateChangeTiming)
        errors.append(f"Invalid rate_change_timing '{timing_raw}'. Must be one of: {valid}")
    try:
        basis = OccupancyBasis(str(basis_raw).lower())
    except ValueError:
        valid = ', '.join(b.value for b in OccupancyBasis)
        errors.append(f"Invalid occupancy_basis '{basis_raw}'. Must be one of: {valid}")
    return SchedulePolicy(rate_change_timing=timing, occupancy_basis=basis)


def parse_schedule_request(data: Optional[Dict[str, Any]],
                           defaults: Optional[Dict[str, str]] = None) -> ScheduleRequest:
    """
    Map a JSON payload to a ScheduleRequest
    All problems are collected and raised together as ScheduleRequestError

    Args:
        data: Request body
        defaults: Policy names used when the payload omits them
            ({'rate_change_timing': ..., 'occupancy_basis': ...})
    """
    if not isinstance(data, dict):
        raise ScheduleRequestError(['Request body must be a JSON object'])

    errors: List[str] = []
    missing = [name for name in REQUIRED_FIELDS if data.get(name) in (None, '')]
    if missing:
        raise ScheduleRequestError([f"Missing required field: {name}" for name in missing])

    base_rate = None
    try:
        base_rate = to_decimal(data['base_rate'])
        if not base_rate > 0:
            errors.append(f"base_rate must be greater than 0, got {data['base_rate']}")
    except ValueError:
        errors.append(f"Invalid base_rate value: {data['base_rate']}. Must be a valid number.")

    change_factor = None
    try:
        change_factor = to_decimal(data['change_factor'])
    except ValueError:
        errors.append(f"Invalid change_factor value: {data['change_factor']}. Must be a valid number.")

    dates = {}
    for name in ('lease_start_date', 'window_start_date', 'window_end_date'):
        dates[name] = _parse_date(data[name])
        if dates[name] is None:
            errors.append(f"Invalid {name}: {data[name]}. Expected YYYY-MM-DD.")

    window_start = dates['window_start_date']
    window_end = dates['window_end_date']
    if window_start and window_end and window_start > window_end:
        errors.append(f"window_start_date ({window_start}) must not be after window_end_date ({window_end})")

    billing_day = _parse_int(data['billing_day'])
    if billing_day is None or not 1 <= billing_day <= 31:
        errors.append(f"billing_day must be a whole number between 1 and 31, got {data['billing_day']}")

    change_frequency_months = _parse_int(data['change_frequency_months'])
    if change_frequency_months is None or change_frequency_months <= 0:
        errors.append(
            f"change_frequency_months must be a positive whole number, got {data['change_frequency_months']}"
        )

    policy = _parse_policy(data, defaults or {}, errors)

    if errors:
        raise ScheduleRequestError(errors)

    return ScheduleRequest(
        base_rate=base_rate,
        lease_start=dates['lease_start_date'],
        window_start=window_start,
        window_end=window_end,
        billing_day=billing_day,
        change_frequency_months=change_frequency_months,
        change_factor=change_factor,
        policy=policy,
    )


@schedule_bp.route('/rent_schedule', methods=['POST'])
def rent_schedule():
    """
    Billing schedule endpoint
    Returns the records for the window plus summary totals
    """
    try:
        data = request.get_json(silent=True)

        logger.info("📥 Received rent schedule request")
        if isinstance(data, dict):
            logger.info(f"   lease_start: {data.get('lease_start_date')}, "
                        f"window: {data.get('window_start_date')} → {data.get('window_end_date')}")

        schedule_request = parse_schedule_request(data, defaults={
            'rate_change_timing': current_app.config.get('DEFAULT_RATE_CHANGE_TIMING', 'same_period'),
            'occupancy_basis': current_app.config.get('DEFAULT_OCCUPANCY_BASIS', 'current'),
        })

        records = compute_schedule_for(schedule_request)
        summary = summarize_schedule(records)

        response = {
            'records': [record.to_dict() for record in records],
            'summary': summary.to_dict(),
            'window': {
                'from_date': schedule_request.window_start.isoformat(),
                'to_date': schedule_request.window_end.isoformat(),
            },
            'policy': schedule_request.policy.to_dict(),
        }

        logger.info(f"✅ Schedule complete: {summary.period_count} records, total {summary.total_amount}")
        return jsonify(response)

    except ScheduleRequestError as e:
        logger.warning(f"⚠️  Invalid rent schedule request: {e}")
        return jsonify({'error': 'Invalid schedule request', 'details': e.errors}), 400

    except Exception as e:
        logger.error(f"❌ Error in rent_schedule: {e}", exc_info=True)
        return jsonify({'error': str(e)}), 500
