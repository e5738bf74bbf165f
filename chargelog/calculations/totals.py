"""
Windowed Totals

Sums and counts over charging and parking records for one time window:
- Total fee (charging or parking)
- Total energy charged
- Number of full charges
- Mileage driven in a window
- Days since the first record
"""

from datetime import date
from typing import Iterable, List

from chargelog.exceptions import ParseFailure
from chargelog.utils.form_helpers import safe_float
from chargelog.utils.time_utils import (
    TimeWindow,
    days_between,
    is_in_window,
    resolve_as_of,
    to_date,
)

from .constants import ENERGY_DECIMALS, MONEY_DECIMALS


def record_date(record) -> date:
    """Date of a record; unreadable dates sort before everything else."""
    try:
        return to_date(record.date)
    except ParseFailure:
        return date.min


def sort_by_date(records: Iterable) -> List:
    """Return a new list ordered by date, oldest first (stable for equal dates)."""
    return sorted(records, key=record_date)


def filter_by_window(records: Iterable, window, as_of=None) -> List:
    """
    Select the records inside a time window.

    Args:
        records: Charging or parking records
        window: TimeWindow or window name; ALL bypasses filtering
        as_of: Reference date (default: today)

    Returns:
        New list of matching records in their original order
    """
    window = TimeWindow.parse(window)
    if window is TimeWindow.ALL:
        return list(records)

    today = resolve_as_of(as_of)
    return [r for r in records if is_in_window(r.date, window, as_of=today)]


def total_fee(records: Iterable, window, as_of=None) -> float:
    """
    Sum of ``cost`` over the window. Works for charging and parking records.

    Examples:
        >>> total_fee([], 'all')
        0.0
    """
    filtered = filter_by_window(records, window, as_of)
    return round(sum(safe_float(r.cost) for r in filtered), MONEY_DECIMALS)


def total_electricity(records: Iterable, window, as_of=None) -> float:
    """Sum of energy ``amount`` charged in the window."""
    filtered = filter_by_window(records, window, as_of)
    return round(sum(safe_float(r.amount) for r in filtered), ENERGY_DECIMALS)


def full_charge_count(records: Iterable, window, as_of=None) -> int:
    """Number of full-charge checkpoints in the window."""
    return sum(1 for r in filter_by_window(records, window, as_of) if r.is_full)


def total_mileage(records: Iterable, window, as_of=None) -> float:
    """
    Odometer difference between the newest and oldest record in the window.

    Returns 0 with fewer than two records. The result is not clamped, so
    out-of-order odometer readings give a negative value.
    """
    filtered = filter_by_window(records, window, as_of)
    if len(filtered) < 2:
        return 0

    ordered = sort_by_date(filtered)
    return safe_float(ordered[-1].mileage) - safe_float(ordered[0].mileage)


def total_days(charging_records: Iterable, parking_records: Iterable, as_of=None) -> int:
    """
    Whole days from the earliest record of either kind until today.

    Returns:
        Days, floored and never negative; 0 when there are no records
    """
    dates = [record_date(r) for r in charging_records]
    dates.extend(record_date(r) for r in parking_records)
    dates = [d for d in dates if d != date.min]
    if not dates:
        return 0

    return days_between(min(dates), resolve_as_of(as_of))


def period_mileage(records: Iterable, window, as_of=None) -> float:
    """
    Distance driven in the current month or year, for the overview card.

    For MONTH and YEAR this is the highest odometer reading of the current
    period minus the highest of the previous period (0 if either period has
    no records). For ALL it is the overall highest minus lowest reading.
    """
    records = list(records)
    window = TimeWindow.parse(window)
    today = resolve_as_of(as_of)

    if window is TimeWindow.ALL:
        if not records:
            return 0
        mileages = [safe_float(r.mileage) for r in records]
        return max(mileages) - min(mileages)

    previous = window.previous()
    if previous is None:
        return 0

    current = filter_by_window(records, window, today)
    prior = filter_by_window(records, previous, today)
    if not current or not prior:
        return 0

    return max(safe_float(r.mileage) for r in current) - max(safe_float(r.mileage) for r in prior)
