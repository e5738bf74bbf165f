"""
Cost Calculations

Derived cost metrics over charging and parking records:
- Cost per km
- Cost per day
- Charging vs parking breakdown
"""

from typing import Iterable

from chargelog.utils.form_helpers import safe_float
from chargelog.utils.time_utils import TimeWindow, days_between, resolve_as_of

from .constants import DEFAULT_PERIOD_DAYS, MONEY_DECIMALS
from .totals import filter_by_window, record_date, sort_by_date, total_fee


def cost_per_km(charging_records: Iterable, window, as_of=None) -> float:
    """
    Charging fee in the window divided by distance driven.

    The distance is the highest odometer reading across all records minus a
    reference reading. For MONTH and YEAR the reference is the highest
    reading of the previous period when that period has records; in every
    other case it is the lowest reading overall.

    Args:
        charging_records: All charging records
        window: TimeWindow or window name
        as_of: Reference date (default: today)

    Returns:
        Cost per km rounded to 2 decimals; 0 when the window has no records
        or the distance is not positive
    """
    records = list(charging_records)
    window = TimeWindow.parse(window)
    today = resolve_as_of(as_of)

    in_window = filter_by_window(records, window, today)
    if not in_window:
        return 0.0

    fee = sum(safe_float(r.cost) for r in in_window)

    mileages = [safe_float(r.mileage) for r in records]
    reference = min(mileages)

    previous = window.previous()
    if previous is not None:
        prior = filter_by_window(records, previous, today)
        if prior:
            reference = max(safe_float(r.mileage) for r in prior)

    distance = max(mileages) - reference
    if distance <= 0:
        return 0.0
    return round(fee / distance, MONEY_DECIMALS)


def _last_date(records):
    return record_date(sort_by_date(records)[-1])


def cost_per_day(charging_records: Iterable, parking_records: Iterable, window, as_of=None) -> str:
    """
    Combined charging and parking spend per day.

    MONTH/YEAR: fee of the window divided by the days between the last
    charging date of the previous period and the last charging date of the
    current one (1 day if the previous period has no charging records).
    ALL: every fee divided by the days from the first to the last charging
    record.

    Args:
        charging_records: All charging records
        parking_records: All parking records
        window: MONTH, YEAR or ALL ("total"); other windows give "0.00"
        as_of: Reference date (default: today)

    Returns:
        Amount per day formatted with two decimals; "0.00" when the day
        count is zero

    Examples:
        >>> cost_per_day([], [], 'month')
        '0.00'
    """
    charging = list(charging_records)
    parking = list(parking_records)
    if not charging and not parking:
        return f"{0:.{MONEY_DECIMALS}f}"

    window = TimeWindow.parse(window)
    today = resolve_as_of(as_of)

    fee = 0.0
    days = 0

    if window in (TimeWindow.MONTH, TimeWindow.YEAR):
        fee = total_fee(charging, window, today) + total_fee(parking, window, today)
        current = filter_by_window(charging, window, today)
        if current:
            prior = filter_by_window(charging, window.previous(), today)
            if prior:
                days = days_between(_last_date(prior), _last_date(current))
            else:
                days = DEFAULT_PERIOD_DAYS
    elif window is TimeWindow.ALL:
        fee = total_fee(charging, window) + total_fee(parking, window)
        if charging:
            ordered = sort_by_date(charging)
            days = days_between(record_date(ordered[0]), record_date(ordered[-1]))

    if days <= 0:
        return f"{0:.{MONEY_DECIMALS}f}"
    return f"{fee / days:.{MONEY_DECIMALS}f}"


def cost_breakdown(charging_records: Iterable, parking_records: Iterable, window, as_of=None) -> dict:
    """
    Charging vs parking spend for the cost composition chart.

    Returns:
        Dict with charging, parking and total fees for the window
    """
    today = resolve_as_of(as_of)
    charging = total_fee(charging_records, window, today)
    parking = total_fee(parking_records, window, today)
    return {
        'window': TimeWindow.parse(window).value,
        'charging': charging,
        'parking': parking,
        'total': round(charging + parking, MONEY_DECIMALS),
    }
