"""
Consumption Calculations

Energy used per 100 km, measured between full-charge checkpoints.

A full charge resets the battery to a known state, so the energy put back
in up to and including the next full charge is exactly what was consumed
over the distance between the two odometer readings. The interval after
checkpoint k owns every record dated in (date(k), date(k+1)].
"""

from typing import Iterable, List, Optional

from chargelog.utils.form_helpers import safe_float
from chargelog.utils.time_utils import format_date

from .constants import CONSUMPTION_CHART_POINTS, DISTANCE_SCALE, ENERGY_DECIMALS
from .totals import record_date, sort_by_date


def _interval_energy(ordered: List, previous_full, current_full) -> float:
    """Energy of every record dated after previous_full up to current_full."""
    start = record_date(previous_full)
    end = record_date(current_full)
    return sum(safe_float(r.amount) for r in ordered if start < record_date(r) <= end)


def _interval_consumption(ordered: List, previous_full, current_full) -> Optional[float]:
    """Unrounded consumption per 100 km, or None when the distance is not positive."""
    distance = safe_float(current_full.mileage) - safe_float(previous_full.mileage)
    if distance <= 0:
        return None
    return _interval_energy(ordered, previous_full, current_full) / distance * DISTANCE_SCALE


def electricity_per_100km(records: Iterable) -> float:
    """
    Consumption over the two most recent full-charge checkpoints.

    Args:
        records: Charging records in any order

    Returns:
        Energy per 100 km rounded to 2 decimals; 0 with fewer than two
        checkpoints or a non-positive distance between them

    Examples:
        Full at 100 km, 10 kWh in between, full at 400 km with 20 kWh:
        (10 + 20) / (400 - 100) * 100 = 10.0
    """
    records = list(records)
    if len(records) < 2:
        return 0.0

    ordered = sort_by_date(records)
    checkpoints = [r for r in ordered if r.is_full]
    if len(checkpoints) < 2:
        return 0.0

    consumption = _interval_consumption(ordered, checkpoints[-2], checkpoints[-1])
    if consumption is None:
        return 0.0
    return round(consumption, ENERGY_DECIMALS)


def consumption_series(records: Iterable, limit: Optional[int] = CONSUMPTION_CHART_POINTS) -> List[dict]:
    """
    Consumption for every pair of consecutive checkpoints, for the trend chart.

    Intervals with no distance or no energy are left out.

    Args:
        records: Charging records in any order
        limit: Keep only the most recent N intervals (None keeps all)

    Returns:
        List of dicts with date (ISO), label (display date) and value,
        oldest first
    """
    ordered = sort_by_date(records)
    checkpoints = [r for r in ordered if r.is_full]

    series = []
    for previous_full, current_full in zip(checkpoints, checkpoints[1:]):
        energy = _interval_energy(ordered, previous_full, current_full)
        consumption = _interval_consumption(ordered, previous_full, current_full)
        if consumption is None or energy <= 0:
            continue
        closed_on = record_date(current_full)
        series.append({
            'date': closed_on.isoformat(),
            'label': format_date(closed_on),
            'value': round(consumption, ENERGY_DECIMALS),
        })

    if limit is not None and limit >= 0 and len(series) > limit:
        series = series[len(series) - limit:]
    return series


def annotate_consumption(records: Iterable) -> List[dict]:
    """
    Record rows for the charging table, newest first.

    Each full charge that closes an interval carries that interval's
    consumption in ``electricity``; every other row carries None.
    """
    ordered = sort_by_date(records)
    checkpoints = [r for r in ordered if r.is_full]

    closing = {}
    for previous_full, current_full in zip(checkpoints, checkpoints[1:]):
        consumption = _interval_consumption(ordered, previous_full, current_full)
        if consumption is not None and consumption > 0:
            closing[id(current_full)] = round(consumption, ENERGY_DECIMALS)

    rows = []
    for record in reversed(ordered):
        row = record.to_dict()
        row['electricity'] = closing.get(id(record))
        rows.append(row)
    return rows
