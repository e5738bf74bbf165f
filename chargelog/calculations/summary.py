"""Dashboard and overview payloads built from the individual metrics."""

from typing import Iterable

from chargelog.exceptions import RecordValidationError
from chargelog.utils.time_utils import TimeWindow, resolve_as_of

from .constants import (
    OVERVIEW_LABELS,
    OVERVIEW_TITLES,
    UNIT_CONSUMPTION,
    UNIT_COUNT,
    UNIT_CURRENCY,
    UNIT_DAYS,
    UNIT_DISTANCE,
    UNIT_ENERGY,
    UNIT_PER_DAY,
    UNIT_PER_KM,
)
from .consumption import electricity_per_100km
from .costs import cost_per_day, cost_per_km
from .totals import full_charge_count, period_mileage, total_days, total_electricity, total_fee


def dashboard_summary(charging_records: Iterable, parking_records: Iterable, window, as_of=None) -> dict:
    """
    Every dashboard card for one window.

    The consumption and total-days cards ignore the window, as they always
    describe the full history.
    """
    charging = list(charging_records)
    parking = list(parking_records)
    window = TimeWindow.parse(window)
    today = resolve_as_of(as_of)

    return {
        'window': window.value,
        'as_of': today.isoformat(),
        'cards': {
            'total_days': {'value': total_days(charging, parking, today), 'unit': UNIT_DAYS},
            'electricity_per_100km': {'value': electricity_per_100km(charging), 'unit': UNIT_CONSUMPTION},
            'total_charging_fee': {'value': total_fee(charging, window, today), 'unit': UNIT_CURRENCY},
            'total_parking_fee': {'value': total_fee(parking, window, today), 'unit': UNIT_CURRENCY},
            'full_charge_count': {'value': full_charge_count(charging, window, today), 'unit': UNIT_COUNT},
            'total_electricity': {'value': total_electricity(charging, window, today), 'unit': UNIT_ENERGY},
            'cost_per_km': {'value': cost_per_km(charging, window, today), 'unit': UNIT_PER_KM},
            'cost_per_day': {'value': cost_per_day(charging, parking, window, today), 'unit': UNIT_PER_DAY},
        },
    }


def period_overview(charging_records: Iterable, parking_records: Iterable, window, as_of=None) -> dict:
    """
    Title and the four overview cards (mileage, energy, charging fee, parking fee).

    Raises:
        RecordValidationError: For lastMonth and lastYear, which have no overview
    """
    window = TimeWindow.parse(window)
    if window.value not in OVERVIEW_TITLES:
        raise RecordValidationError(
            "Overview is available for month, year and total only", field='window', value=window.value
        )
    charging = list(charging_records)
    parking = list(parking_records)
    today = resolve_as_of(as_of)

    labels = OVERVIEW_LABELS[window.value]
    values = (
        (period_mileage(charging, window, today), UNIT_DISTANCE),
        (total_electricity(charging, window, today), UNIT_ENERGY),
        (total_fee(charging, window, today), UNIT_CURRENCY),
        (total_fee(parking, window, today), UNIT_CURRENCY),
    )

    return {
        'window': window.value,
        'title': OVERVIEW_TITLES[window.value],
        'cards': [
            {'label': label, 'value': value, 'unit': unit}
            for label, (value, unit) in zip(labels, values)
        ],
    }
