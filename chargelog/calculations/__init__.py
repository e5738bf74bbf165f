"""
ChargeLog Calculation Module

Windowed totals and derived metrics over charging and parking records.
Every function takes plain lists of records and an optional ``as_of`` date,
and never modifies its input.

Usage:
    from chargelog.calculations import electricity_per_100km, cost_per_day
    from chargelog.calculations.constants import MONEY_DECIMALS
"""

# Consumption between full-charge checkpoints
from .consumption import (
    annotate_consumption,
    consumption_series,
    electricity_per_100km,
)

# Windowed totals
from .totals import (
    filter_by_window,
    full_charge_count,
    period_mileage,
    sort_by_date,
    total_days,
    total_electricity,
    total_fee,
    total_mileage,
)

# Cost metrics
from .costs import (
    cost_breakdown,
    cost_per_day,
    cost_per_km,
)

# Dashboard payloads
from .summary import (
    dashboard_summary,
    period_overview,
)

__all__ = [
    # Consumption
    "electricity_per_100km",
    "consumption_series",
    "annotate_consumption",
    # Totals
    "filter_by_window",
    "sort_by_date",
    "total_fee",
    "total_electricity",
    "full_charge_count",
    "total_mileage",
    "total_days",
    "period_mileage",
    # Costs
    "cost_per_km",
    "cost_per_day",
    "cost_breakdown",
    # Summary
    "dashboard_summary",
    "period_overview",
]
