"""Utility modules for ChargeLog."""

from .time_utils import (
    TimeWindow,
    days_between,
    extract_date,
    format_date,
    is_in_window,
    local_today,
    normalize_date,
    serial_to_date,
    to_date,
)
from .text_parser import parse_charging_text, parse_parking_text, present_fields
from .form_helpers import (
    fill_missing_charge_field,
    safe_float,
    validate_charging_entry,
    validate_parking_entry,
)

__all__ = [
    'TimeWindow',
    'days_between',
    'extract_date',
    'format_date',
    'is_in_window',
    'local_today',
    'normalize_date',
    'serial_to_date',
    'to_date',
    'parse_charging_text',
    'parse_parking_text',
    'present_fields',
    'fill_missing_charge_field',
    'safe_float',
    'validate_charging_entry',
    'validate_parking_entry',
]
