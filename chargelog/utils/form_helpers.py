"""Number coercion and entry-form rules shared by the API and the importers."""

import logging
import math
import re
from typing import Any, Dict, Optional

from chargelog.exceptions import RecordValidationError

logger = logging.getLogger(__name__)

# A number at the start of a cell such as "36元" or "1.2 元/度"
LEADING_NUMBER_PATTERN = re.compile(r'[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?')


def _leading_number(value) -> Optional[float]:
    if isinstance(value, str):
        match = LEADING_NUMBER_PATTERN.match(value.strip())
        if match:
            return float(match.group(0))
    return None


def safe_float(value: Any) -> float:
    """
    Parse a number leniently.

    Empty values and garbage become 0.0; thousands separators are stripped
    and trailing text after a leading number is ignored. NaN and infinities
    also become 0.0.

    Examples:
        >>> safe_float("1,234.5")
        1234.5
        >>> safe_float("36元")
        36.0
        >>> safe_float("n/a")
        0.0
    """
    if value is None or value == '':
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        value = value.replace(',', '').strip()
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        number = _leading_number(value) or 0.0
        logger.debug(f"Read number {value!r} as {number}")

    if not math.isfinite(number):
        logger.debug(f"Treating non-finite number as 0: {value!r}")
        return 0.0
    return number


def _is_given(value) -> bool:
    if value is None or value == '':
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError, OverflowError):
        number = _leading_number(value)
    return number is not None and math.isfinite(number)


def fill_missing_charge_field(amount=None, price=None, cost=None) -> Dict[str, Optional[float]]:
    """
    Derive the one missing value among amount, price and cost.

    Only acts when exactly one of the three is missing; otherwise the values
    are returned as given. Division by a zero price or amount yields 0.0.

    Returns:
        Dict with amount, price, cost and ``filled`` (name of the derived
        field or None)

    Examples:
        >>> fill_missing_charge_field(amount=30, price=1.2)['cost']
        36.0
    """
    given = {
        'amount': _is_given(amount),
        'price': _is_given(price),
        'cost': _is_given(cost),
    }
    result = {
        'amount': safe_float(amount) if given['amount'] else None,
        'price': safe_float(price) if given['price'] else None,
        'cost': safe_float(cost) if given['cost'] else None,
        'filled': None,
    }

    missing = [name for name, present in given.items() if not present]
    if len(missing) != 1:
        return result

    target = missing[0]
    if target == 'cost':
        result['cost'] = round(result['amount'] * result['price'], 2)
    elif target == 'price':
        result['price'] = round(result['cost'] / result['amount'], 2) if result['amount'] else 0.0
    else:
        result['amount'] = round(result['cost'] / result['price'], 2) if result['price'] else 0.0
    result['filled'] = target
    return result


def validate_charging_entry(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply the charging form rules.

    Mileage is rounded to a whole number and must be positive; at least one
    of amount, price or cost must be positive.

    Raises:
        RecordValidationError: If the entry is not acceptable
    """
    cleaned = {
        'mileage': float(round(safe_float(fields.get('mileage')))),
        'amount': safe_float(fields.get('amount')),
        'price': safe_float(fields.get('price')),
        'cost': safe_float(fields.get('cost')),
        'is_full': _parse_bool(fields.get('is_full')),
    }

    if cleaned['mileage'] <= 0:
        raise RecordValidationError(
            "Mileage must be greater than 0", field='mileage', value=fields.get('mileage')
        )
    if cleaned['amount'] <= 0 and cleaned['price'] <= 0 and cleaned['cost'] <= 0:
        raise RecordValidationError("At least one of amount, price or cost must be greater than 0")

    return cleaned


def validate_parking_entry(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply the parking form rules: cost must be positive.

    Raises:
        RecordValidationError: If the entry is not acceptable
    """
    cost = safe_float(fields.get('cost'))
    if cost <= 0:
        raise RecordValidationError("Cost must be greater than 0", field='cost', value=fields.get('cost'))
    return {'cost': cost}


def _parse_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', '是')
    return bool(value)
