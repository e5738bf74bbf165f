"""
Parse free-form entry text into charging and parking fields.

Only fields whose unit pattern matches are returned, so a missing key means
"not mentioned" while 0.0 means "explicitly zero". The result pre-fills the
entry form; nothing here creates a record.
"""

import logging
import re
from typing import Any, Dict, List

from chargelog.utils.form_helpers import safe_float
from chargelog.utils.time_utils import extract_date

logger = logging.getLogger(__name__)


NUMBER = r'(\d+(?:\.\d+)?)'

# Tried in this order; each pattern fills one field
MILEAGE_PATTERN = re.compile(NUMBER + r'\s*(?:km|公里|千米)', re.IGNORECASE)
AMOUNT_PATTERN = re.compile(NUMBER + r'\s*(?:度|kwh)', re.IGNORECASE)
PRICE_PATTERN = re.compile(NUMBER + r'\s*(?:元/度|元每度|元每千瓦时)', re.IGNORECASE)
PRICE_LABEL_PATTERN = re.compile(r'单价\s*' + NUMBER, re.IGNORECASE)
COST_PATTERN = re.compile(NUMBER + r'\s*(?:元|费用)', re.IGNORECASE)
ANY_NUMBER_PATTERN = re.compile(NUMBER)

NOT_FULL_PHRASES = ('未充满', '没充满', '不满')

CHARGING_FIELDS = ('mileage', 'amount', 'price', 'cost')


def parse_charging_text(text: str, as_of=None) -> Dict[str, Any]:
    """
    Extract charging fields from a line of text.

    Args:
        text: e.g. "2024-03-05 里程12345公里 充电30度 单价1.2 共36元 未充满"
        as_of: Date used when the text has no date (default: today)

    Returns:
        Dict with ``date`` and ``is_full`` always present and ``mileage``,
        ``amount``, ``price``, ``cost`` present only when found.
        ``is_full`` is never inferred as True from text.
    """
    text = text or ''
    result: Dict[str, Any] = {
        'date': extract_date(text, as_of=as_of),
        'is_full': False,
    }

    match = MILEAGE_PATTERN.search(text)
    if match:
        result['mileage'] = safe_float(match.group(1))

    match = AMOUNT_PATTERN.search(text)
    if match:
        result['amount'] = safe_float(match.group(1))

    match = PRICE_PATTERN.search(text) or PRICE_LABEL_PATTERN.search(text)
    if match:
        result['price'] = safe_float(match.group(1))

    match = COST_PATTERN.search(text)
    if match:
        result['cost'] = safe_float(match.group(1))

    if any(phrase in text for phrase in NOT_FULL_PHRASES):
        result['is_full'] = False

    logger.debug(f"Parsed charging text into fields: {present_fields(result)}")
    return result


def parse_parking_text(text: str, as_of=None) -> Dict[str, Any]:
    """
    Extract parking fields from a line of text.

    The cost comes from a "<n>元" / "<n>费用" pattern; failing that, the first
    positive number anywhere in the text is used, even one that is part of
    the date.

    Returns:
        Dict with ``date`` and, when found, ``cost``
    """
    text = text or ''
    result: Dict[str, Any] = {'date': extract_date(text, as_of=as_of)}

    match = COST_PATTERN.search(text)
    if match:
        result['cost'] = safe_float(match.group(1))
        return result

    match = ANY_NUMBER_PATTERN.search(text)
    if match:
        number = safe_float(match.group(1))
        if number > 0:
            result['cost'] = number

    return result


def present_fields(parsed: Dict[str, Any]) -> List[str]:
    """Names of the numeric fields the parser actually found."""
    return [name for name in CHARGING_FIELDS if name in parsed]
