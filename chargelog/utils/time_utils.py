"""
Date handling utilities for ChargeLog.

Provides:
- Time window classification (this month, last year, ...)
- Date extraction from free text (YYYY-MM-DD, YYYY/MM/DD, YYYY年MM月DD日)
- Normalization of spreadsheet cell values to canonical ISO dates
- Display formatting (YYYY年M月D日)

Wall-clock time is read in exactly one place, local_today(). Every other
function takes an explicit ``as_of`` date and only falls back to
local_today() when none is passed.
"""

import logging
import re
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as date_parser

from chargelog.config import Config
from chargelog.exceptions import ConfigurationError, ParseFailure

logger = logging.getLogger(__name__)


# Spreadsheet serial day 0 (the 1900 date system as used by Excel/LibreOffice)
SPREADSHEET_EPOCH = date(1899, 12, 30)

# Checked in this order; the first pattern yielding a valid calendar date wins
DATE_PATTERNS = [
    re.compile(r'(\d{4})-(\d{1,2})-(\d{1,2})'),
    re.compile(r'(\d{4})/(\d{1,2})/(\d{1,2})'),
    re.compile(r'(\d{4})年(\d{1,2})月(\d{1,2})日'),
]


class TimeWindow(str, Enum):
    """Named time ranges evaluated relative to an as-of date."""

    MONTH = 'month'
    YEAR = 'year'
    LAST_MONTH = 'lastMonth'
    LAST_YEAR = 'lastYear'
    ALL = 'all'

    @classmethod
    def parse(cls, value) -> 'TimeWindow':
        """
        Resolve a window name; unknown names mean "no filter".

        Examples:
            >>> TimeWindow.parse('lastMonth')
            <TimeWindow.LAST_MONTH: 'lastMonth'>
            >>> TimeWindow.parse('total')
            <TimeWindow.ALL: 'all'>
        """
        if isinstance(value, cls):
            return value
        key = str(value or '').strip().replace('_', '').lower()
        return _WINDOW_ALIASES.get(key, cls.ALL)

    def previous(self) -> Optional['TimeWindow']:
        """The period immediately before MONTH or YEAR."""
        if self is TimeWindow.MONTH:
            return TimeWindow.LAST_MONTH
        if self is TimeWindow.YEAR:
            return TimeWindow.LAST_YEAR
        return None


_WINDOW_ALIASES = {
    'month': TimeWindow.MONTH,
    'year': TimeWindow.YEAR,
    'lastmonth': TimeWindow.LAST_MONTH,
    'lastyear': TimeWindow.LAST_YEAR,
    'all': TimeWindow.ALL,
    'total': TimeWindow.ALL,
}


def local_today(now: Optional[datetime] = None) -> date:
    """
    Get the current calendar date in the configured timezone.

    Args:
        now: Optional aware datetime to convert instead of the wall clock

    Returns:
        date: Today's date in Config.TIMEZONE
    """
    try:
        tz = ZoneInfo(Config.TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown timezone: {Config.TIMEZONE}", config_key='TIMEZONE') from e

    if now is None:
        return datetime.now(tz).date()
    if now.tzinfo is None:
        return now.date()
    return now.astimezone(tz).date()


def resolve_as_of(as_of=None) -> date:
    """Turn an optional as-of value into a date, reading the clock only if needed."""
    if as_of is None:
        return local_today()
    if isinstance(as_of, datetime):
        return local_today(as_of)
    return as_of


def to_date(value) -> date:
    """
    Coerce a stored record date to a date object.

    Args:
        value: date, datetime or ISO "YYYY-MM-DD" string

    Returns:
        date

    Raises:
        ParseFailure: If the value is not a recognizable date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            pass
    raise ParseFailure("Not a calendar date", field='date', value=value)


def is_in_window(value, window, as_of=None) -> bool:
    """
    Check whether a date falls inside a time window.

    Membership compares calendar year/month with ``as_of``; LAST_MONTH wraps
    from January back to December of the previous year.

    Args:
        value: Record date (date, datetime or ISO string)
        window: TimeWindow or window name
        as_of: Reference date (default: today)

    Returns:
        True if the date is inside the window. ALL always returns True;
        unreadable dates are outside every other window.

    Examples:
        >>> is_in_window(date(2023, 12, 5), TimeWindow.LAST_MONTH, as_of=date(2024, 1, 10))
        True
    """
    window = TimeWindow.parse(window)
    if window is TimeWindow.ALL:
        return True

    try:
        record_date = to_date(value)
    except ParseFailure:
        return False

    today = resolve_as_of(as_of)

    if window is TimeWindow.MONTH:
        return record_date.year == today.year and record_date.month == today.month
    if window is TimeWindow.YEAR:
        return record_date.year == today.year
    if window is TimeWindow.LAST_MONTH:
        if today.month == 1:
            return record_date.year == today.year - 1 and record_date.month == 12
        return record_date.year == today.year and record_date.month == today.month - 1
    if window is TimeWindow.LAST_YEAR:
        return record_date.year == today.year - 1
    return True


def _match_date_text(text: str) -> Optional[date]:
    """Find the first valid date written in one of the supported textual forms."""
    for pattern in DATE_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        try:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError:
            logger.debug(f"Ignoring impossible date: {match.group(0)}")
            continue
    return None


def extract_date(text: Optional[str], as_of=None) -> str:
    """
    Extract a date from free text.

    Args:
        text: Text such as "2024年3月5日 充电30度"
        as_of: Date returned when nothing matches (default: today)

    Returns:
        Canonical "YYYY-MM-DD" string; never raises

    Examples:
        >>> extract_date("充电 2024/3/5 30度")
        '2024-03-05'
    """
    if text:
        found = _match_date_text(str(text))
        if found:
            return found.isoformat()
    return resolve_as_of(as_of).isoformat()


def serial_to_date(serial) -> date:
    """
    Decode a spreadsheet date serial number.

    Args:
        serial: Days since 1899-12-30; the fractional (time) part is ignored

    Returns:
        date

    Raises:
        ParseFailure: If the serial is outside the representable range

    Examples:
        >>> serial_to_date(45292)
        datetime.date(2024, 1, 1)
    """
    try:
        return SPREADSHEET_EPOCH + timedelta(days=int(serial))
    except (OverflowError, ValueError, TypeError) as e:
        raise ParseFailure("Spreadsheet serial out of range", field='date', value=serial) from e


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def normalize_date(value, as_of=None) -> str:
    """
    Normalize any imported date representation to "YYYY-MM-DD".

    Accepts native dates, spreadsheet serial numbers and text in the same
    forms extract_date recognizes. Text that matches none of those is given
    to dateutil; if that also fails the result is today.

    Args:
        value: Cell value from a workbook or CSV column
        as_of: Fallback date (default: today)

    Returns:
        Canonical "YYYY-MM-DD" string

    Examples:
        >>> normalize_date("2024年1月5日")
        '2024-01-05'
        >>> normalize_date(45292)
        '2024-01-01'
    """
    if value is None or value == '':
        return resolve_as_of(as_of).isoformat()

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    if _is_number(value):
        try:
            return serial_to_date(value).isoformat()
        except ParseFailure:
            logger.debug(f"Could not decode date serial: {value}")
            return resolve_as_of(as_of).isoformat()

    text = str(value).strip()
    found = _match_date_text(text)
    if found:
        return found.isoformat()

    try:
        return date_parser.parse(text).date().isoformat()
    except (ValueError, OverflowError, TypeError):
        logger.debug(f"Could not parse date: {text}")

    return resolve_as_of(as_of).isoformat()


def format_date(value) -> str:
    """
    Format a date for display as "YYYY年M月D日".

    Args:
        value: date, datetime, ISO string or spreadsheet serial number

    Returns:
        Display string, "" for empty input, or the input unchanged if it is
        not a recognizable date

    Examples:
        >>> format_date(date(2024, 3, 5))
        '2024年3月5日'
    """
    if value is None or value == '':
        return ''

    if _is_number(value):
        try:
            d = serial_to_date(value)
        except ParseFailure:
            return str(value)
    else:
        try:
            d = to_date(value)
        except ParseFailure:
            return value if isinstance(value, str) else str(value)

    return f"{d.year}年{d.month}月{d.day}日"


def days_between(start, end) -> int:
    """
    Whole days from start to end, never negative.

    Examples:
        >>> days_between(date(2024, 1, 1), date(2024, 1, 31))
        30
    """
    delta = (to_date(end) - to_date(start)).days
    return max(0, delta)
