"""Request parsing shared by the blueprints."""

from datetime import date

from flask import request

from chargelog.exceptions import RecordValidationError
from chargelog.utils.time_utils import TimeWindow, resolve_as_of


def as_of_arg() -> date:
    """
    Reference date from the optional ``as_of`` query parameter.

    Falls back to today in the configured timezone.

    Raises:
        RecordValidationError: If as_of is present but not YYYY-MM-DD
    """
    value = request.args.get('as_of')
    if not value:
        return resolve_as_of(None)
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise RecordValidationError("as_of must be YYYY-MM-DD", field='as_of', value=value) from e


def window_arg(default: str = TimeWindow.MONTH.value) -> TimeWindow:
    """Time window from the ``window`` query parameter."""
    return TimeWindow.parse(request.args.get('window', default))


def json_body() -> dict:
    """Request JSON as a dict; an empty or non-JSON body gives {}."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
