"""Timezone-aware date/time helpers for the booking service."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from flask import current_app


def get_timezone() -> ZoneInfo:
    """Get the configured timezone."""
    tz_name = current_app.config.get('TIMEZONE', 'Africa/Johannesburg')
    return ZoneInfo(tz_name)


def get_today() -> date:
    """Get today's date in the configured timezone."""
    return datetime.now(get_timezone()).date()


def parse_request_date(value, allow_past: bool = True, field: str = 'date') -> date:
    """
    Parse a YYYY-MM-DD request value.

    Args:
        value: Raw value from the request
        allow_past: If False, dates before today are rejected
        field: Field name reported in the error

    Returns:
        Parsed date

    Raises:
        InvalidDate: Missing, malformed or (when not allowed) past date
    """
    from models.errors import InvalidDate
    from utils.messages import get_message
    from utils.validators import parse_date

    if value is None or value == '':
        raise InvalidDate(get_message('date_required'), field=field)

    parsed = parse_date(value)
    if parsed is None:
        raise InvalidDate(get_message('invalid_date_format'), field=field)

    if not allow_past and parsed < get_today():
        raise InvalidDate(get_message('date_in_past'), field=field)

    return parsed
