"""
Input validation helper functions.
Provides validation for common input types.
"""

import re
from datetime import date, datetime, time

DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}$')
TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')


def validate_email(email: str) -> bool:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email or not isinstance(email, str):
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email.strip()))


def validate_phone(phone: str) -> bool:
    """
    Validate an international phone number.
    Accepts: +27 82 123 4567, 0821234567, +44 20 7946 0958

    Args:
        phone: Phone number to validate

    Returns:
        True if valid phone format
    """
    if not phone or not isinstance(phone, str):
        return False

    # Remove spaces and common separators
    cleaned = re.sub(r'[\s\-\(\)]', '', phone)

    return bool(re.match(r'^\+?[0-9]{7,15}$', cleaned))


def parse_date(date_str: str) -> date | None:
    """
    Parse a strict YYYY-MM-DD string.

    Args:
        date_str: Date string

    Returns:
        date or None when the string is not a valid calendar date
    """
    if not isinstance(date_str, str) or not DATE_PATTERN.match(date_str):
        return None
    try:
        return datetime.strptime(date_str, '%Y-%m-%d').date()
    except ValueError:
        return None


def parse_time(time_str: str) -> time | None:
    """
    Parse a strict 24-hour HH:MM string.

    Returns:
        time or None when the string is not HH:MM between 00:00 and 23:59
    """
    if not isinstance(time_str, str):
        return None
    match = TIME_PATTERN.match(time_str)
    if not match:
        return None
    return time(int(match.group(1)), int(match.group(2)))


def validate_positive_integer(value, field_name: str) -> tuple:
    """
    Validate a positive integer (accepts ints and digit strings, rejects bools).

    Args:
        value: Raw value from the request
        field_name: Field name used in the error message

    Returns:
        Tuple of (is_valid, parsed_value, error_message)
    """
    if isinstance(value, bool) or value is None:
        return False, None, f'{field_name} must be a positive integer'

    if isinstance(value, str):
        value = value.strip()
        if not value.isdigit():
            return False, None, f'{field_name} must be a positive integer'
        value = int(value)

    if not isinstance(value, int) or value < 1:
        return False, None, f'{field_name} must be a positive integer'

    return True, value, ''


def validate_group_size(value, max_size: int = 22) -> tuple:
    """
    Validate a group size in the range 1..max_size.

    Args:
        value: Raw group size
        max_size: Largest group a single booking may carry

    Returns:
        Tuple of (is_valid, parsed_value, error_message)
    """
    valid, size, _ = validate_positive_integer(value, 'group_size')
    if not valid or size > max_size:
        return False, None, f'Group size must be a whole number between 1 and {max_size}'
    return True, size, ''


def validate_integer_list(values, field_name: str, max_items: int = None) -> tuple:
    """
    Validate a non-empty list of distinct positive integers.

    Args:
        values: Raw list from the request
        field_name: Field name used in the error message
        max_items: Optional maximum list length

    Returns:
        Tuple of (is_valid, parsed_list, error_message)
    """
    if not isinstance(values, list) or not values:
        return False, None, f'{field_name} must be a non-empty list'

    if max_items is not None and len(values) > max_items:
        return False, None, f'{field_name} accepts at most {max_items} items'

    parsed = []
    for value in values:
        valid, number, err = validate_positive_integer(value, field_name)
        if not valid:
            return False, None, err
        if number in parsed:
            return False, None, f'{field_name} must not contain duplicates'
        parsed.append(number)

    return True, parsed, ''


def validate_password(password: str, min_length: int = 8) -> tuple:
    """
    Validate password strength.

    Args:
        password: Password to validate
        min_length: Minimum password length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password:
        return False, 'Password is required'

    if len(password) < min_length:
        return False, f'Password must be at least {min_length} characters'

    return True, ''


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text or not isinstance(text, str):
        return ''

    sanitized = text.strip()

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
