"""
Booking creation and queries.

create_booking is the only writer of new bookings. A (driver, date) slot is
held by at most one pending or confirmed booking; the guard is the partial
unique index idx_bookings_driver_date_active, so two requests that both pass
the availability pre-check cannot both commit.
"""

import logging
import sqlite3

from flask import current_app

from database import get_db
from models.availability import is_driver_available
from models.driver import get_driver_by_id
from models.driver_unavailability import is_driver_blocked
from models.errors import (
    BookingError, DriverAlreadyBooked, DriverNotFound, DriverUnavailable,
    InvalidCustomer, InvalidDate, InvalidGroupSize, InvalidShortlist,
    InvalidTime, TourNotFound, ValidationError,
)
from models.tour import calculate_price, check_start_time, get_tour_by_id
from utils.datetime_helpers import get_today
from utils.messages import get_message
from utils.validators import (
    parse_date, parse_time, sanitize_input, validate_email, validate_group_size,
    validate_integer_list, validate_phone, validate_positive_integer,
)

logger = logging.getLogger(__name__)

BOOKING_SELECT = '''
    SELECT b.*, t.name AS tour_name, t.slug AS tour_slug, d.name AS driver_name
    FROM bookings b
    JOIN tours t ON b.tour_id = t.id
    LEFT JOIN drivers d ON b.driver_id = d.id
'''


# =============================================================================
# VALIDATION
# =============================================================================

def validate_booking_request(date, group_size, customer: dict, driver_ids,
                             booking_time: str = None) -> dict:
    """
    Check every booking precondition that needs no database lookup.

    All problems are collected and raised together.

    Args:
        date: Tour date (YYYY-MM-DD)
        group_size: Number of guests
        customer: dict with name, email and optional phone
        driver_ids: A driver ID or a shortlist of driver IDs
        booking_time: Optional start time (HH:MM, 24-hour)

    Returns:
        dict with the cleaned date, booking_time (None when not given),
        group_size, customer and driver_ids

    Raises:
        ValidationError subclass (InvalidDate, InvalidGroupSize,
        InvalidCustomer, InvalidShortlist, InvalidTime) carrying all field errors
    """
    errors = []
    cleaned = {}
    field_error = ValidationError.field_error

    day = parse_date(date)
    if day is None:
        errors.append(field_error(InvalidDate.kind, 'date', get_message('invalid_date_format')))
    elif day < get_today():
        errors.append(field_error(InvalidDate.kind, 'date', get_message('date_in_past')))
    else:
        cleaned['date'] = day.isoformat()

    cleaned['booking_time'] = None
    if booking_time not in (None, ''):
        start = parse_time(booking_time)
        if start is None:
            errors.append(field_error(InvalidTime.kind, 'booking_time', get_message('invalid_time_format')))
        else:
            cleaned['booking_time'] = start.strftime('%H:%M')

    max_size = current_app.config['MAX_GROUP_SIZE']
    valid, size, _ = validate_group_size(group_size, max_size)
    if valid:
        cleaned['group_size'] = size
    else:
        errors.append(field_error(InvalidGroupSize.kind, 'group_size',
                                  get_message('invalid_group_size', max_size=max_size)))

    customer = customer or {}
    name = sanitize_input(customer.get('name'), 120)
    email = sanitize_input(customer.get('email'), 254).lower()
    phone = sanitize_input(customer.get('phone'), 30)
    if len(name) < 2:
        errors.append(field_error(InvalidCustomer.kind, 'customer_name', get_message('invalid_customer_name')))
    if not validate_email(email):
        errors.append(field_error(InvalidCustomer.kind, 'customer_email', get_message('invalid_customer_email')))
    if phone and not validate_phone(phone):
        errors.append(field_error(InvalidCustomer.kind, 'customer_phone', get_message('invalid_customer_phone')))
    cleaned['customer'] = {'name': name, 'email': email, 'phone': phone or None}

    if not isinstance(driver_ids, list):
        driver_ids = [driver_ids] if driver_ids is not None else []
    max_drivers = current_app.config['MAX_SHORTLIST']
    valid, shortlist, _ = validate_integer_list(driver_ids, 'driver_ids', max_drivers)
    if valid:
        cleaned['driver_ids'] = shortlist
    else:
        errors.append(field_error(InvalidShortlist.kind, 'driver_ids',
                                  get_message('invalid_shortlist', max_drivers=max_drivers)))

    if errors:
        raise ValidationError.collect(errors)

    return cleaned


# =============================================================================
# CREATION
# =============================================================================

def create_booking(tour_id, driver_ids, date, group_size, customer: dict,
                   user_id: int = None, special_requests: str = None,
                   booking_time: str = None) -> tuple:
    """
    Create a pending booking.

    driver_ids may be a single driver ID or a shortlist of up to
    MAX_SHORTLIST drivers. Candidates are tried in order and the first one
    whose slot commits wins.

    Args:
        tour_id: Tour ID
        driver_ids: Driver ID or list of driver IDs in preference order
        date: Tour date (YYYY-MM-DD, today or later)
        group_size: Number of guests
        customer: dict with name, email and optional phone
        user_id: Member account making the booking, if any
        special_requests: Optional free text
        booking_time: Optional start time (HH:MM); the tour must end by
            BOOKING_CUTOFF_HOUR

    Returns:
        Tuple of (booking dict, rejected candidates list)

    Raises:
        ValidationError: Bad input (nothing is written)
        TourNotFound: Tour missing or inactive
        InvalidTime: The tour would end after the daily cutoff
        DriverNotFound, DriverUnavailable, DriverAlreadyBooked: raised for
            the last candidate when no candidate could be booked
    """
    cleaned = validate_booking_request(date, group_size, customer, driver_ids, booking_time)

    valid, tour_id, _ = validate_positive_integer(tour_id, 'tour_id')
    tour = get_tour_by_id(tour_id, active_only=True) if valid else None
    if not tour:
        raise TourNotFound(get_message('tour_not_found'))

    if cleaned['booking_time']:
        check_start_time(tour, parse_time(cleaned['booking_time']))

    price = calculate_price(tour_id, cleaned['group_size'])
    special_requests = sanitize_input(special_requests, 1000) or None

    rejected = []
    last_error = None
    for driver_id in cleaned['driver_ids']:
        try:
            booking_id = _commit_booking(tour_id, driver_id, cleaned, price, user_id, special_requests)
        except (DriverNotFound, DriverUnavailable, DriverAlreadyBooked) as e:
            rejected.append({'driver_id': driver_id, 'error': e.kind})
            last_error = e
            continue

        return get_booking_by_id(booking_id), rejected

    last_error.details['rejected_candidates'] = rejected
    raise last_error


def _commit_booking(tour_id: int, driver_id: int, cleaned: dict, price: dict,
                    user_id: int, special_requests: str) -> int:
    """Check one candidate driver and insert the booking under the slot guard."""
    day = cleaned['date']
    customer = cleaned['customer']

    if not get_driver_by_id(driver_id, active_only=True):
        raise DriverNotFound(get_message('driver_not_found'))

    if not is_driver_available(driver_id, day):
        logger.info("Pre-check rejected booking: driver %s unavailable on %s", driver_id, day)
        raise DriverUnavailable(get_message('driver_unavailable', date=day))

    db = get_db()
    try:
        db.execute('BEGIN IMMEDIATE')

        # Deactivations and blocks written after the pre-check are not covered
        # by the unique index
        if not get_driver_by_id(driver_id, active_only=True):
            raise DriverNotFound(get_message('driver_not_found'))
        if is_driver_blocked(driver_id, day):
            raise DriverUnavailable(get_message('driver_unavailable', date=day))

        cursor = db.execute('''
            INSERT INTO bookings (
                tour_id, driver_id, user_id, date, booking_time, group_size,
                customer_name, customer_email, customer_phone,
                price_per_person, total_price, status, special_requests
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 'pending', ?)
        ''', (
            tour_id, driver_id, user_id, day, cleaned['booking_time'], cleaned['group_size'],
            customer['name'], customer['email'], customer['phone'],
            price['price_per_person'], price['total_price'], special_requests
        ))
        booking_id = cursor.lastrowid

        db.execute('''
            INSERT INTO booking_status_history (booking_id, from_status, to_status, changed_by, notes)
            VALUES (?, NULL, 'pending', ?, 'created')
        ''', (booking_id, user_id))

        db.commit()
    except sqlite3.IntegrityError as e:
        db.rollback()
        if 'UNIQUE' not in str(e):
            raise
        logger.warning("Booking race caught at commit: driver %s already booked on %s", driver_id, day)
        raise DriverAlreadyBooked(get_message('driver_already_booked', date=day))
    except BookingError as e:
        db.rollback()
        logger.info("Booking rejected inside transaction: driver %s on %s (%s)", driver_id, day, e.kind)
        raise
    except Exception:
        db.rollback()
        raise

    logger.info("Booking %s created: driver %s on %s", booking_id, driver_id, day)
    return booking_id


# =============================================================================
# QUERIES
# =============================================================================

def get_booking_by_id(booking_id: int) -> dict:
    """
    Get booking by ID with tour and driver names.

    Returns:
        Booking dict or None if not found
    """
    db = get_db()
    row = db.execute(BOOKING_SELECT + ' WHERE b.id = ?', (booking_id,)).fetchone()
    return dict(row) if row else None


def get_bookings(status: str = None, date_from: str = None, date_to: str = None,
                 driver_id: int = None, user_id: int = None) -> list:
    """
    List bookings with optional filters, ordered by date then ID.

    Args:
        status: Only this status
        date_from: Inclusive lower date bound (YYYY-MM-DD)
        date_to: Inclusive upper date bound (YYYY-MM-DD)
        driver_id: Only this driver's bookings
        user_id: Only this member's bookings

    Returns:
        List of booking dicts
    """
    db = get_db()
    conditions = []
    params = []

    if status:
        conditions.append('b.status = ?')
        params.append(status)
    if date_from:
        conditions.append('b.date >= ?')
        params.append(date_from)
    if date_to:
        conditions.append('b.date <= ?')
        params.append(date_to)
    if driver_id:
        conditions.append('b.driver_id = ?')
        params.append(driver_id)
    if user_id:
        conditions.append('b.user_id = ?')
        params.append(user_id)

    query = BOOKING_SELECT
    if conditions:
        query += ' WHERE ' + ' AND '.join(conditions)
    query += ' ORDER BY b.date, b.id'

    return [dict(row) for row in db.execute(query, params).fetchall()]


def get_bookings_for_driver(driver_id: int, upcoming_only: bool = True) -> list:
    """
    A driver's pending and confirmed bookings.

    Args:
        driver_id: Driver ID
        upcoming_only: Skip bookings dated before today

    Returns:
        List of booking dicts ordered by date
    """
    db = get_db()
    query = BOOKING_SELECT + '''
        WHERE b.driver_id = ? AND b.status IN ('pending', 'confirmed')
    '''
    params = [driver_id]
    if upcoming_only:
        query += ' AND b.date >= ?'
        params.append(get_today().isoformat())
    query += ' ORDER BY b.date'
    return [dict(row) for row in db.execute(query, params).fetchall()]


def get_bookings_for_member(user_id: int) -> list:
    """All bookings made by a member account, newest date first."""
    db = get_db()
    rows = db.execute(BOOKING_SELECT + '''
        WHERE b.user_id = ?
        ORDER BY b.date DESC, b.id DESC
    ''', (user_id,)).fetchall()
    return [dict(row) for row in rows]
