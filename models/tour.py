"""
Tour catalogue and group pricing.
Tours are priced per person from a bracket table keyed by group size.
"""

import re
from datetime import datetime, timedelta

from flask import current_app

from database import get_db
from models.errors import TourNotFound, InvalidGroupSize, InvalidTime
from utils.messages import get_message


def get_all_tours(active_only: bool = True) -> list:
    """
    Get all tours with their price brackets.

    Args:
        active_only: If True, only return active tours

    Returns:
        List of tour dicts, each with a 'price_brackets' list
    """
    db = get_db()
    query = 'SELECT * FROM tours'
    if active_only:
        query += ' WHERE active = 1'
    query += ' ORDER BY id'

    tours = [dict(row) for row in db.execute(query).fetchall()]
    for tour in tours:
        tour['price_brackets'] = get_tour_price_brackets(tour['id'])
    return tours


def get_tour_by_id(tour_id: int, active_only: bool = False) -> dict:
    """
    Get tour by ID.

    Args:
        tour_id: Tour ID
        active_only: Treat inactive tours as missing

    Returns:
        Tour dict or None if not found
    """
    db = get_db()
    query = 'SELECT * FROM tours WHERE id = ?'
    if active_only:
        query += ' AND active = 1'
    row = db.execute(query, (tour_id,)).fetchone()
    return dict(row) if row else None


def get_tour_price_brackets(tour_id: int) -> list:
    """Price brackets for a tour, ordered by min_size."""
    db = get_db()
    rows = db.execute('''
        SELECT min_size, max_size, price_per_person
        FROM tour_price_brackets
        WHERE tour_id = ?
        ORDER BY min_size
    ''', (tour_id,)).fetchall()
    return [dict(row) for row in rows]


def find_bracket_price(brackets: list, group_size: int) -> float:
    """
    Pick the per-person price for a group size.

    The bracket containing the size wins. Sizes above the top bracket use the
    top bracket and sizes below the lowest bracket use the lowest one.

    Args:
        brackets: Bracket dicts ordered by min_size
        group_size: Number of guests

    Returns:
        Price per person, or None if the table is empty
    """
    if not brackets:
        return None

    for bracket in brackets:
        if bracket['min_size'] <= group_size <= bracket['max_size']:
            return bracket['price_per_person']

    if group_size > brackets[-1]['max_size']:
        return brackets[-1]['price_per_person']
    if group_size < brackets[0]['min_size']:
        return brackets[0]['price_per_person']

    # Gap between brackets: use the closest bracket below
    below = [b for b in brackets if b['max_size'] < group_size]
    return below[-1]['price_per_person']


HOURS_RANGE = re.compile(r'(\d+\.?\d*)\s*-\s*(\d+\.?\d*)\s*hours?', re.IGNORECASE)
HOURS_SINGLE = re.compile(r'(\d+\.?\d*)\s*hours?', re.IGNORECASE)


def parse_duration_hours(duration: str) -> float | None:
    """
    Estimate a tour's length in hours from its duration text.

    "8-9 hours" is the midpoint (8.5), "3 hours" is 3, "Full Day" is 8 and
    "Half Day" is 4. Multi-day durations have no hour estimate.

    Returns:
        Hours, or None when the text gives no estimate
    """
    if not duration:
        return None

    match = HOURS_RANGE.search(duration)
    if match:
        return (float(match.group(1)) + float(match.group(2))) / 2

    match = HOURS_SINGLE.search(duration)
    if match:
        return float(match.group(1))

    text = duration.lower()
    if 'full day' in text:
        return 8.0
    if 'half day' in text:
        return 4.0
    return None


def check_start_time(tour: dict, start) -> None:
    """
    Reject a start time that would end the tour after the daily cutoff.

    Args:
        tour: Tour dict (uses duration)
        start: datetime.time the tour starts

    Raises:
        InvalidTime: The tour would end after BOOKING_CUTOFF_HOUR
    """
    config = current_app.config
    hours = parse_duration_hours(tour.get('duration')) or config['DEFAULT_TOUR_HOURS']

    start_at = datetime.combine(datetime.min.date(), start)
    end_at = start_at + timedelta(hours=hours)
    cutoff = start_at.replace(hour=config['BOOKING_CUTOFF_HOUR'], minute=0)

    if end_at > cutoff:
        raise InvalidTime(
            get_message('tour_ends_after_cutoff', end=end_at.strftime('%H:%M'),
                        cutoff=cutoff.strftime('%H:%M')),
            field='booking_time'
        )


def calculate_price(tour_id: int, group_size: int) -> dict:
    """
    Calculate the price of a tour for a group.

    Args:
        tour_id: Tour ID
        group_size: Number of guests (>= 1)

    Returns:
        dict with price_per_person and total_price

    Raises:
        TourNotFound: Tour missing, inactive or without a price table
        InvalidGroupSize: group_size below 1
    """
    if group_size < 1:
        raise InvalidGroupSize(
            get_message('invalid_group_size', max_size=current_app.config['MAX_GROUP_SIZE']),
            field='group_size'
        )

    tour = get_tour_by_id(tour_id, active_only=True)
    if not tour:
        raise TourNotFound(get_message('tour_not_found'))

    price_per_person = find_bracket_price(get_tour_price_brackets(tour_id), group_size)
    if price_per_person is None:
        raise TourNotFound(get_message('tour_not_found'))

    return {
        'price_per_person': round(price_per_person, 2),
        'total_price': round(price_per_person * group_size, 2),
    }
