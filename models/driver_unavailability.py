"""
Driver unavailability ledger.
One row per (driver, date) the driver cannot work. Blocks are created by the
driver or an admin and may not cover a date the driver already has a
confirmed booking on.
"""

import logging
import sqlite3

from database import get_db
from models.driver import get_driver_by_id
from models.errors import Conflict, DriverNotFound, NotFound
from utils.datetime_helpers import parse_request_date
from utils.messages import get_message
from utils.validators import sanitize_input

logger = logging.getLogger(__name__)


# =============================================================================
# MUTATIONS
# =============================================================================

def block_date(driver_id: int, date: str, reason: str = None, created_by: int = None) -> int:
    """
    Mark a driver unavailable on a date.

    Args:
        driver_id: Driver ID
        date: Date to block (YYYY-MM-DD, today or later)
        reason: Optional free-text reason
        created_by: User ID creating the block

    Returns:
        int: Block ID

    Raises:
        InvalidDate: Malformed or past date
        DriverNotFound: Unknown driver
        Conflict: Date already blocked, or a confirmed booking exists
    """
    day = parse_request_date(date, allow_past=False).isoformat()

    if not get_driver_by_id(driver_id):
        raise DriverNotFound(get_message('driver_not_found'))

    db = get_db()
    try:
        db.execute('BEGIN IMMEDIATE')

        confirmed = db.execute('''
            SELECT id FROM bookings
            WHERE driver_id = ? AND date = ? AND status = 'confirmed'
        ''', (driver_id, day)).fetchone()
        if confirmed:
            raise Conflict(get_message('date_has_confirmed_booking'), booking_id=confirmed['id'])

        cursor = db.execute('''
            INSERT INTO driver_unavailability (driver_id, date, reason, created_by)
            VALUES (?, ?, ?, ?)
        ''', (driver_id, day, sanitize_input(reason, 255) or None, created_by))

        db.commit()
    except sqlite3.IntegrityError:
        db.rollback()
        raise Conflict(get_message('date_already_blocked'))
    except Exception:
        db.rollback()
        raise

    logger.info("Driver %s blocked %s", driver_id, day)
    return cursor.lastrowid


def unblock_date(driver_id: int, date: str) -> None:
    """
    Remove a driver's block on a date.

    Raises:
        InvalidDate: Malformed date
        NotFound: No block exists for (driver, date)
    """
    day = parse_request_date(date).isoformat()

    db = get_db()
    cursor = db.execute('''
        DELETE FROM driver_unavailability
        WHERE driver_id = ? AND date = ?
    ''', (driver_id, day))
    db.commit()

    if cursor.rowcount == 0:
        raise NotFound(get_message('block_not_found'))

    logger.info("Driver %s unblocked %s", driver_id, day)


# =============================================================================
# QUERIES
# =============================================================================

def get_blocks_for_driver(driver_id: int, date_from: str = None) -> list:
    """
    Get a driver's blocks ordered by date ascending.

    Args:
        driver_id: Driver ID
        date_from: Optional lower bound (inclusive, YYYY-MM-DD)

    Returns:
        List of block dicts
    """
    db = get_db()
    query = '''
        SELECT id, driver_id, date, reason, created_by, created_at
        FROM driver_unavailability
        WHERE driver_id = ?
    '''
    params = [driver_id]

    if date_from:
        query += ' AND date >= ?'
        params.append(parse_request_date(date_from, field='from').isoformat())

    query += ' ORDER BY date'
    return [dict(row) for row in db.execute(query, params).fetchall()]


def is_driver_blocked(driver_id: int, date: str) -> bool:
    """True if the driver has a block on the date."""
    db = get_db()
    row = db.execute('''
        SELECT 1 FROM driver_unavailability
        WHERE driver_id = ? AND date = ?
    ''', (driver_id, date)).fetchone()
    return row is not None


def get_blocked_driver_ids(date: str) -> set:
    """IDs of every driver blocked on the date."""
    db = get_db()
    rows = db.execute(
        'SELECT driver_id FROM driver_unavailability WHERE date = ?', (date,)
    ).fetchall()
    return {row['driver_id'] for row in rows}
