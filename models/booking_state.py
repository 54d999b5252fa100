"""
Booking status state machine.
Handles transitions and status history.
"""

import logging

from database import get_db
from models.errors import InvalidTransition, NotFound
from utils.messages import get_message

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

BOOKING_STATUSES = ('pending', 'confirmed', 'completed', 'cancelled')

VALID_TRANSITIONS = {
    'pending': {'confirmed', 'cancelled'},
    'confirmed': {'completed', 'cancelled'},
    'completed': set(),     # terminal
    'cancelled': set(),     # terminal
}


# =============================================================================
# TRANSITIONS
# =============================================================================

def is_valid_transition(current: str, requested: str) -> bool:
    """True if the state machine allows current -> requested."""
    return requested in VALID_TRANSITIONS.get(current, set())


def validate_status_transition(current: str, requested: str) -> None:
    """
    Raise InvalidTransition unless current -> requested is allowed.
    Unknown statuses are never valid.
    """
    if not is_valid_transition(current, requested):
        raise InvalidTransition(
            get_message('invalid_transition', current=current, requested=requested),
            current_status=current,
            requested_status=requested,
        )


def update_booking_status(booking_id: int, new_status: str, changed_by: int = None,
                          notes: str = None) -> str:
    """
    Move a booking to a new status.

    The read and the write run in one write transaction, so the status the
    transition is validated against is the one being replaced.

    Args:
        booking_id: Booking ID
        new_status: Requested status
        changed_by: User ID making the change
        notes: Optional notes for the history row

    Returns:
        str: Previous status

    Raises:
        NotFound: Booking does not exist
        InvalidTransition: Transition not allowed from the current status
    """
    db = get_db()
    try:
        db.execute('BEGIN IMMEDIATE')

        row = db.execute('SELECT status FROM bookings WHERE id = ?', (booking_id,)).fetchone()
        if not row:
            raise NotFound(get_message('booking_not_found'))

        current = row['status']
        validate_status_transition(current, new_status)

        db.execute('''
            UPDATE bookings
            SET status = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = ? AND status = ?
        ''', (new_status, booking_id, current))

        db.execute('''
            INSERT INTO booking_status_history (booking_id, from_status, to_status, changed_by, notes)
            VALUES (?, ?, ?, ?, ?)
        ''', (booking_id, current, new_status, changed_by, notes))

        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Booking %s: %s -> %s (by user %s)", booking_id, current, new_status, changed_by)
    return current


# =============================================================================
# HISTORY
# =============================================================================

def get_status_history(booking_id: int) -> list:
    """
    Get status history for a booking, oldest first.

    Returns:
        List of history dicts
    """
    db = get_db()
    rows = db.execute('''
        SELECT h.*, u.email AS changed_by_email
        FROM booking_status_history h
        LEFT JOIN users u ON h.changed_by = u.id
        WHERE h.booking_id = ?
        ORDER BY h.created_at, h.id
    ''', (booking_id,)).fetchall()
    return [dict(row) for row in rows]
