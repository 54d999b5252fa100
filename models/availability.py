"""
Driver availability index.
Read-only view composed from the unavailability ledger and live bookings.
Nothing here is cached: every call reads the committed state.
"""

from database import get_db
from models.driver import get_all_drivers
from models.driver_unavailability import get_blocked_driver_ids, is_driver_blocked


def get_booked_driver_ids(date: str) -> set:
    """IDs of drivers holding a pending or confirmed booking on the date."""
    db = get_db()
    rows = db.execute('''
        SELECT driver_id FROM bookings
        WHERE date = ? AND driver_id IS NOT NULL
          AND status IN ('pending', 'confirmed')
    ''', (date,)).fetchall()
    return {row['driver_id'] for row in rows}


def has_active_booking(driver_id: int, date: str) -> bool:
    """True if the driver holds a pending or confirmed booking on the date."""
    db = get_db()
    row = db.execute('''
        SELECT 1 FROM bookings
        WHERE driver_id = ? AND date = ?
          AND status IN ('pending', 'confirmed')
    ''', (driver_id, date)).fetchone()
    return row is not None


def get_unavailable_driver_ids(date: str) -> set:
    """Drivers that are blocked or already booked on the date."""
    return get_blocked_driver_ids(date) | get_booked_driver_ids(date)


def is_driver_available(driver_id: int, date: str) -> bool:
    """True if the driver is neither blocked nor booked on the date."""
    return not is_driver_blocked(driver_id, date) and not has_active_booking(driver_id, date)


def get_available_drivers(date: str, group_size: int = None) -> list:
    """
    Get every active driver free on a date.

    Args:
        date: Date (YYYY-MM-DD)
        group_size: Accepted for vehicle-capacity filtering; does not
            narrow the result yet

    Returns:
        List of driver dicts ordered by name
    """
    unavailable = get_unavailable_driver_ids(date)
    return [
        driver for driver in get_all_drivers(active_only=True)
        if driver['id'] not in unavailable
    ]
