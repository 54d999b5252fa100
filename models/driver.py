"""
Driver data access functions.
Drivers are never deleted; deactivation hides them from availability.
"""

from database import get_db


def get_all_drivers(active_only: bool = True) -> list:
    """
    Get all drivers.

    Args:
        active_only: If True, only return active drivers

    Returns:
        List of driver dicts ordered by name
    """
    db = get_db()
    query = 'SELECT * FROM drivers'
    if active_only:
        query += ' WHERE active = 1'
    query += ' ORDER BY name'
    return [dict(row) for row in db.execute(query).fetchall()]


def get_driver_by_id(driver_id: int, active_only: bool = False) -> dict:
    """
    Get driver by ID.

    Args:
        driver_id: Driver ID
        active_only: Treat inactive drivers as missing

    Returns:
        Driver dict or None if not found
    """
    db = get_db()
    query = 'SELECT * FROM drivers WHERE id = ?'
    if active_only:
        query += ' AND active = 1'
    row = db.execute(query, (driver_id,)).fetchone()
    return dict(row) if row else None


def get_driver_by_user_id(user_id: int) -> dict:
    """Driver profile linked to a user account, or None."""
    db = get_db()
    row = db.execute('SELECT * FROM drivers WHERE user_id = ?', (user_id,)).fetchone()
    return dict(row) if row else None


def create_driver(name: str, email: str = None, phone: str = None,
                  license_number: str = None, commit: bool = True) -> int:
    """
    Create a new active driver.

    With commit=False the insert stays in the open transaction so the caller
    can add the driver's login account and commit both together.

    Returns:
        New driver ID

    Raises:
        sqlite3.IntegrityError if email already exists
    """
    db = get_db()
    cursor = db.execute('''
        INSERT INTO drivers (name, email, phone, license_number, active)
        VALUES (?, ?, ?, ?, 1)
    ''', (name, email.strip().lower() if email else None, phone, license_number))
    if commit:
        db.commit()
    return cursor.lastrowid


def set_driver_active(driver_id: int, active: bool) -> bool:
    """
    Activate or deactivate a driver.

    Returns:
        True if the driver exists
    """
    db = get_db()
    cursor = db.execute('''
        UPDATE drivers SET active = ?, updated_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (1 if active else 0, driver_id))
    db.commit()
    return cursor.rowcount > 0
