"""
Permission checking utilities.
Ownership rules on top of the role checks done by role_required.
"""

from models.role import Role

# Statuses a driver may move their own bookings to
DRIVER_ALLOWED_STATUSES = {'confirmed', 'completed'}


def can_view_booking(user, booking: dict) -> bool:
    """
    Check if user may read a booking.

    Admins read everything, drivers read bookings assigned to them and
    members read bookings they made.
    """
    if not user.is_authenticated:
        return False
    if user.role is Role.ADMIN:
        return True
    if user.role is Role.DRIVER:
        return user.driver_id is not None and booking['driver_id'] == user.driver_id
    return booking['user_id'] == user.id


def can_set_booking_status(user, booking: dict, status: str) -> bool:
    """
    Check if user may request a status change on a booking.

    Whether the transition itself is valid is decided by the state machine.
    """
    if user.role is Role.ADMIN:
        return True
    if user.role is Role.DRIVER:
        return (
            user.driver_id is not None
            and booking['driver_id'] == user.driver_id
            and status in DRIVER_ALLOWED_STATUSES
        )
    return False


def can_manage_driver_blocks(user, driver_id: int) -> bool:
    """Admins manage any driver's blocks, drivers only their own."""
    if user.role is Role.ADMIN:
        return True
    return user.role is Role.DRIVER and user.driver_id == driver_id
