"""
Business logic for admin driver management.
Provides validation and the driver + login account creation flow.
"""

import logging

from database import get_db
from models.driver import create_driver, get_driver_by_id
from models.role import Role
from models.user import create_user, get_user_by_email
from utils.validators import sanitize_input, validate_email, validate_password

logger = logging.getLogger(__name__)


def validate_driver_creation(name: str, email: str, password: str = None) -> tuple:
    """
    Validate driver creation data.

    Args:
        name: Driver display name
        email: Driver contact email (also the login when a password is given)
        password: Optional password for a driver login account

    Returns:
        Tuple of (is_valid, error_message)
    """
    if len(sanitize_input(name)) < 2:
        return False, 'Driver name is required (min 2 characters)'

    if not validate_email(email):
        return False, 'A valid driver email is required'

    if password is not None:
        valid, error = validate_password(password)
        if not valid:
            return False, error

        if get_user_by_email(email):
            return False, 'An account with this email already exists'

    return True, ''


def create_driver_with_account(data: dict) -> dict:
    """
    Create a driver and, when a password is supplied, a linked driver login.
    Both rows are written in one transaction.

    Args:
        data: Validated payload (name, email, phone, license_number, password)

    Returns:
        The new driver dict

    Raises:
        sqlite3.IntegrityError if the email is already used by a driver or
        an account; nothing is written in that case
    """
    db = get_db()
    try:
        driver_id = create_driver(
            name=sanitize_input(data['name'], 120),
            email=data['email'],
            phone=sanitize_input(data.get('phone'), 30) or None,
            license_number=sanitize_input(data.get('license_number'), 50) or None,
            commit=False
        )

        if data.get('password'):
            create_user(
                email=data['email'],
                password=data['password'],
                full_name=sanitize_input(data['name'], 120),
                role=Role.DRIVER,
                driver_id=driver_id,
                commit=False
            )

        db.commit()
    except Exception:
        db.rollback()
        raise

    if data.get('password'):
        logger.info("Driver %s created with login %s", driver_id, data['email'])
    else:
        logger.info("Driver %s created without login", driver_id)

    return get_driver_by_id(driver_id)
