"""
User model and data access functions.
Handles user authentication, CRUD operations, and Flask-Login integration.
"""

from werkzeug.security import generate_password_hash, check_password_hash
from database import get_db
from models.role import Role


class User:
    """
    User class for Flask-Login integration.
    Wraps database row dictionary with required Flask-Login properties.
    """

    def __init__(self, user_dict):
        """
        Initialize User from database row.

        Args:
            user_dict: Dictionary with user data from database
        """
        self.id = user_dict['id']
        self.email = user_dict['email']
        self.full_name = user_dict['full_name']
        self.role = Role(user_dict['role'])
        self.driver_id = user_dict.get('driver_id')
        self.active = user_dict['active']
        self.created_at = user_dict['created_at']
        self.last_login = user_dict.get('last_login')

    @property
    def is_authenticated(self):
        """Required by Flask-Login."""
        return True

    @property
    def is_active(self):
        """Required by Flask-Login."""
        return self.active == 1

    @property
    def is_anonymous(self):
        """Required by Flask-Login."""
        return False

    def get_id(self):
        """Required by Flask-Login. Returns user ID as unicode string."""
        return str(self.id)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'email': self.email,
            'full_name': self.full_name,
            'role': self.role.value,
            'driver_id': self.driver_id,
        }


def get_user_by_id(user_id: int) -> dict:
    """
    Get user by ID.

    Args:
        user_id: User ID

    Returns:
        User dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM users WHERE id = ?', (user_id,))
    row = cursor.fetchone()
    return dict(row) if row else None


def get_user_by_email(email: str) -> dict:
    """
    Get user by email.

    Args:
        email: Email to search for

    Returns:
        User dict or None if not found
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('SELECT * FROM users WHERE email = ?', (email.strip().lower(),))
    row = cursor.fetchone()
    return dict(row) if row else None


def create_user(email: str, password: str, full_name: str = None,
                role: Role = Role.MEMBER, driver_id: int = None, commit: bool = True) -> int:
    """
    Create new user with hashed password.

    Args:
        email: Unique email
        password: Plain text password (will be hashed)
        full_name: User's full name
        role: Account role
        driver_id: Linked driver profile (driver accounts only)
        commit: Commit immediately (False leaves the transaction open)

    Returns:
        New user ID

    Raises:
        sqlite3.IntegrityError if email already exists
    """
    db = get_db()
    password_hash = generate_password_hash(password)
    role = Role(role)

    cursor = db.cursor()
    cursor.execute('''
        INSERT INTO users (email, password_hash, full_name, role, driver_id)
        VALUES (?, ?, ?, ?, ?)
    ''', (email.strip().lower(), password_hash, full_name, role.value, driver_id))
    user_id = cursor.lastrowid

    if driver_id:
        cursor.execute('''
            UPDATE drivers SET user_id = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
        ''', (user_id, driver_id))

    if commit:
        db.commit()
    return user_id


def update_last_login(user_id: int) -> None:
    """
    Update last login timestamp.

    Args:
        user_id: User ID
    """
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        UPDATE users SET last_login = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (user_id,))
    db.commit()


def check_password(user_dict: dict, password: str) -> bool:
    """
    Verify password against stored hash.

    Args:
        user_dict: User dictionary with password_hash
        password: Plain text password to check

    Returns:
        True if password matches
    """
    return check_password_hash(user_dict['password_hash'], password)
