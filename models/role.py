"""
User roles.
"""

from enum import Enum


class Role(str, Enum):
    """Account role, stored in users.role as its lowercase value."""

    ADMIN = 'admin'
    DRIVER = 'driver'
    MEMBER = 'member'

    @classmethod
    def values(cls) -> list:
        return [role.value for role in cls]
