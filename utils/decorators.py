"""
Route decorators for authentication and authorization.
Provides role-based access control for API routes.
"""

from functools import wraps
from flask_login import login_required, current_user

from utils.api_response import api_error
from utils.messages import get_message


def role_required(*roles):
    """
    Decorator to require one of the given roles for a route.

    Usage:
        @bp.route('/admin/drivers')
        @login_required
        @role_required(Role.ADMIN)
        def list_drivers():
            ...

    Args:
        *roles: Roles allowed to call the route

    Returns:
        Decorator function
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                return api_error('Unauthorized', 401, message=get_message('login_required'))

            if current_user.role not in roles:
                return api_error('Forbidden', 403, message=get_message('permission_denied'))

            return func(*args, **kwargs)
        return wrapper
    return decorator


# Re-export login_required for convenience
__all__ = ['login_required', 'role_required']
