"""
Member routes.
"""

from flask import Blueprint
from flask_login import login_required, current_user

from models.booking import get_bookings_for_member
from models.role import Role
from utils.api_response import api_success
from utils.decorators import role_required

member_bp = Blueprint('member', __name__)


@member_bp.route('/bookings')
@login_required
@role_required(Role.MEMBER)
def bookings():
    """Bookings made from this member account, newest first."""
    return api_success(data=get_bookings_for_member(current_user.id))
