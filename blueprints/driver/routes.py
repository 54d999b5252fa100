"""
Driver self-service routes: own bookings and own blocked dates.
"""

from flask import Blueprint, request
from flask_login import login_required, current_user

from blueprints.api.unavailability import list_blocks, add_block, remove_block
from models.booking import get_bookings_for_driver
from models.role import Role
from utils.api_response import api_success, api_error
from utils.decorators import role_required
from utils.messages import get_message

driver_bp = Blueprint('driver', __name__)


@driver_bp.before_request
@login_required
@role_required(Role.DRIVER)
def require_linked_driver():
    """Every route here needs a driver account linked to a driver profile."""
    if current_user.driver_id is None:
        return api_error('Forbidden', 403, message=get_message('driver_not_linked'))
    return None


@driver_bp.route('/bookings')
def bookings():
    """
    Own pending and confirmed bookings.

    Query params:
        all: "1" to include past dates
    """
    upcoming_only = request.args.get('all') != '1'
    return api_success(data=get_bookings_for_driver(current_user.driver_id, upcoming_only))


@driver_bp.route('/unavailability')
def unavailability():
    """Own blocked dates, ascending."""
    return list_blocks(current_user.driver_id)


@driver_bp.route('/unavailability', methods=['POST'])
def unavailability_create():
    """
    Block a date.

    Request body:
        {"date": "YYYY-MM-DD", "reason": "optional"}
    """
    return add_block(current_user.driver_id)


@driver_bp.route('/unavailability/<date>', methods=['DELETE'])
def unavailability_delete(date):
    """Remove a blocked date."""
    return remove_block(current_user.driver_id, date)
