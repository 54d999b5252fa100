"""
Driver unavailability API routes.
Admins manage any driver's blocked dates; drivers manage their own.
"""

from flask import request
from flask_login import login_required, current_user

from blueprints.api.bookings import json_body
from models.driver import get_driver_by_id
from models.driver_unavailability import block_date, unblock_date, get_blocks_for_driver
from models.errors import DriverNotFound
from models.role import Role
from utils.api_response import api_success, api_error
from utils.decorators import role_required
from utils.messages import get_message
from utils.permissions import can_manage_driver_blocks


def list_blocks(driver_id: int):
    blocks = get_blocks_for_driver(driver_id, request.args.get('from'))
    return api_success(data=blocks, driver_id=driver_id)


def add_block(driver_id: int):
    data = json_body()
    block_id = block_date(
        driver_id,
        data.get('date'),
        reason=data.get('reason'),
        created_by=current_user.id
    )
    block = next(b for b in get_blocks_for_driver(driver_id) if b['id'] == block_id)
    return api_success(message=get_message('date_blocked'), status=201, block=block)


def remove_block(driver_id: int, date: str):
    unblock_date(driver_id, date)
    return api_success(message=get_message('date_unblocked'))


def register_routes(bp):
    """Register unavailability API routes on the blueprint."""

    def check_access(driver_id):
        if not can_manage_driver_blocks(current_user, driver_id):
            return api_error('Forbidden', 403, message=get_message('permission_denied'))
        if not get_driver_by_id(driver_id):
            raise DriverNotFound(get_message('driver_not_found'))
        return None

    @bp.route('/drivers/<int:driver_id>/unavailability')
    @login_required
    @role_required(Role.ADMIN, Role.DRIVER)
    def driver_blocks(driver_id):
        """
        A driver's blocked dates, ascending.

        Query params:
            from: Only blocks on or after this date (YYYY-MM-DD)
        """
        return check_access(driver_id) or list_blocks(driver_id)

    @bp.route('/drivers/<int:driver_id>/unavailability', methods=['POST'])
    @login_required
    @role_required(Role.ADMIN, Role.DRIVER)
    def driver_block_create(driver_id):
        """
        Block a date.

        Request body:
            {"date": "YYYY-MM-DD", "reason": "optional"}
        """
        return check_access(driver_id) or add_block(driver_id)

    @bp.route('/drivers/<int:driver_id>/unavailability/<date>', methods=['DELETE'])
    @login_required
    @role_required(Role.ADMIN, Role.DRIVER)
    def driver_block_delete(driver_id, date):
        """Remove a blocked date."""
        return check_access(driver_id) or remove_block(driver_id, date)
