"""
Admin routes for driver management, booking overview and review moderation.
"""

import sqlite3

from flask import request, Blueprint
from flask_login import login_required, current_user

from blueprints.admin.services import validate_driver_creation, create_driver_with_account
from blueprints.api.bookings import json_body
from models.booking import get_bookings
from models.booking_state import BOOKING_STATUSES
from models.driver import get_all_drivers, get_driver_by_id, set_driver_active
from models.errors import DriverNotFound, ValidationError
from models.review import approve_review, get_reviews, reject_review
from models.role import Role
from utils.api_response import api_success, api_error
from utils.datetime_helpers import parse_request_date
from utils.decorators import role_required
from utils.messages import get_message

admin_bp = Blueprint('admin', __name__)


@admin_bp.route('/bookings')
@login_required
@role_required(Role.ADMIN)
def bookings():
    """
    List bookings with filtering.

    Query params:
        status: pending | confirmed | completed | cancelled
        date_from, date_to: Inclusive date range (YYYY-MM-DD)
        driver_id: Only this driver's bookings
    """
    status = request.args.get('status') or None
    if status and status not in BOOKING_STATUSES:
        raise ValidationError(
            get_message('invalid_status', statuses=', '.join(BOOKING_STATUSES)),
            field='status'
        )

    date_from = request.args.get('date_from')
    date_to = request.args.get('date_to')
    if date_from:
        date_from = parse_request_date(date_from, field='date_from').isoformat()
    if date_to:
        date_to = parse_request_date(date_to, field='date_to').isoformat()

    results = get_bookings(
        status=status,
        date_from=date_from,
        date_to=date_to,
        driver_id=request.args.get('driver_id', type=int)
    )
    return api_success(data=results, count=len(results))


@admin_bp.route('/drivers')
@login_required
@role_required(Role.ADMIN)
def drivers():
    """All drivers, including inactive ones."""
    return api_success(data=get_all_drivers(active_only=False))


@admin_bp.route('/drivers', methods=['POST'])
@login_required
@role_required(Role.ADMIN)
def driver_create():
    """
    Create a driver.

    Request body:
        name, email, phone (optional), license_number (optional),
        password (optional, creates a driver login with the same email)
    """
    data = json_body()
    email = (data.get('email') or '').strip().lower()

    is_valid, error = validate_driver_creation(data.get('name') or '', email, data.get('password'))
    if not is_valid:
        raise ValidationError(error, field='driver')

    try:
        driver = create_driver_with_account({**data, 'email': email})
    except sqlite3.IntegrityError:
        return api_error('Conflict', 409, message=get_message('email_exists'))

    return api_success(data=driver, message=get_message('driver_created'), status=201)


@admin_bp.route('/drivers/<int:driver_id>', methods=['PATCH'])
@login_required
@role_required(Role.ADMIN)
def driver_update(driver_id):
    """
    Activate or deactivate a driver.

    Request body:
        {"active": true | false}
    """
    data = json_body()
    active = data.get('active')
    if not isinstance(active, bool):
        raise ValidationError(get_message('invalid_active_flag'), field='active')

    if not set_driver_active(driver_id, active):
        raise DriverNotFound(get_message('driver_not_found'))

    message_key = 'driver_activated' if active else 'driver_deactivated'
    return api_success(data=get_driver_by_id(driver_id), message=get_message(message_key))


@admin_bp.route('/reviews')
@login_required
@role_required(Role.ADMIN)
def reviews():
    """
    Driver reviews for moderation, newest first.

    Query params:
        approved: 0 for the pending queue, 1 for published reviews
        driver_id: Only this driver's reviews
    """
    approved = request.args.get('approved')
    if approved not in (None, '', '0', '1'):
        raise ValidationError(get_message('invalid_approved_filter'), field='approved')

    results = get_reviews(
        driver_id=request.args.get('driver_id', type=int),
        approved=None if approved in (None, '') else approved == '1'
    )
    return api_success(data=results, count=len(results))


@admin_bp.route('/reviews/<int:review_id>', methods=['PATCH'])
@login_required
@role_required(Role.ADMIN)
def review_approve(review_id):
    """
    Approve a review so it is listed publicly.

    Request body:
        {"approved": true}
    """
    data = json_body()
    if data.get('approved') is not True:
        raise ValidationError(get_message('invalid_approved_flag'), field='approved')

    review = approve_review(review_id, approved_by=current_user.id)
    return api_success(data=review, message=get_message('review_approved'))


@admin_bp.route('/reviews/<int:review_id>', methods=['DELETE'])
@login_required
@role_required(Role.ADMIN)
def review_reject(review_id):
    """Reject a review; it is deleted."""
    reject_review(review_id)
    return api_success(message=get_message('review_rejected'))
