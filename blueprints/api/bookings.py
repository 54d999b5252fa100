"""
Booking API routes: create, read, status changes.
"""

import logging

from flask import request
from flask_login import login_required, current_user

from models.booking import create_booking, get_booking_by_id
from models.booking_state import update_booking_status, get_status_history
from models.errors import NotFound, ValidationError
from models.role import Role
from utils.api_response import api_success, api_error
from utils.decorators import role_required
from utils.email import send_booking_confirmation
from utils.messages import get_message
from utils.permissions import can_view_booking, can_set_booking_status
from utils.validators import sanitize_input

logger = logging.getLogger(__name__)


def json_body() -> dict:
    """Request JSON object or a ValidationError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError(get_message('request_body_required'), field='body')
    return data


def register_routes(bp):
    """Register booking API routes on the blueprint."""

    @bp.route('/bookings', methods=['POST'])
    def booking_create():
        """
        Create a pending booking.

        Request body:
            tour_id, date, group_size, customer_name, customer_email,
            customer_phone (optional), booking_time (optional HH:MM),
            special_requests (optional), and
            either driver_id or driver_ids (shortlist in preference order)
        """
        data = json_body()

        driver_ids = data.get('driver_ids')
        if driver_ids is None:
            driver_ids = data.get('driver_id')

        user_id = None
        if current_user.is_authenticated and current_user.role is Role.MEMBER:
            user_id = current_user.id

        booking, rejected = create_booking(
            tour_id=data.get('tour_id'),
            driver_ids=driver_ids,
            date=data.get('date'),
            group_size=data.get('group_size'),
            customer={
                'name': data.get('customer_name'),
                'email': data.get('customer_email'),
                'phone': data.get('customer_phone'),
            },
            user_id=user_id,
            special_requests=data.get('special_requests'),
            booking_time=data.get('booking_time')
        )

        email_sent = send_booking_confirmation(booking)
        warning = None if email_sent else get_message('email_not_sent')

        return api_success(
            message=get_message('booking_created'),
            warning=warning,
            status=201,
            booking=booking,
            rejected_candidates=rejected,
            email_sent=email_sent
        )

    @bp.route('/bookings/<int:booking_id>')
    @login_required
    def booking_detail(booking_id):
        """Booking details for an admin, the assigned driver or the owning member."""
        booking = get_booking_by_id(booking_id)
        if not booking or not can_view_booking(current_user, booking):
            raise NotFound(get_message('booking_not_found'))

        return api_success(booking=booking)

    @bp.route('/bookings/<int:booking_id>', methods=['PATCH'])
    @login_required
    @role_required(Role.ADMIN, Role.DRIVER)
    def booking_update_status(booking_id):
        """
        Change booking status.

        Request body:
            {"status": "confirmed", "notes": "optional"}
        """
        data = json_body()
        status = data.get('status')

        booking = get_booking_by_id(booking_id)
        if not booking:
            raise NotFound(get_message('booking_not_found'))

        if not can_set_booking_status(current_user, booking, status):
            return api_error('Forbidden', 403, message=get_message('permission_denied'))

        update_booking_status(
            booking_id, status,
            changed_by=current_user.id,
            notes=sanitize_input(data.get('notes'), 500) or None
        )

        return api_success(
            message=get_message('booking_status_updated', status=status),
            booking=get_booking_by_id(booking_id)
        )

    @bp.route('/bookings/<int:booking_id>/history')
    @login_required
    def booking_history(booking_id):
        """Status history of a booking, oldest first."""
        booking = get_booking_by_id(booking_id)
        if not booking or not can_view_booking(current_user, booking):
            raise NotFound(get_message('booking_not_found'))

        return api_success(data=get_status_history(booking_id))
