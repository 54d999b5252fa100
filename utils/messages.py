"""
Centralized UI messages.
All user-facing text in one place for consistency.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Welcome {name}',
    'logout_success': 'You have been logged out',
    'register_success': 'Account created successfully',
    'booking_created': 'Booking received. It is pending confirmation.',
    'booking_status_updated': 'Booking status updated to {status}',
    'date_blocked': 'Date blocked successfully',
    'date_unblocked': 'Blocked date removed successfully',
    'driver_created': 'Driver account created successfully',
    'driver_activated': 'Driver activated successfully',
    'driver_deactivated': 'Driver deactivated successfully',
    'review_submitted': 'Thank you. Your review will appear once it has been approved.',
    'review_approved': 'Review approved',
    'review_rejected': 'Review rejected and removed',
    'contact_received': 'Thank you. Your request has been received. Our team will respond with a detailed proposal shortly.',
    'review_enquiry_received': 'Review submitted successfully',

    # Warnings
    'email_not_sent': 'Your booking was saved, but the confirmation email could not be sent.',
    'notification_not_sent': 'Your message was received, but our team could not be notified by email. We will still follow up.',

    # Authentication / authorization
    'invalid_credentials': 'Invalid email or password',
    'account_inactive': 'This account has been deactivated. Please contact us.',
    'login_required': 'Please log in to access this resource',
    'permission_denied': 'You do not have permission for this action',
    'email_exists': 'An account with this email already exists',
    'driver_not_linked': 'Driver profile is not linked to this user account',

    # Validation
    'request_body_required': 'A JSON request body is required',
    'date_required': 'Date is required (format: YYYY-MM-DD)',
    'invalid_date_format': 'Invalid date format. Use YYYY-MM-DD',
    'date_in_past': 'Date cannot be in the past',
    'invalid_group_size': 'Group size must be a whole number between 1 and {max_size}',
    'invalid_customer_name': 'Customer name is required (min 2 characters)',
    'invalid_customer_email': 'A valid customer email is required',
    'invalid_customer_phone': 'Customer phone number is not valid',
    'invalid_shortlist': 'Select between 1 and {max_drivers} different drivers',
    'invalid_time_format': 'Invalid time format. Use HH:MM (24-hour format)',
    'tour_ends_after_cutoff': 'This tour would end at {end}, which is after our {cutoff} cutoff time. Please select an earlier start time.',
    'invalid_rating': 'Rating must be a whole number from 1 to 5',
    'invalid_review_comment': 'Review must be at least 10 characters',
    'invalid_approved_flag': 'approved must be true, or use DELETE to reject',
    'invalid_approved_filter': 'approved must be 0 or 1',
    'invalid_status': 'Invalid status. Must be one of: {statuses}',
    'invalid_active_flag': 'active must be a boolean value',
    'invalid_driver_fields': 'Name and a valid email are required',

    # Domain errors
    'tour_not_found': 'Tour not found or no longer offered',
    'driver_not_found': 'Driver not found or not active',
    'driver_unavailable': 'This driver is no longer available on {date}, please choose another',
    'driver_already_booked': 'This driver is no longer available on {date}, please choose another',
    'invalid_transition': 'Cannot change booking status from {current} to {requested}',
    'date_already_blocked': 'Date is already blocked',
    'date_has_confirmed_booking': 'Cannot block a date with a confirmed booking',
    'block_not_found': 'Blocked date not found',
    'booking_not_found': 'Booking not found',
    'review_not_found': 'Review not found',
    'review_requires_booking': 'You can only review drivers after a confirmed or completed booking with them',
    'not_found': 'Resource not found',
    'internal_error': 'An unexpected error occurred',

    # Booking statuses
    'status_pending': 'Pending',
    'status_confirmed': 'Confirmed',
    'status_completed': 'Completed',
    'status_cancelled': 'Cancelled',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get message with optional formatting.

    Args:
        key: Message key
        **kwargs: Format parameters

    Returns:
        Formatted message or key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message
