"""
Public website enquiries: contact requests and free-form reviews.
Both are forwarded to the operator by email; nothing is stored.
"""

import logging

from blueprints.api.forms import ContactForm, ReviewEnquiryForm
from blueprints.auth.forms import form_errors
from utils.api_response import api_success, api_error
from utils.email import send_contact_notification, send_review_notification
from utils.messages import get_message

logger = logging.getLogger(__name__)


def single_line(value: str) -> str:
    """Collapse whitespace so the value is safe in an email header."""
    return ' '.join(value.split())


def invalid_form(form):
    errors = form_errors(form)
    return api_error('ValidationError', 400, message=errors[0]['message'], errors=errors)


def register_routes(bp):
    """Register enquiry API routes on the blueprint."""

    @bp.route('/contact', methods=['POST'])
    def contact():
        """
        Send a contact enquiry to the operator.

        Request body:
            {"name": "...", "email": "...", "phone": "...", "message": "..."}
        """
        form = ContactForm()
        if not form.validate_on_submit():
            return invalid_form(form)

        enquiry = {
            'name': single_line(form.name.data),
            'email': form.email.data.strip(),
            'phone': form.phone.data.strip(),
            'message': form.message.data.strip(),
        }
        logger.info("Contact enquiry from %s", enquiry['email'])

        email_sent = send_contact_notification(enquiry)
        return api_success(
            message=get_message('contact_received'),
            warning=None if email_sent else get_message('notification_not_sent'),
            email_sent=email_sent
        )

    @bp.route('/review', methods=['POST'])
    def review_enquiry():
        """
        Send a website review of a driver or tour to the operator.

        Request body:
            {"type": "driver" | "tour", "target_name": "...", "name": "...",
             "email": optional, "rating": 1-5, "text": "..."}
        """
        form = ReviewEnquiryForm()
        if not form.validate_on_submit():
            return invalid_form(form)

        review = {
            'type': form.type.data,
            'target_name': single_line(form.target_name.data),
            'name': single_line(form.name.data),
            'email': (form.email.data or '').strip(),
            'rating': form.rating.data,
            'text': form.text.data.strip(),
        }
        logger.info("Website %s review for %s", review['type'], review['target_name'])

        email_sent = send_review_notification(review)
        return api_success(
            message=get_message('review_enquiry_received'),
            warning=None if email_sent else get_message('notification_not_sent'),
            email_sent=email_sent
        )
