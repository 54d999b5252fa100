"""
Outbound email.
Booking confirmations and operator notifications are sent through SMTP with
aiosmtplib; a failed send is logged and reported to the caller, it never undoes
the booking or enquiry.
"""

import asyncio
import logging
from email.message import EmailMessage

import aiosmtplib
from flask import current_app

logger = logging.getLogger(__name__)


async def _send_async(msg: EmailMessage, config) -> None:
    await aiosmtplib.send(
        msg,
        hostname=config['MAIL_SERVER'],
        port=config['MAIL_PORT'],
        username=config.get('MAIL_USERNAME') or None,
        password=config.get('MAIL_PASSWORD') or None,
        start_tls=bool(config.get('MAIL_USERNAME')),
    )


def send_email(recipient: str, subject: str, body: str, reply_to: str = None) -> bool:
    """
    Send a plain-text email.

    Returns:
        True when the message was handed to the SMTP server
    """
    config = current_app.config
    if not config.get('MAIL_ENABLED'):
        logger.info("Mail disabled, not sending '%s' to %s", subject, recipient)
        return False

    msg = EmailMessage()
    msg['From'] = config['MAIL_FROM']
    msg['To'] = recipient
    msg['Subject'] = subject
    if reply_to:
        msg['Reply-To'] = reply_to
    msg.set_content(body)

    try:
        asyncio.run(_send_async(msg, config))
    except (aiosmtplib.SMTPException, OSError) as exc:
        logger.error("Failed to send email to %s: %s", recipient, exc)
        return False

    logger.info("Sent email to %s", recipient)
    return True


def send_booking_confirmation(booking: dict) -> bool:
    """
    Send the "booking received" email for a freshly created booking.

    Args:
        booking: Booking dict as returned by get_booking_by_id

    Returns:
        True if the email went out
    """
    app_name = current_app.config.get('APP_NAME', 'UNICAB Travel & Tours')
    subject = f"{app_name}: booking #{booking['id']} received"
    body = (
        f"Hi {booking['customer_name']},\n\n"
        f"Thank you for booking {booking.get('tour_name', 'your tour')} on {booking['date']} "
        f"for {booking['group_size']} guest(s).\n"
        f"Start time: {booking.get('booking_time') or 'to be confirmed'}\n"
        f"Driver: {booking.get('driver_name') or 'to be assigned'}\n"
        f"Price per person: R{booking['price_per_person']:,.2f}\n"
        f"Total: R{booking['total_price']:,.2f}\n\n"
        "Your booking is pending confirmation. We will be in touch shortly.\n\n"
        f"{app_name}\n"
    )
    return send_email(booking['customer_email'], subject, body)


def send_contact_notification(enquiry: dict) -> bool:
    """Forward a website contact enquiry to the operator inbox."""
    config = current_app.config
    subject = f"New enquiry from {enquiry['name']}"
    body = (
        "New Contact Enquiry\n\n"
        f"Name: {enquiry['name']}\n"
        f"Email: {enquiry['email']}\n"
        f"Phone: {enquiry['phone']}\n"
        f"Message:\n{enquiry['message']}\n\n"
        "---\n"
        f"This is an automated notification from the {config.get('APP_NAME')} website.\n"
    )
    return send_email(config['MAIL_ADMIN'], subject, body, reply_to=enquiry['email'])


def send_review_notification(review: dict) -> bool:
    """Forward a website review of a driver or tour to the operator inbox."""
    config = current_app.config
    label = 'Driver' if review['type'] == 'driver' else 'Tour'
    subject = f"New {label} Review - {review['target_name']}"
    body = (
        "New Review Submission\n\n"
        f"Review Type: {label} Review\n"
        f"{label}: {review['target_name']}\n"
        f"Reviewer Name: {review['name']}\n"
        f"Rating: {review['rating']}/5\n"
        f"Review Text:\n{review['text']}\n\n"
        "---\n"
        f"This is an automated notification from the {config.get('APP_NAME')} website.\n"
    )
    return send_email(config['MAIL_ADMIN'], subject, body, reply_to=review.get('email') or None)
