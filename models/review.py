"""
Driver reviews.
Members review drivers they have a confirmed or completed booking with.
Reviews stay hidden until an admin approves them; rejecting deletes them.
"""

import logging

from database import get_db
from models.booking import get_bookings
from models.driver import get_driver_by_id
from models.errors import DriverNotFound, InvalidReview, NotFound, ReviewNotAllowed, ValidationError
from utils.messages import get_message
from utils.validators import sanitize_input, validate_positive_integer

logger = logging.getLogger(__name__)

REVIEWABLE_STATUSES = ('confirmed', 'completed')
MIN_COMMENT_LENGTH = 10

REVIEW_SELECT = '''
    SELECT r.*, d.name AS driver_name, u.full_name AS reviewer_name
    FROM driver_reviews r
    JOIN drivers d ON r.driver_id = d.id
    JOIN users u ON r.user_id = u.id
'''


def get_reviewable_bookings(driver_id: int, user_id: int) -> list:
    """A member's confirmed or completed bookings with a driver."""
    return [
        b for b in get_bookings(driver_id=driver_id, user_id=user_id)
        if b['status'] in REVIEWABLE_STATUSES
    ]


def create_review(driver_id: int, user_id: int, rating, comment: str, booking_id=None) -> dict:
    """
    Submit a review for a driver. New reviews are not approved.

    Args:
        driver_id: Driver being reviewed
        user_id: Member submitting the review
        rating: Whole number 1-5
        comment: At least 10 characters
        booking_id: Optional booking the review is about

    Returns:
        The new review dict

    Raises:
        InvalidReview: Bad rating, comment or booking_id
        DriverNotFound: Unknown driver
        ReviewNotAllowed: No confirmed or completed booking with the driver,
            or booking_id is not one of them
    """
    errors = []
    field_error = ValidationError.field_error

    valid, rating, _ = validate_positive_integer(rating, 'rating')
    if not valid or rating > 5:
        errors.append(field_error(InvalidReview.kind, 'rating', get_message('invalid_rating')))

    comment = sanitize_input(comment, 2000)
    if len(comment) < MIN_COMMENT_LENGTH:
        errors.append(field_error(InvalidReview.kind, 'comment', get_message('invalid_review_comment')))

    if booking_id is not None:
        valid, booking_id, error = validate_positive_integer(booking_id, 'booking_id')
        if not valid:
            errors.append(field_error(InvalidReview.kind, 'booking_id', error))

    if errors:
        raise ValidationError.collect(errors)

    if not get_driver_by_id(driver_id):
        raise DriverNotFound(get_message('driver_not_found'))

    eligible = {b['id'] for b in get_reviewable_bookings(driver_id, user_id)}
    if not eligible or (booking_id is not None and booking_id not in eligible):
        raise ReviewNotAllowed(get_message('review_requires_booking'))

    db = get_db()
    cursor = db.execute('''
        INSERT INTO driver_reviews (driver_id, user_id, booking_id, rating, comment, approved)
        VALUES (?, ?, ?, ?, ?, 0)
    ''', (driver_id, user_id, booking_id, rating, comment))
    db.commit()

    logger.info("Review %s submitted for driver %s by user %s", cursor.lastrowid, driver_id, user_id)
    return get_review_by_id(cursor.lastrowid)


def get_review_by_id(review_id: int) -> dict:
    db = get_db()
    row = db.execute(REVIEW_SELECT + ' WHERE r.id = ?', (review_id,)).fetchone()
    return dict(row) if row else None


def get_reviews(driver_id: int = None, approved: bool = None) -> list:
    """
    List reviews, newest first.

    Args:
        driver_id: Only this driver's reviews
        approved: True for approved only, False for the moderation queue,
            None for both

    Returns:
        List of review dicts with driver_name and reviewer_name
    """
    conditions = []
    params = []
    if driver_id is not None:
        conditions.append('r.driver_id = ?')
        params.append(driver_id)
    if approved is not None:
        conditions.append('r.approved = ?')
        params.append(1 if approved else 0)

    query = REVIEW_SELECT
    if conditions:
        query += ' WHERE ' + ' AND '.join(conditions)
    query += ' ORDER BY r.created_at DESC, r.id DESC'

    return [dict(row) for row in get_db().execute(query, params).fetchall()]


def get_driver_rating(driver_id: int) -> dict:
    """Average rating and count over a driver's approved reviews."""
    row = get_db().execute('''
        SELECT ROUND(AVG(rating), 1) AS average, COUNT(*) AS count
        FROM driver_reviews
        WHERE driver_id = ? AND approved = 1
    ''', (driver_id,)).fetchone()
    return {'average': row['average'], 'count': row['count']}


def approve_review(review_id: int, approved_by: int) -> dict:
    """
    Publish a review.

    Raises:
        NotFound: Unknown review
    """
    db = get_db()
    cursor = db.execute('''
        UPDATE driver_reviews
        SET approved = 1, approved_by = ?, approved_at = CURRENT_TIMESTAMP
        WHERE id = ?
    ''', (approved_by, review_id))
    db.commit()

    if cursor.rowcount == 0:
        raise NotFound(get_message('review_not_found'))

    logger.info("Review %s approved by user %s", review_id, approved_by)
    return get_review_by_id(review_id)


def reject_review(review_id: int) -> None:
    """
    Reject a review by deleting it.

    Raises:
        NotFound: Unknown review
    """
    db = get_db()
    cursor = db.execute('DELETE FROM driver_reviews WHERE id = ?', (review_id,))
    db.commit()

    if cursor.rowcount == 0:
        raise NotFound(get_message('review_not_found'))

    logger.info("Review %s rejected", review_id)
