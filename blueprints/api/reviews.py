"""
Driver review API routes.
Anyone can read a driver's approved reviews; members with a confirmed or
completed booking with the driver can submit one for moderation.
"""

from flask_login import login_required, current_user

from blueprints.api.bookings import json_body
from models.driver import get_driver_by_id
from models.errors import DriverNotFound
from models.review import create_review, get_reviews, get_driver_rating
from models.role import Role
from utils.api_response import api_success
from utils.decorators import role_required
from utils.messages import get_message

PUBLIC_FIELDS = ('id', 'rating', 'comment', 'reviewer_name', 'created_at')


def register_routes(bp):
    """Register driver review API routes on the blueprint."""

    @bp.route('/drivers/<int:driver_id>/reviews')
    def driver_reviews(driver_id):
        """Approved reviews for a driver, newest first, with the average rating."""
        if not get_driver_by_id(driver_id, active_only=True):
            raise DriverNotFound(get_message('driver_not_found'))

        reviews = [
            {field: review[field] for field in PUBLIC_FIELDS}
            for review in get_reviews(driver_id=driver_id, approved=True)
        ]
        return api_success(data=reviews, rating=get_driver_rating(driver_id))

    @bp.route('/drivers/<int:driver_id>/reviews', methods=['POST'])
    @login_required
    @role_required(Role.MEMBER)
    def driver_review_create(driver_id):
        """
        Submit a review. It stays hidden until an admin approves it.

        Request body:
            {"rating": 1-5, "comment": "...", "booking_id": optional}
        """
        data = json_body()
        review = create_review(
            driver_id,
            current_user.id,
            rating=data.get('rating'),
            comment=data.get('comment'),
            booking_id=data.get('booking_id')
        )
        return api_success(message=get_message('review_submitted'), status=201, review=review)
