"""
Tests for driver reviews and their moderation.
"""

import pytest

from tests.conftest import THABO, LEAH, CAPE_PENINSULA, booking_payload, future_date

CUSTOMER = {'name': 'Member Guest', 'email': 'member@unicabtravel.co.za'}
COMMENT = 'Thabo was punctual and knew every lookout point.'


def _member_id(app):
    from models.user import get_user_by_email

    with app.app_context():
        return get_user_by_email('member@unicabtravel.co.za')['id']


def _member_booking(app, status='confirmed', driver_id=THABO, days=30):
    """A booking made from the seeded member account, moved to a status."""
    from models.booking import create_booking
    from models.booking_state import update_booking_status

    with app.app_context():
        booking, _ = create_booking(CAPE_PENINSULA, driver_id, future_date(days), 2, CUSTOMER,
                                    user_id=_member_id(app))
        if status in ('confirmed', 'completed'):
            update_booking_status(booking['id'], 'confirmed')
        if status == 'completed':
            update_booking_status(booking['id'], 'completed')
        return booking['id']


class TestCreateReview:

    @pytest.mark.parametrize('status', ['confirmed', 'completed'])
    def test_eligible_booking_creates_hidden_review(self, app, status):
        from models.review import create_review

        booking_id = _member_booking(app, status)
        with app.app_context():
            review = create_review(THABO, _member_id(app), 5, COMMENT, booking_id=booking_id)

        assert review['approved'] == 0
        assert review['booking_id'] == booking_id
        assert review['driver_name'] == 'Thabo M.'

    def test_pending_booking_is_not_enough(self, app):
        from models.errors import ReviewNotAllowed
        from models.review import create_review

        _member_booking(app, 'pending')
        with app.app_context():
            with pytest.raises(ReviewNotAllowed):
                create_review(THABO, _member_id(app), 5, COMMENT)

    def test_no_booking_with_this_driver(self, app):
        from models.errors import ReviewNotAllowed
        from models.review import create_review

        _member_booking(app, 'confirmed', driver_id=LEAH)
        with app.app_context():
            with pytest.raises(ReviewNotAllowed):
                create_review(THABO, _member_id(app), 4, COMMENT)

    def test_booking_id_must_be_an_eligible_booking(self, app):
        from models.errors import ReviewNotAllowed
        from models.review import create_review

        _member_booking(app, 'confirmed', days=30)
        pending_id = _member_booking(app, 'pending', days=31)
        with app.app_context():
            with pytest.raises(ReviewNotAllowed):
                create_review(THABO, _member_id(app), 4, COMMENT, booking_id=pending_id)

    def test_rating_and_comment_validated_together(self, app):
        from models.errors import InvalidReview
        from models.review import create_review

        with app.app_context():
            with pytest.raises(InvalidReview) as exc_info:
                create_review(THABO, _member_id(app), 6, 'Great')

        assert [e['field'] for e in exc_info.value.errors] == ['rating', 'comment']

    def test_unknown_driver(self, app):
        from models.errors import DriverNotFound
        from models.review import create_review

        with app.app_context():
            with pytest.raises(DriverNotFound):
                create_review(999, _member_id(app), 4, COMMENT)


class TestModeration:

    def test_approve_publishes_and_rates(self, app):
        from models.review import approve_review, create_review, get_driver_rating, get_reviews

        _member_booking(app)
        with app.app_context():
            first = create_review(THABO, _member_id(app), 5, COMMENT)
            create_review(THABO, _member_id(app), 2, 'Second trip was late by an hour.')

            assert get_reviews(driver_id=THABO, approved=True) == []
            assert len(get_reviews(approved=False)) == 2

            approved = approve_review(first['id'], approved_by=1)
            assert approved['approved'] == 1
            assert approved['approved_by'] == 1

            assert [r['id'] for r in get_reviews(driver_id=THABO, approved=True)] == [first['id']]
            assert get_driver_rating(THABO) == {'average': 5.0, 'count': 1}

    def test_reject_deletes(self, app):
        from models.errors import NotFound
        from models.review import create_review, get_review_by_id, reject_review

        _member_booking(app)
        with app.app_context():
            review = create_review(THABO, _member_id(app), 3, COMMENT)
            reject_review(review['id'])
            assert get_review_by_id(review['id']) is None

            with pytest.raises(NotFound):
                reject_review(review['id'])

    def test_approve_unknown(self, app):
        from models.errors import NotFound
        from models.review import approve_review

        with app.app_context():
            with pytest.raises(NotFound):
                approve_review(999, approved_by=1)


class TestReviewRoutes:

    def _confirmed_booking(self, member_client, admin_client):
        booking_id = member_client.post(
            '/api/bookings', json=booking_payload(date=future_date(40))
        ).get_json()['booking']['id']
        admin_client.patch(f'/api/bookings/{booking_id}', json={'status': 'confirmed'})
        return booking_id

    def test_submit_moderate_and_list(self, client, member_client, admin_client):
        booking_id = self._confirmed_booking(member_client, admin_client)

        response = member_client.post(f'/api/drivers/{THABO}/reviews', json={
            'rating': 5, 'comment': COMMENT, 'booking_id': booking_id
        })
        assert response.status_code == 201
        review_id = response.get_json()['review']['id']

        assert client.get(f'/api/drivers/{THABO}/reviews').get_json()['data'] == []

        queue = admin_client.get('/api/admin/reviews?approved=0').get_json()['data']
        assert [r['id'] for r in queue] == [review_id]

        response = admin_client.patch(f'/api/admin/reviews/{review_id}', json={'approved': True})
        assert response.status_code == 200

        data = client.get(f'/api/drivers/{THABO}/reviews').get_json()
        assert [r['comment'] for r in data['data']] == [COMMENT]
        assert 'user_id' not in data['data'][0]
        assert data['rating'] == {'average': 5.0, 'count': 1}

        assert admin_client.get('/api/admin/reviews?approved=0').get_json()['count'] == 0

    def test_reject_route(self, member_client, admin_client):
        self._confirmed_booking(member_client, admin_client)
        review_id = member_client.post(f'/api/drivers/{THABO}/reviews', json={
            'rating': 4, 'comment': COMMENT
        }).get_json()['review']['id']

        assert admin_client.delete(f'/api/admin/reviews/{review_id}').status_code == 200
        response = admin_client.delete(f'/api/admin/reviews/{review_id}')
        assert response.status_code == 404
        assert response.get_json()['error'] == 'NotFound'

    def test_member_without_booking_is_forbidden(self, member_client):
        response = member_client.post(f'/api/drivers/{THABO}/reviews', json={
            'rating': 5, 'comment': COMMENT
        })
        assert response.status_code == 403
        assert response.get_json()['error'] == 'ReviewNotAllowed'

    def test_short_comment(self, member_client, admin_client):
        self._confirmed_booking(member_client, admin_client)
        response = member_client.post(f'/api/drivers/{THABO}/reviews', json={
            'rating': 5, 'comment': 'Nice'
        })
        assert response.status_code == 400
        assert response.get_json()['error'] == 'InvalidReview'

    def test_only_members_submit(self, client, driver_client):
        payload = {'rating': 5, 'comment': COMMENT}
        assert client.post(f'/api/drivers/{THABO}/reviews', json=payload).status_code == 401
        assert driver_client.post(f'/api/drivers/{THABO}/reviews', json=payload).status_code == 403

    def test_moderation_is_admin_only(self, member_client, driver_client):
        assert member_client.get('/api/admin/reviews').status_code == 403
        assert driver_client.delete('/api/admin/reviews/1').status_code == 403

    def test_bad_filters_and_flags(self, admin_client):
        assert admin_client.get('/api/admin/reviews?approved=yes').status_code == 400
        assert admin_client.patch('/api/admin/reviews/1', json={'approved': False}).status_code == 400

    def test_unknown_driver_reviews(self, client):
        assert client.get('/api/drivers/999/reviews').status_code == 404
