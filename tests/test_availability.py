"""
Tests for the driver availability index.
"""

from tests.conftest import THABO, LEAH, ANDRE, booking_payload, future_date


class TestAvailableDrivers:

    def test_all_active_drivers_free_by_default(self, app):
        from models.availability import get_available_drivers

        with app.app_context():
            drivers = get_available_drivers(future_date(), 4)
        assert len(drivers) == 5

    def test_blocked_and_booked_drivers_excluded(self, app):
        from models.availability import get_available_drivers, get_unavailable_driver_ids
        from models.booking import create_booking
        from models.driver_unavailability import block_date

        day = future_date(60)
        with app.app_context():
            block_date(LEAH, day)
            create_booking(2, THABO, day, 2, {'name': 'Jane Doe', 'email': 'jane@example.com'})

            ids = {d['id'] for d in get_available_drivers(day, 2)}
            assert THABO not in ids
            assert LEAH not in ids
            assert ANDRE in ids
            assert get_unavailable_driver_ids(day) == {THABO, LEAH}

            # Other dates are unaffected
            assert len(get_available_drivers(future_date(61), 2)) == 5

    def test_cancelled_booking_frees_driver(self, app):
        from models.availability import is_driver_available
        from models.booking import create_booking
        from models.booking_state import update_booking_status

        day = future_date(62)
        with app.app_context():
            booking, _ = create_booking(2, THABO, day, 2, {'name': 'Jane Doe', 'email': 'jane@example.com'})
            assert is_driver_available(THABO, day) is False

            update_booking_status(booking['id'], 'cancelled')
            assert is_driver_available(THABO, day) is True

    def test_inactive_driver_hidden(self, app):
        from models.availability import get_available_drivers
        from models.driver import set_driver_active

        with app.app_context():
            set_driver_active(ANDRE, False)
            ids = {d['id'] for d in get_available_drivers(future_date(), 2)}
        assert ANDRE not in ids

    def test_group_size_does_not_narrow_result(self, app):
        from models.availability import get_available_drivers

        with app.app_context():
            assert len(get_available_drivers(future_date(), 1)) == len(get_available_drivers(future_date(), 22))


class TestAvailabilityRoute:

    def test_availability_after_booking(self, client):
        day = future_date(63)
        response = client.post('/api/bookings', json=booking_payload(date=day))
        assert response.status_code == 201

        response = client.get(f'/api/availability?date={day}&groupSize=4')
        assert response.status_code == 200
        data = response.get_json()
        ids = [d['id'] for d in data['drivers']]
        assert THABO not in ids
        assert data['unavailable_count'] == 1

    def test_invalid_date_format(self, client):
        response = client.get('/api/availability?date=12/10/2025&groupSize=4')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'InvalidDate'

    def test_missing_date(self, client):
        response = client.get('/api/availability')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'InvalidDate'

    def test_invalid_group_size(self, client):
        response = client.get(f'/api/availability?date={future_date()}&groupSize=0')
        assert response.status_code == 400
        assert response.get_json()['error'] == 'InvalidGroupSize'
