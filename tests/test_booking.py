"""
Tests for booking creation: validation, pricing, the slot guard and shortlists.
"""

import logging
import threading

import pytest

from tests.conftest import THABO, LEAH, ANDRE, CAPE_PENINSULA, future_date, past_date

CUSTOMER = {'name': 'Jane Doe', 'email': 'jane@example.com', 'phone': '+27 82 123 4567'}


def _active_count(app, driver_id, day):
    from database import get_db

    with app.app_context():
        row = get_db().execute('''
            SELECT COUNT(*) AS n FROM bookings
            WHERE driver_id = ? AND date = ? AND status IN ('pending', 'confirmed')
        ''', (driver_id, day)).fetchone()
        return row['n']


class TestCreateBooking:

    def test_creates_pending_booking_with_price(self, app):
        from models.booking import create_booking

        day = future_date()
        with app.app_context():
            booking, rejected = create_booking(CAPE_PENINSULA, THABO, day, 4, CUSTOMER)

        assert booking['status'] == 'pending'
        assert booking['driver_id'] == THABO
        assert booking['date'] == day
        assert booking['price_per_person'] == 2100
        assert booking['total_price'] == 8400
        assert booking['tour_name'].startswith('Cape Peninsula')
        assert rejected == []

    def test_creation_recorded_in_history(self, app):
        from models.booking import create_booking
        from models.booking_state import get_status_history

        with app.app_context():
            booking, _ = create_booking(CAPE_PENINSULA, THABO, future_date(), 2, CUSTOMER)
            history = get_status_history(booking['id'])

        assert len(history) == 1
        assert history[0]['from_status'] is None
        assert history[0]['to_status'] == 'pending'

    def test_member_user_id_stored(self, app):
        from models.booking import create_booking

        with app.app_context():
            booking, _ = create_booking(CAPE_PENINSULA, THABO, future_date(), 2, CUSTOMER, user_id=3)
        assert booking['user_id'] == 3

    def test_group_size_too_large_writes_nothing(self, app):
        from database import get_db
        from models.booking import create_booking
        from models.errors import InvalidGroupSize

        with app.app_context():
            with pytest.raises(InvalidGroupSize):
                create_booking(CAPE_PENINSULA, THABO, future_date(), 23, CUSTOMER)
            assert get_db().execute('SELECT COUNT(*) FROM bookings').fetchone()[0] == 0

    def test_past_date(self, app):
        from models.booking import create_booking
        from models.errors import InvalidDate

        with app.app_context():
            with pytest.raises(InvalidDate):
                create_booking(CAPE_PENINSULA, THABO, past_date(), 2, CUSTOMER)

    def test_bad_customer(self, app):
        from models.booking import create_booking
        from models.errors import InvalidCustomer

        with app.app_context():
            with pytest.raises(InvalidCustomer) as exc_info:
                create_booking(CAPE_PENINSULA, THABO, future_date(), 2, {'name': 'J', 'email': 'nope'})

        fields = {e['field'] for e in exc_info.value.errors}
        assert fields == {'customer_name', 'customer_email'}

    def test_all_validation_errors_reported_together(self, app):
        from models.booking import create_booking
        from models.errors import ValidationError

        with app.app_context():
            with pytest.raises(ValidationError) as exc_info:
                create_booking(CAPE_PENINSULA, THABO, '2025/12/10', 0, {'name': 'Jane', 'email': 'bad'})

        kinds = [e['kind'] for e in exc_info.value.errors]
        assert kinds == ['InvalidDate', 'InvalidGroupSize', 'InvalidCustomer']
        assert exc_info.value.kind == 'InvalidDate'

    def test_unknown_tour(self, app):
        from models.booking import create_booking
        from models.errors import TourNotFound

        with app.app_context():
            with pytest.raises(TourNotFound):
                create_booking(999, THABO, future_date(), 2, CUSTOMER)

    def test_inactive_driver(self, app):
        from models.booking import create_booking
        from models.driver import set_driver_active
        from models.errors import DriverNotFound

        with app.app_context():
            set_driver_active(ANDRE, False)
            with pytest.raises(DriverNotFound):
                create_booking(CAPE_PENINSULA, ANDRE, future_date(), 2, CUSTOMER)


class TestStartTime:
    """Optional HH:MM start time; the tour must be over by 20:00."""

    def test_stored_when_valid(self, app):
        from models.booking import create_booking

        with app.app_context():
            booking, _ = create_booking(CAPE_PENINSULA, THABO, future_date(), 2, CUSTOMER, booking_time='09:00')
        assert booking['booking_time'] == '09:00'

    def test_omitted_is_null(self, app):
        from models.booking import create_booking

        with app.app_context():
            booking, _ = create_booking(CAPE_PENINSULA, THABO, future_date(), 2, CUSTOMER)
        assert booking['booking_time'] is None

    @pytest.mark.parametrize('value', ['9am', '9:00', '24:00', '12:60', '0900'])
    def test_bad_format(self, app, value):
        from models.booking import create_booking
        from models.errors import InvalidTime

        with app.app_context():
            with pytest.raises(InvalidTime) as exc_info:
                create_booking(CAPE_PENINSULA, THABO, future_date(), 2, CUSTOMER, booking_time=value)
        assert exc_info.value.errors[0]['field'] == 'booking_time'

    def test_ending_exactly_at_cutoff_is_allowed(self, app):
        from models.booking import create_booking

        # "Full Day (8-9 hours)" counts as 8.5 hours
        with app.app_context():
            booking, _ = create_booking(CAPE_PENINSULA, THABO, future_date(), 2, CUSTOMER, booking_time='11:30')
        assert booking['status'] == 'pending'

    def test_ending_after_cutoff_writes_nothing(self, app):
        from database import get_db
        from models.booking import create_booking
        from models.errors import InvalidTime

        with app.app_context():
            with pytest.raises(InvalidTime) as exc_info:
                create_booking(CAPE_PENINSULA, THABO, future_date(), 2, CUSTOMER, booking_time='12:00')
            assert get_db().execute('SELECT COUNT(*) FROM bookings').fetchone()[0] == 0

        assert '20:30' in exc_info.value.message

    def test_multi_day_tour_uses_default_hours(self, app):
        from models.booking import create_booking
        from models.errors import InvalidTime

        garden_route = 3
        with app.app_context():
            create_booking(garden_route, THABO, future_date(), 2, CUSTOMER, booking_time='12:00')
            with pytest.raises(InvalidTime):
                create_booking(garden_route, LEAH, future_date(), 2, CUSTOMER, booking_time='12:01')


class TestSlotGuard:
    """At most one pending/confirmed booking per (driver, date)."""

    def test_second_booking_fails_precheck(self, app, caplog):
        from models.booking import create_booking
        from models.errors import DriverUnavailable

        day = future_date(70)
        with app.app_context():
            create_booking(CAPE_PENINSULA, THABO, day, 2, CUSTOMER)
            with caplog.at_level(logging.INFO, logger='models.booking'):
                with pytest.raises(DriverUnavailable):
                    create_booking(CAPE_PENINSULA, THABO, day, 3, CUSTOMER)

        assert _active_count(app, THABO, day) == 1
        assert any(r.levelno == logging.INFO and 'Pre-check' in r.getMessage() for r in caplog.records)

    def test_stale_precheck_caught_at_commit(self, app, monkeypatch, caplog):
        """Both requests pass the pre-check; the unique index rejects the second insert."""
        import models.booking
        from models.booking import create_booking
        from models.errors import DriverAlreadyBooked

        monkeypatch.setattr(models.booking, 'is_driver_available', lambda driver_id, day: True)

        day = future_date(71)
        with app.app_context():
            create_booking(CAPE_PENINSULA, THABO, day, 2, CUSTOMER)
            with caplog.at_level(logging.WARNING, logger='models.booking'):
                with pytest.raises(DriverAlreadyBooked):
                    create_booking(CAPE_PENINSULA, THABO, day, 2, CUSTOMER)

        assert _active_count(app, THABO, day) == 1
        assert any(r.levelno == logging.WARNING and 'race' in r.getMessage() for r in caplog.records)

    def test_block_written_after_precheck(self, app, monkeypatch):
        import models.booking
        from models.booking import create_booking
        from models.driver_unavailability import block_date
        from models.errors import DriverUnavailable

        monkeypatch.setattr(models.booking, 'is_driver_available', lambda driver_id, day: True)

        day = future_date(72)
        with app.app_context():
            block_date(THABO, day)
            with pytest.raises(DriverUnavailable):
                create_booking(CAPE_PENINSULA, THABO, day, 2, CUSTOMER)

        assert _active_count(app, THABO, day) == 0

    def test_deactivation_after_precheck(self, app, monkeypatch):
        import models.booking
        from models.booking import create_booking
        from models.driver import set_driver_active
        from models.errors import DriverNotFound

        def deactivate_then_pass(driver_id, day):
            set_driver_active(driver_id, False)
            return True

        monkeypatch.setattr(models.booking, 'is_driver_available', deactivate_then_pass)

        day = future_date(75)
        with app.app_context():
            with pytest.raises(DriverNotFound):
                create_booking(CAPE_PENINSULA, THABO, day, 2, CUSTOMER)

        assert _active_count(app, THABO, day) == 0

    def test_rebook_after_cancellation(self, app):
        from models.booking import create_booking
        from models.booking_state import update_booking_status

        day = future_date(73)
        with app.app_context():
            first, _ = create_booking(CAPE_PENINSULA, THABO, day, 2, CUSTOMER)
            update_booking_status(first['id'], 'cancelled')
            second, _ = create_booking(CAPE_PENINSULA, THABO, day, 2, CUSTOMER)

        assert second['id'] != first['id']
        assert _active_count(app, THABO, day) == 1

    def test_concurrent_bookings_exactly_one_wins(self, app):
        from models.booking import create_booking
        from models.errors import DriverAlreadyBooked, DriverUnavailable

        day = future_date(74)
        barrier = threading.Barrier(2)
        results = []
        lock = threading.Lock()

        def attempt(name):
            with app.app_context():
                barrier.wait()
                try:
                    booking, _ = create_booking(
                        CAPE_PENINSULA, THABO, day, 2, {'name': name, 'email': 'race@example.com'}
                    )
                    outcome = ('booked', booking['id'])
                except (DriverUnavailable, DriverAlreadyBooked) as e:
                    outcome = ('rejected', e.kind)
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=attempt, args=(name,)) for name in ('Alice', 'Bob')]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert sorted(r[0] for r in results) == ['booked', 'rejected']
        rejected_kind = next(r[1] for r in results if r[0] == 'rejected')
        assert rejected_kind in ('DriverUnavailable', 'DriverAlreadyBooked')
        assert _active_count(app, THABO, day) == 1


class TestShortlist:

    def test_first_available_candidate_wins(self, app):
        from models.booking import create_booking

        day = future_date(80)
        with app.app_context():
            create_booking(CAPE_PENINSULA, THABO, day, 2, CUSTOMER)
            booking, rejected = create_booking(CAPE_PENINSULA, [THABO, LEAH], day, 2, CUSTOMER)

        assert booking['driver_id'] == LEAH
        assert rejected == [{'driver_id': THABO, 'error': 'DriverUnavailable'}]

    def test_first_candidate_preferred_when_free(self, app):
        from models.booking import create_booking

        with app.app_context():
            booking, rejected = create_booking(CAPE_PENINSULA, [LEAH, THABO], future_date(81), 2, CUSTOMER)

        assert booking['driver_id'] == LEAH
        assert rejected == []

    def test_all_candidates_unavailable(self, app):
        from models.booking import create_booking
        from models.driver_unavailability import block_date
        from models.errors import DriverUnavailable

        day = future_date(82)
        with app.app_context():
            create_booking(CAPE_PENINSULA, THABO, day, 2, CUSTOMER)
            block_date(LEAH, day)
            with pytest.raises(DriverUnavailable) as exc_info:
                create_booking(CAPE_PENINSULA, [THABO, LEAH], day, 2, CUSTOMER)

        rejected = exc_info.value.to_extra()['rejected_candidates']
        assert [r['driver_id'] for r in rejected] == [THABO, LEAH]

    @pytest.mark.parametrize('shortlist', [[], [THABO, LEAH, ANDRE], [THABO, THABO], None])
    def test_invalid_shortlist(self, app, shortlist):
        from models.booking import create_booking
        from models.errors import InvalidShortlist

        with app.app_context():
            with pytest.raises(InvalidShortlist):
                create_booking(CAPE_PENINSULA, shortlist, future_date(), 2, CUSTOMER)


class TestBookingQueries:

    def test_filters(self, app):
        from models.booking import create_booking, get_bookings, get_bookings_for_driver, get_bookings_for_member

        with app.app_context():
            create_booking(CAPE_PENINSULA, THABO, future_date(90), 2, CUSTOMER, user_id=3)
            create_booking(CAPE_PENINSULA, LEAH, future_date(91), 2, CUSTOMER)

            assert len(get_bookings()) == 2
            assert len(get_bookings(driver_id=THABO)) == 1
            assert len(get_bookings(date_from=future_date(91))) == 1
            assert len(get_bookings(status='confirmed')) == 0
            assert [b['driver_id'] for b in get_bookings_for_driver(THABO)] == [THABO]
            assert len(get_bookings_for_member(3)) == 1
