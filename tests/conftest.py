"""
Pytest configuration and fixtures.
Ensures tests use an isolated test database, not the production database.
"""

import os
import pytest
from datetime import date, timedelta

os.environ['FLASK_ENV'] = 'test'

# Seeded IDs (see database/seed.py)
THABO = 1
LEAH = 2
ANDRE = 3
CITY_TOUR = 1
CAPE_PENINSULA = 2

USERS = {
    'admin': ('admin@unicabtravel.co.za', 'Admin123!'),
    'driver': ('driver@unicabtravel.co.za', 'Driver123!'),
    'member': ('member@unicabtravel.co.za', 'Member123!'),
}


def future_date(days: int = 30) -> str:
    """A date safely in the future, as YYYY-MM-DD."""
    return (date.today() + timedelta(days=days)).isoformat()


def past_date(days: int = 5) -> str:
    return (date.today() - timedelta(days=days)).isoformat()


def booking_payload(**overrides) -> dict:
    """A valid booking request body."""
    payload = {
        'tour_id': CAPE_PENINSULA,
        'driver_id': THABO,
        'date': future_date(),
        'group_size': 4,
        'customer_name': 'Jane Doe',
        'customer_email': 'jane@example.com',
        'customer_phone': '+27 82 123 4567',
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def app(tmp_path):
    """Create test application with an isolated SQLite file per test."""
    from app import create_app
    from database import init_db

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['DATABASE_PATH'] = str(tmp_path / 'unicab_test.db')

    with app.app_context():
        init_db()

    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


def login(app, role: str):
    """A fresh test client logged in as the seeded user for a role."""
    client = app.test_client()
    email, password = USERS[role]
    response = client.post('/api/auth/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.get_json()
    return client


@pytest.fixture
def admin_client(app):
    return login(app, 'admin')


@pytest.fixture
def driver_client(app):
    """Logged in as Thabo's driver account."""
    return login(app, 'driver')


@pytest.fixture
def member_client(app):
    return login(app, 'member')
