"""
Database seed data.
Initial data population for fresh database installations.
"""

from werkzeug.security import generate_password_hash

# Group-size brackets shared by the day tours: (min_size, max_size)
DAY_TOUR_BRACKETS = [(1, 1), (2, 2), (3, 3), (4, 4), (5, 6), (7, 10), (11, 14), (15, 18), (19, 22)]

# Multi-day tours are priced from two people upwards
MULTI_DAY_BRACKETS = [(2, 2), (3, 4), (5, 6), (7, 10), (11, 14), (15, 18), (19, 22)]

TOURS = [
    # slug, name, duration, brackets, prices per person (ZAR)
    ('ct-city-table-mountain', 'Cape Town & Table Mountain City Tour', 'Full Day (8-9 hours)',
     DAY_TOUR_BRACKETS, [4500, 2500, 1900, 1600, 1350, 1100, 950, 850, 750]),
    ('cape-peninsula', 'Cape Peninsula Tour with Boulders Beach Penguins', 'Full Day (8-9 hours)',
     DAY_TOUR_BRACKETS, [5500, 3200, 2500, 2100, 1850, 1600, 1450, 1300, 1200]),
    ('garden-route-short', 'Garden Route Tour (3 Days / 2 Nights)', '3 Days / 2 Nights',
     MULTI_DAY_BRACKETS, [13500, 11800, 10900, 9800, 9200, 8700, 8300]),
    ('garden-route-extended', 'Garden Route Extended Tour (5 Days / 4 Nights)', '5 Days / 4 Nights',
     MULTI_DAY_BRACKETS, [22500, 19800, 18200, 16900, 15900, 14900, 14200]),
    ('wine-tour', 'Franschhoek Wine Tram & Winelands Tour', 'Full Day (8-9 hours)',
     DAY_TOUR_BRACKETS, [4200, 2400, 1850, 1550, 1300, 1100, 950, 850, 750]),
    ('aquila-safari', 'Aquila Private Game Reserve Safari', 'Full Day (8-9 hours)',
     DAY_TOUR_BRACKETS, [5900, 4500, 4000, 3700, 3400, 3200, 3000, 2900, 2800]),
    ('west-coast', 'West Coast Coastal & Wildflower Tour', 'Full Day (8-9 hours)',
     DAY_TOUR_BRACKETS, [5000, 2900, 2300, 1950, 1700, 1450, 1300, 1200, 1100]),
    ('overland-custom', 'Overland Custom Multiday Tour (7-14 Days)', '7-14 Days (Fully Bespoke)',
     MULTI_DAY_BRACKETS, [45000, 39000, 35000, 31000, 28500, 26500, 25000]),
]

DRIVERS = [
    ('Thabo M.', 'thabo@unicabtravel.co.za'),
    ('Leah K.', 'leah@unicabtravel.co.za'),
    ('Andre V.', 'andre@unicabtravel.co.za'),
    ('Zinhle P.', 'zinhle@unicabtravel.co.za'),
    ('Ahmed S.', 'ahmed@unicabtravel.co.za'),
]

# Default accounts: change these passwords after the first deployment
DEFAULT_USERS = [
    ('admin@unicabtravel.co.za', 'Admin123!', 'UNICAB Admin', 'admin', None),
    ('driver@unicabtravel.co.za', 'Driver123!', 'Thabo M.', 'driver', 'thabo@unicabtravel.co.za'),
    ('member@unicabtravel.co.za', 'Member123!', 'Test Member', 'member', None),
]


def seed_database(db):
    """Insert initial seed data."""

    # 1. Tours and price tables
    for slug, name, duration, brackets, prices in TOURS:
        cursor = db.execute('''
            INSERT INTO tours (slug, name, duration, active)
            VALUES (?, ?, ?, 1)
        ''', (slug, name, duration))
        tour_id = cursor.lastrowid

        for (min_size, max_size), price in zip(brackets, prices):
            db.execute('''
                INSERT INTO tour_price_brackets (tour_id, min_size, max_size, price_per_person)
                VALUES (?, ?, ?, ?)
            ''', (tour_id, min_size, max_size, price))

    # 2. Drivers
    for name, email in DRIVERS:
        db.execute('''
            INSERT INTO drivers (name, email, active)
            VALUES (?, ?, 1)
        ''', (name, email))

    # 3. Default users (one per role)
    for email, password, full_name, role, driver_email in DEFAULT_USERS:
        driver_id = None
        if driver_email:
            driver_id = db.execute(
                'SELECT id FROM drivers WHERE email = ?', (driver_email,)
            ).fetchone()[0]

        cursor = db.execute('''
            INSERT INTO users (email, password_hash, full_name, role, driver_id)
            VALUES (?, ?, ?, ?, ?)
        ''', (email, generate_password_hash(password), full_name, role, driver_id))

        if driver_id:
            db.execute('UPDATE drivers SET user_id = ? WHERE id = ?', (cursor.lastrowid, driver_id))
