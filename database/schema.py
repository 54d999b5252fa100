"""
Database schema definitions.
Table creation, indexes, and structure management.
"""


def drop_tables(db):
    """Drop all existing tables."""
    # Disable foreign key constraints before dropping
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'driver_reviews',
        'booking_status_history',
        'bookings',
        'driver_unavailability',
        'tour_price_brackets',
        'tours',
        'users',
        'drivers',
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    # Re-enable foreign key constraints
    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables."""

    # 1. Drivers & Users
    db.execute('''
        CREATE TABLE drivers (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT UNIQUE,
            phone TEXT,
            license_number TEXT,
            active INTEGER DEFAULT 1,
            user_id INTEGER,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            full_name TEXT,
            role TEXT NOT NULL CHECK (role IN ('admin', 'driver', 'member')),
            driver_id INTEGER REFERENCES drivers(id),
            active INTEGER DEFAULT 1,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            last_login TEXT
        )
    ''')

    # 2. Tours & Pricing
    db.execute('''
        CREATE TABLE tours (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            slug TEXT UNIQUE NOT NULL,
            name TEXT NOT NULL,
            duration TEXT,
            active INTEGER DEFAULT 1,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE tour_price_brackets (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            tour_id INTEGER NOT NULL REFERENCES tours(id) ON DELETE CASCADE,
            min_size INTEGER NOT NULL,
            max_size INTEGER NOT NULL,
            price_per_person REAL NOT NULL,
            CHECK (min_size >= 1 AND max_size >= min_size),
            UNIQUE(tour_id, min_size)
        )
    ''')

    # 3. Unavailability Ledger
    db.execute('''
        CREATE TABLE driver_unavailability (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            driver_id INTEGER NOT NULL REFERENCES drivers(id),
            date TEXT NOT NULL,
            reason TEXT,
            created_by INTEGER REFERENCES users(id),
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(driver_id, date)
        )
    ''')

    # 4. Bookings
    db.execute('''
        CREATE TABLE bookings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            tour_id INTEGER NOT NULL REFERENCES tours(id),
            driver_id INTEGER REFERENCES drivers(id),
            user_id INTEGER REFERENCES users(id),
            date TEXT NOT NULL,
            booking_time TEXT,
            group_size INTEGER NOT NULL CHECK (group_size BETWEEN 1 AND 22),
            customer_name TEXT NOT NULL,
            customer_email TEXT NOT NULL,
            customer_phone TEXT,
            price_per_person REAL NOT NULL,
            total_price REAL NOT NULL,
            status TEXT NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'confirmed', 'completed', 'cancelled')),
            special_requests TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    db.execute('''
        CREATE TABLE booking_status_history (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            booking_id INTEGER NOT NULL REFERENCES bookings(id),
            from_status TEXT,
            to_status TEXT NOT NULL,
            changed_by INTEGER REFERENCES users(id),
            notes TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 5. Driver Reviews (hidden until an admin approves them)
    db.execute('''
        CREATE TABLE driver_reviews (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            driver_id INTEGER NOT NULL REFERENCES drivers(id),
            user_id INTEGER NOT NULL REFERENCES users(id),
            booking_id INTEGER REFERENCES bookings(id),
            rating INTEGER NOT NULL CHECK (rating BETWEEN 1 AND 5),
            comment TEXT NOT NULL,
            approved INTEGER NOT NULL DEFAULT 0,
            approved_by INTEGER REFERENCES users(id),
            approved_at TEXT,
            created_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    ''')


def create_indexes(db):
    """Create indexes, including the booking uniqueness guard."""
    # At most one live booking per (driver, date). The booking commit relies on
    # this index: a second insert for the same slot raises IntegrityError.
    db.execute('''
        CREATE UNIQUE INDEX idx_bookings_driver_date_active
        ON bookings(driver_id, date)
        WHERE status IN ('pending', 'confirmed')
    ''')

    db.execute('CREATE INDEX idx_bookings_date ON bookings(date)')
    db.execute('CREATE INDEX idx_bookings_user ON bookings(user_id)')
    db.execute('CREATE INDEX idx_bookings_status ON bookings(status)')
    db.execute('CREATE INDEX idx_unavailability_date ON driver_unavailability(date)')
    db.execute('CREATE INDEX idx_status_history_booking ON booking_status_history(booking_id, created_at)')
    db.execute('CREATE INDEX idx_price_brackets_tour ON tour_price_brackets(tour_id, min_size)')
    db.execute('CREATE INDEX idx_reviews_driver ON driver_reviews(driver_id, approved)')
