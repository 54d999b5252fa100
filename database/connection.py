"""
Database connection management.
Handles per-context connections, initialization, and teardown.
"""

import logging
import os
import sqlite3
from flask import g, current_app

logger = logging.getLogger(__name__)


def get_db():
    """
    Get the database connection for the current application context.

    Each application context (request, CLI command, worker thread) gets its
    own connection, so concurrent requests never share a connection.

    Returns:
        sqlite3.Connection: Database connection object
    """
    if 'db' not in g:
        db_path = current_app.config.get('DATABASE_PATH', 'instance/unicab.db')
        if db_path != ':memory:':
            directory = os.path.dirname(db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
        g.db = sqlite3.connect(
            db_path,
            timeout=current_app.config.get('SQLITE_TIMEOUT', 10)
        )
        g.db.row_factory = sqlite3.Row
        # Enable foreign key constraints
        g.db.execute('PRAGMA foreign_keys = ON')
        # WAL lets readers proceed while a booking commit holds the write lock
        g.db.execute('PRAGMA journal_mode = WAL')
    return g.db


def close_db(e=None):
    """
    Close database connection.

    Args:
        e: Exception if any (from Flask teardown context)
    """
    db = g.pop('db', None)
    if db is not None:
        db.close()


def init_db():
    """
    Initialize database: drop existing tables, create new schema, insert seed data.
    WARNING: This will delete all existing data!
    """
    from database.schema import drop_tables, create_tables, create_indexes
    from database.seed import seed_database

    db = get_db()

    # Drop existing tables (in reverse order of dependencies)
    drop_tables(db)

    # Create all tables
    create_tables(db)

    # Create indexes
    create_indexes(db)

    # Insert seed data
    seed_database(db)

    db.commit()
    logger.info("Database initialized at %s", current_app.config.get('DATABASE_PATH'))
