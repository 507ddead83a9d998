"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``, ``get_cursor``) and for applying migrations on
application start (``init_db``).  Repositories open one connection per
operation; no connection is shared between requests.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings


logger = logging.getLogger(__name__)

# Bounds of a SQLite INTEGER; larger Python ints cannot be bound as parameters.
SQLITE_MIN_INTEGER = -(2 ** 63)
SQLITE_MAX_INTEGER = 2 ** 63 - 1


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: accounts and todos
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS accounts (
            login TEXT PRIMARY KEY,
            password_hash TEXT NOT NULL,
            role TEXT NOT NULL DEFAULT 'USER',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        -- owner_name references accounts.login by value only; deleting an
        -- account leaves its todos in place.
        CREATE TABLE IF NOT EXISTS todos (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            priority TEXT,
            description TEXT,
            completed INTEGER NOT NULL DEFAULT 0,
            owner_name TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: indexes backing the search query shapes
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS ix_todos_owner_name ON todos (owner_name);
        CREATE INDEX IF NOT EXISTS ix_todos_name ON todos (name);
        CREATE INDEX IF NOT EXISTS ix_todos_priority ON todos (priority);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection with rows keyed by column name."""
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor, commits on success and always closes the connection."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.  Afterwards the bootstrap administrator
    is seeded when configured.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied migration %s", version)
                current_version = version

        _seed_bootstrap_admin(cursor)


def _seed_bootstrap_admin(cursor: sqlite3.Cursor) -> None:
    """Insert the configured administrator if no account exists yet."""
    login = settings.bootstrap_admin_login
    password = settings.bootstrap_admin_password
    if not login or not password:
        return
    row = cursor.execute("SELECT COUNT(*) AS count FROM accounts").fetchone()
    if row["count"]:
        return
    from .security import hash_password

    cursor.execute(
        "INSERT INTO accounts (login, password_hash, role) VALUES (?, ?, 'ADMIN')",
        (login, hash_password(password)),
    )
    logger.info("Seeded bootstrap administrator %s", login)
