"""
SQLite integration and a minimal migration runner.

``get_connection`` opens a request-scoped connection, ``get_cursor``
wraps one for short helpers, ``write_transaction`` holds the database
write lock for a read-modify-write sequence, ``read_transaction`` pins
a consistent snapshot for multi-query reads and ``init_db`` applies
pending schema migrations at startup.

Connections run in autocommit mode (``isolation_level=None``) so that
transactions are always opened explicitly.  Applied migration versions
are recorded in the ``migrations`` table.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)

# Range of SQLite INTEGER; larger Python ints cannot be bound as parameters.
SQLITE_MIN_INTEGER = -(2**63)
SQLITE_MAX_INTEGER = 2**63 - 1

MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS recommendations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            link TEXT NOT NULL,
            score INTEGER NOT NULL DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    (
        2,
        """
        -- Ranking and weighted draws read the pool ordered by score.
        CREATE INDEX IF NOT EXISTS idx_recommendations_score ON recommendations(score);
        """,
    ),
]


def get_database_path() -> str:
    """Return the SQLite file path for ``settings.database_url``.

    Absolute paths are used as is; relative ones are resolved against
    the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # recommendations_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Open a new connection with name-addressable rows."""
    conn = sqlite3.connect(
        get_database_path(),
        timeout=settings.database_timeout,
        isolation_level=None,
    )
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Yield a cursor and close its connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
    finally:
        conn.close()


@contextmanager
def _transaction(begin_statement: str) -> Iterator[sqlite3.Connection]:
    conn = get_connection()
    try:
        conn.execute(begin_statement)
        try:
            yield conn
        except BaseException:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        conn.execute("COMMIT")
    finally:
        conn.close()


def write_transaction():
    """Run the enclosed statements in a single ``BEGIN IMMEDIATE`` transaction.

    The write lock is taken before the first read, so a concurrent
    writer blocks (up to ``settings.database_timeout``) instead of
    reading a score that is about to change.  Any exception rolls the
    transaction back and is re-raised.
    """
    return _transaction("BEGIN IMMEDIATE")


def read_transaction():
    """Run the enclosed reads against one consistent snapshot."""
    return _transaction("BEGIN DEFERRED")


def init_db() -> None:
    """Create the database file if needed and apply pending migrations."""
    with get_cursor() as cursor:
        cursor.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                current_version = version
                logger.info("Applied migration %s", version)
