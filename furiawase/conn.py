"""
Database connection management for furiawase.

The reading dictionary lives in a small SQLite database (one row per
kanji, one row per reading). A module-level connection serves
single-threaded use; ``with_connection`` temporarily overrides it for
the current thread.
"""

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple, Union

from furiawase.settings import DB_PATH

# Thread-local storage for connections
_local = threading.local()

# Global connection for single-threaded use
_connection: Optional[sqlite3.Connection] = None


SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kanji (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    character TEXT UNIQUE NOT NULL,
    grade INTEGER,
    strokes INTEGER,
    freq INTEGER,
    jlpt INTEGER
);

CREATE TABLE IF NOT EXISTS kanji_reading (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    kanji_id INTEGER NOT NULL,
    reading TEXT NOT NULL,
    type TEXT NOT NULL,
    ord INTEGER DEFAULT 0,
    FOREIGN KEY (kanji_id) REFERENCES kanji(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_kanji_char ON kanji(character);
CREATE INDEX IF NOT EXISTS idx_kanji_reading_kanji ON kanji_reading(kanji_id);
"""


def _open(db_path: Union[str, Path]) -> sqlite3.Connection:
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_connection() -> sqlite3.Connection:
    """Get the current database connection, opening the default one if needed."""
    conn = getattr(_local, 'connection', None)
    if conn is not None:
        return conn

    if _connection is not None:
        return _connection

    return connect()


def connect(db_path: Optional[Union[str, Path]] = None) -> sqlite3.Connection:
    """
    Open the reading database and make it the global connection.

    Args:
        db_path: Path to the SQLite file, or ':memory:'. Defaults to
            settings.DB_PATH.

    Returns:
        SQLite connection object.
    """
    global _connection

    if db_path is None:
        db_path = DB_PATH

    if str(db_path) != ':memory:':
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    if _connection is not None:
        _connection.close()

    _connection = _open(db_path)
    return _connection


def close():
    """Close the current database connection."""
    global _connection

    conn = getattr(_local, 'connection', None)
    if conn is not None:
        conn.close()
        _local.connection = None

    if _connection is not None:
        _connection.close()
        _connection = None


@contextmanager
def with_connection(db_path: Optional[Union[str, Path]] = None):
    """
    Use a different database for the current thread.

    Args:
        db_path: Database to open for the duration of the block. If None,
            the current connection is used.

    Yields:
        SQLite connection object.
    """
    old_conn = getattr(_local, 'connection', None)
    opened = None

    try:
        if db_path:
            opened = _open(db_path)
            _local.connection = opened
        else:
            _local.connection = get_connection()
        yield _local.connection
    finally:
        if opened is not None:
            opened.close()
        _local.connection = old_conn


def create_schema():
    """Create the reading tables if they don't exist."""
    get_connection().executescript(SCHEMA_SQL)


def query(sql: str, params: Tuple = ()) -> List[sqlite3.Row]:
    """Execute a query and return all rows."""
    return get_connection().execute(sql, params).fetchall()


def query_one(sql: str, params: Tuple = ()) -> Optional[sqlite3.Row]:
    """Execute a query and return the first row, or None."""
    return get_connection().execute(sql, params).fetchone()


def query_column(sql: str, params: Tuple = ()) -> List[Any]:
    """Execute a query and return the first column of every row."""
    return [row[0] for row in query(sql, params)]


def execute(sql: str, params: Tuple = ()) -> int:
    """
    Execute a statement and commit.

    Returns:
        Number of affected rows.
    """
    conn = get_connection()
    cursor = conn.execute(sql, params)
    conn.commit()
    return cursor.rowcount


def executemany(sql: str, params_list: Iterable[Tuple]) -> int:
    """Execute a statement for every parameter set and commit."""
    conn = get_connection()
    cursor = conn.executemany(sql, params_list)
    conn.commit()
    return cursor.rowcount
