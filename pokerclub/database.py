"""SQLite storage: opening, wiping and transaction scoping."""

from __future__ import annotations

import sqlite3
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from .exceptions import InternalServerError

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    email TEXT NOT NULL,
    faculty TEXT NOT NULL,
    quest_id TEXT NOT NULL,
    created_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS semesters (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    meta TEXT NOT NULL DEFAULT '',
    start_date TEXT NOT NULL,
    end_date TEXT NOT NULL,
    starting_budget REAL NOT NULL,
    current_budget REAL NOT NULL,
    membership_fee INTEGER NOT NULL,
    membership_discount_fee INTEGER NOT NULL,
    rebuy_fee INTEGER NOT NULL
);
CREATE TABLE IF NOT EXISTS memberships (
    id TEXT PRIMARY KEY,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    semester_id TEXT NOT NULL REFERENCES semesters(id) ON DELETE CASCADE,
    paid INTEGER NOT NULL DEFAULT 0,
    discounted INTEGER NOT NULL DEFAULT 0,
    UNIQUE (user_id, semester_id)
);
CREATE TABLE IF NOT EXISTS structures (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS blinds (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    small INTEGER NOT NULL,
    big INTEGER NOT NULL,
    ante INTEGER NOT NULL,
    time INTEGER NOT NULL,
    "index" INTEGER NOT NULL,
    structure_id INTEGER NOT NULL REFERENCES structures(id) ON DELETE CASCADE
);
CREATE TABLE IF NOT EXISTS events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    format TEXT NOT NULL,
    notes TEXT NOT NULL DEFAULT '',
    semester_id TEXT NOT NULL REFERENCES semesters(id) ON DELETE CASCADE,
    start_date TEXT NOT NULL,
    state INTEGER NOT NULL,
    structure_id INTEGER NOT NULL REFERENCES structures(id),
    rebuys INTEGER NOT NULL DEFAULT 0,
    points_multiplier REAL NOT NULL DEFAULT 1.0
);
CREATE TABLE IF NOT EXISTS participants (
    membership_id TEXT NOT NULL REFERENCES memberships(id) ON DELETE CASCADE,
    event_id INTEGER NOT NULL REFERENCES events(id) ON DELETE CASCADE,
    placement INTEGER NOT NULL DEFAULT 0,
    signed_out_at TEXT,
    PRIMARY KEY (membership_id, event_id)
);
CREATE TABLE IF NOT EXISTS rankings (
    membership_id TEXT PRIMARY KEY REFERENCES memberships(id) ON DELETE CASCADE,
    points INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS transactions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    semester_id TEXT NOT NULL REFERENCES semesters(id) ON DELETE CASCADE,
    amount REAL NOT NULL,
    description TEXT NOT NULL DEFAULT ''
);
"""

_WIPE_ORDER = (
    "participants",
    "rankings",
    "transactions",
    "events",
    "blinds",
    "structures",
    "memberships",
    "semesters",
    "users",
)


def open_connection(path: str = ":memory:") -> sqlite3.Connection:
    """Open the database at *path* and make sure every table exists."""
    conn = sqlite3.connect(path, isolation_level=None, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    conn.executescript(_SCHEMA)
    return conn


def wipe_db(conn: sqlite3.Connection) -> None:
    """Delete every row from every table."""
    with transaction(conn):
        for table in _WIPE_ORDER:
            conn.execute(f"DELETE FROM {table}")


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run a block atomically; nested blocks use savepoints.

    Storage errors are rolled back and raised as InternalServerError.
    """
    nested = conn.in_transaction
    savepoint = f"sp_{uuid.uuid4().hex}"
    try:
        conn.execute(f"SAVEPOINT {savepoint}" if nested else "BEGIN")
    except sqlite3.Error as exc:
        raise InternalServerError(str(exc)) from exc
    try:
        yield conn
    except BaseException as exc:
        if nested:
            conn.execute(f"ROLLBACK TO {savepoint}")
            conn.execute(f"RELEASE {savepoint}")
        else:
            conn.execute("ROLLBACK")
        if isinstance(exc, sqlite3.Error):
            raise InternalServerError(str(exc)) from exc
        raise
    try:
        conn.execute(f"RELEASE {savepoint}" if nested else "COMMIT")
    except sqlite3.Error as exc:
        if not nested and conn.in_transaction:
            conn.execute("ROLLBACK")
        raise InternalServerError(str(exc)) from exc