"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), applying migrations on application start
(``init_db``) and a scoped transaction (``transaction``) used by the
service layer for all-or-nothing writes.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Sequence

from .config import settings


# Append new migrations with an incremented version number; never edit
# a migration that has already shipped.
MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: users and their posts
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL UNIQUE,
            name TEXT
        );

        CREATE TABLE IF NOT EXISTS posts (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            content TEXT,
            published INTEGER NOT NULL DEFAULT 0,
            author_id INTEGER NOT NULL,
            FOREIGN KEY(author_id) REFERENCES users(id)
        );
        """,
    ),
    # Migration 2: listing groups posts by author
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_posts_author_id ON posts(author_id);
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
    base_dir = Path(__file__).resolve().parent.parent.parent  # user_post_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Foreign key enforcement is switched on for the lifetime of
    the connection; SQLite leaves it off by default.
    """
    conn = sqlite3.connect(get_database_path(), timeout=settings.database_timeout)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


class Transaction:
    """Explicit begin/commit/rollback over a single connection.

    The connection is switched to autocommit mode so that the
    ``sqlite3`` module does not open or close transactions implicitly;
    every statement between ``begin`` and ``commit`` belongs to the
    transaction.  ``BEGIN IMMEDIATE`` takes the write lock up front, so a
    competing writer waits (up to ``settings.database_timeout``) instead
    of failing halfway through.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        self.conn.isolation_level = None
        self.active = False

    def begin(self) -> None:
        self.conn.execute("BEGIN IMMEDIATE")
        self.active = True

    def commit(self) -> None:
        self.conn.execute("COMMIT")
        self.active = False

    def rollback(self) -> None:
        if self.active:
            self.conn.execute("ROLLBACK")
            self.active = False

    def execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        if not self.active:
            raise RuntimeError("transaction is not active")
        return self.conn.execute(sql, params)


@contextmanager
def transaction() -> Iterator[Transaction]:
    """Run a block inside a transaction.

    Commits only if the block completes; any exception leaving the
    block rolls everything back and is re-raised.  The connection is
    always closed.

    Example::

        with transaction() as tx:
            tx.execute("INSERT INTO users (email) VALUES (?)", ("a@b.co",))
    """
    conn = get_connection()
    tx = Transaction(conn)
    try:
        tx.begin()
        yield tx
        tx.commit()
    except BaseException:
        tx.rollback()
        raise
    finally:
        conn.close()


def is_unique_violation(exc: BaseException) -> bool:
    """Return True if ``exc`` is a UNIQUE constraint failure."""
    if not isinstance(exc, sqlite3.IntegrityError):
        return False
    # ``sqlite_errorname`` exists on Python 3.11+.
    if getattr(exc, "sqlite_errorname", None) == "SQLITE_CONSTRAINT_UNIQUE":
        return True
    return str(exc).startswith("UNIQUE constraint failed")


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version and applies every migration in
    ``MIGRATIONS`` newer than it.
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
                current_version = version
