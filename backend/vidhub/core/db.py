"""SQLite connection helpers for backend persistence."""

from __future__ import annotations

import sqlite3


def create_sqlite_connection(path: str, *, timeout_seconds: float = 5.0) -> sqlite3.Connection:
    """Create a SQLite connection with foreign key enforcement enabled.

    ``timeout_seconds`` bounds how long a writer waits for a lock before
    ``sqlite3.OperationalError`` is raised.
    """
    conn = sqlite3.connect(path, timeout=timeout_seconds)
    conn.execute("PRAGMA foreign_keys=ON")
    return conn
