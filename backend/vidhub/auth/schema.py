"""Schema bootstrap for account and subscription tables."""

from __future__ import annotations

from vidhub.core.config import Settings
from vidhub.core.db import create_sqlite_connection


CREATE_SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY,
    username TEXT NOT NULL UNIQUE,
    email TEXT NOT NULL UNIQUE,
    fullname TEXT NOT NULL,
    avatar TEXT NOT NULL DEFAULT '',
    cover_image TEXT NOT NULL DEFAULT '',
    password_hash TEXT NOT NULL,
    refresh_token_hash TEXT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS subscriptions (
    id INTEGER PRIMARY KEY,
    subscriber_id INTEGER NOT NULL,
    channel_id INTEGER NOT NULL,
    created_at TEXT NOT NULL,
    UNIQUE (subscriber_id, channel_id),
    FOREIGN KEY (subscriber_id) REFERENCES users(id) ON DELETE CASCADE,
    FOREIGN KEY (channel_id) REFERENCES users(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_subscriptions_channel_id ON subscriptions(channel_id);
"""


def init_schema(settings: Settings) -> None:
    """Ensure tables/indexes exist."""
    conn = create_sqlite_connection(settings.vidhub_sqlite_path)
    try:
        conn.executescript(CREATE_SCHEMA_SQL)
        conn.commit()
    finally:
        conn.close()
