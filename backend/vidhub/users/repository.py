"""Persistence helpers for profiles and subscriptions."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

from vidhub.core.config import Settings
from vidhub.core.db import create_sqlite_connection

# Column names callers may update through ``update_user_fields``.
_UPDATABLE_COLUMNS = frozenset({"username", "email", "fullname", "avatar", "cover_image"})


@dataclass(frozen=True, slots=True)
class ChannelRow:
    id: int
    username: str
    email: str
    fullname: str
    avatar: str
    cover_image: str
    subscribers_count: int
    channels_subscribed_to_count: int
    is_subscribed: bool


def _connect(settings: Settings) -> sqlite3.Connection:
    return create_sqlite_connection(
        settings.vidhub_sqlite_path,
        timeout_seconds=settings.vidhub_sqlite_timeout_seconds,
    )


def update_user_fields(
    *,
    settings: Settings,
    user_id: int,
    fields: dict[str, str],
    updated_at: str,
) -> None:
    """Update the given profile columns; raises ``sqlite3.IntegrityError`` on unique clashes."""
    unknown = set(fields) - _UPDATABLE_COLUMNS
    if unknown:
        raise ValueError(f"not updatable: {sorted(unknown)}")
    if not fields:
        return

    assignments = ", ".join(f"{column} = ?" for column in fields)
    conn = _connect(settings)
    try:
        conn.execute(
            f"UPDATE users SET {assignments}, updated_at = ? WHERE id = ?",
            (*fields.values(), updated_at, user_id),
        )
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def add_subscription(*, settings: Settings, subscriber_id: int, channel_id: int, created_at: str) -> None:
    """Subscribe idempotently."""
    conn = _connect(settings)
    try:
        conn.execute(
            """
            INSERT OR IGNORE INTO subscriptions (subscriber_id, channel_id, created_at)
            VALUES (?, ?, ?)
            """,
            (subscriber_id, channel_id, created_at),
        )
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def remove_subscription(*, settings: Settings, subscriber_id: int, channel_id: int) -> None:
    conn = _connect(settings)
    try:
        conn.execute(
            "DELETE FROM subscriptions WHERE subscriber_id = ? AND channel_id = ?",
            (subscriber_id, channel_id),
        )
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def get_channel_profile(*, settings: Settings, username: str, viewer_id: int) -> ChannelRow | None:
    """Channel page with subscriber counts and whether ``viewer_id`` subscribes."""
    conn = _connect(settings)
    try:
        row = conn.execute(
            """
            SELECT
                u.id, u.username, u.email, u.fullname, u.avatar, u.cover_image,
                (SELECT COUNT(*) FROM subscriptions s WHERE s.channel_id = u.id),
                (SELECT COUNT(*) FROM subscriptions s WHERE s.subscriber_id = u.id),
                EXISTS (
                    SELECT 1 FROM subscriptions s
                    WHERE s.channel_id = u.id AND s.subscriber_id = ?
                )
            FROM users u
            WHERE u.username = ?
            """,
            (viewer_id, username),
        ).fetchone()
        if row is None:
            return None
        return ChannelRow(
            id=int(row[0]),
            username=str(row[1]),
            email=str(row[2]),
            fullname=str(row[3]),
            avatar=str(row[4]),
            cover_image=str(row[5]),
            subscribers_count=int(row[6]),
            channels_subscribed_to_count=int(row[7]),
            is_subscribed=bool(row[8]),
        )
    finally:
        conn.close()
