"""Persistence helpers for auth workflows.

The ``refresh_token_hash`` column is the session store: it holds the digest
of the one refresh token currently valid for a user, or NULL when the user
has no session.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

from vidhub.core.config import Settings
from vidhub.core.db import create_sqlite_connection


class _AnyPrevious:
    def __repr__(self) -> str:
        return "ANY_PREVIOUS"


# Passed as ``expected_previous`` to replace the stored value unconditionally.
ANY_PREVIOUS = _AnyPrevious()

_USER_COLUMNS = """
    id, username, email, fullname, avatar, cover_image,
    password_hash, refresh_token_hash, created_at, updated_at
"""


@dataclass(frozen=True, slots=True)
class UserRecord:
    id: int
    username: str
    email: str
    fullname: str
    avatar: str
    cover_image: str
    password_hash: str
    refresh_token_hash: str | None
    created_at: str
    updated_at: str

    def public_view(self) -> dict[str, object]:
        """User fields safe to return to clients."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "fullname": self.fullname,
            "avatar": self.avatar,
            "coverImage": self.cover_image,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }


def _connect(settings: Settings) -> sqlite3.Connection:
    return create_sqlite_connection(
        settings.vidhub_sqlite_path,
        timeout_seconds=settings.vidhub_sqlite_timeout_seconds,
    )


def _to_record(row: tuple | None) -> UserRecord | None:
    if row is None:
        return None
    return UserRecord(
        id=int(row[0]),
        username=str(row[1]),
        email=str(row[2]),
        fullname=str(row[3]),
        avatar=str(row[4]),
        cover_image=str(row[5]),
        password_hash=str(row[6]),
        refresh_token_hash=None if row[7] is None else str(row[7]),
        created_at=str(row[8]),
        updated_at=str(row[9]),
    )


def create_user(
    *,
    settings: Settings,
    username: str,
    email: str,
    fullname: str,
    password_hash: str,
    avatar: str,
    cover_image: str,
    created_at: str,
) -> int:
    """Insert a user and return its id."""
    conn = _connect(settings)
    try:
        conn.execute("BEGIN")
        cursor = conn.execute(
            """
            INSERT INTO users (
                username, email, fullname, avatar, cover_image,
                password_hash, refresh_token_hash, created_at, updated_at
            )
            VALUES (?, ?, ?, ?, ?, ?, NULL, ?, ?)
            """,
            (username, email, fullname, avatar, cover_image, password_hash, created_at, created_at),
        )
        user_id = int(cursor.lastrowid)
        conn.commit()
        return user_id
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def find_user_by_identifier(
    *,
    settings: Settings,
    username: str | None,
    email: str | None,
) -> UserRecord | None:
    """Fetch the user matching either the username or the email."""
    conn = _connect(settings)
    try:
        row = conn.execute(
            f"""
            SELECT {_USER_COLUMNS}
            FROM users
            WHERE username = ? OR email = ?
            ORDER BY id ASC
            LIMIT 1
            """,
            (username, email),
        ).fetchone()
        return _to_record(row)
    finally:
        conn.close()


def find_user_by_id(*, settings: Settings, user_id: int) -> UserRecord | None:
    conn = _connect(settings)
    try:
        row = conn.execute(
            f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?",
            (user_id,),
        ).fetchone()
        return _to_record(row)
    finally:
        conn.close()


def find_user_by_username(*, settings: Settings, username: str) -> UserRecord | None:
    conn = _connect(settings)
    try:
        row = conn.execute(
            f"SELECT {_USER_COLUMNS} FROM users WHERE username = ?",
            (username,),
        ).fetchone()
        return _to_record(row)
    finally:
        conn.close()


def replace_refresh_token(
    *,
    settings: Settings,
    user_id: int,
    token_hash: str,
    expected_previous: str | None | _AnyPrevious,
    updated_at: str,
) -> bool:
    """Store ``token_hash`` as the user's session token.

    With ``expected_previous`` other than ``ANY_PREVIOUS`` the write only
    happens while the stored digest still equals it (``None`` meaning no
    session). Returns whether the row changed.
    """
    conn = _connect(settings)
    try:
        if expected_previous is ANY_PREVIOUS:
            cursor = conn.execute(
                "UPDATE users SET refresh_token_hash = ?, updated_at = ? WHERE id = ?",
                (token_hash, updated_at, user_id),
            )
        else:
            cursor = conn.execute(
                """
                UPDATE users
                SET refresh_token_hash = ?, updated_at = ?
                WHERE id = ? AND refresh_token_hash IS ?
                """,
                (token_hash, updated_at, user_id, expected_previous),
            )
        conn.commit()
        return cursor.rowcount == 1
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def clear_refresh_token(*, settings: Settings, user_id: int, updated_at: str) -> None:
    """End the user's session; a no-op when none is active."""
    conn = _connect(settings)
    try:
        conn.execute(
            """
            UPDATE users
            SET refresh_token_hash = NULL, updated_at = ?
            WHERE id = ? AND refresh_token_hash IS NOT NULL
            """,
            (updated_at, user_id),
        )
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def set_password_hash(*, settings: Settings, user_id: int, password_hash: str, updated_at: str) -> None:
    conn = _connect(settings)
    try:
        conn.execute(
            "UPDATE users SET password_hash = ?, updated_at = ? WHERE id = ?",
            (password_hash, updated_at, user_id),
        )
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()
