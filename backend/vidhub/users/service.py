"""Profile and channel business logic."""

from __future__ import annotations

import sqlite3

from vidhub.auth.errors import missing_fields
from vidhub.auth.errors import user_conflict
from vidhub.auth.errors import validation_error
from vidhub.auth.repository import UserRecord
from vidhub.auth.repository import find_user_by_id
from vidhub.auth.repository import find_user_by_username
from vidhub.auth.session import to_utc_iso
from vidhub.core.config import Settings
from vidhub.core.result import Err
from vidhub.core.result import ErrorKind
from vidhub.core.result import Ok
from vidhub.core.result import Result
from vidhub.core.tokens import utc_now
from vidhub.core.username import UsernameValidationError
from vidhub.core.username import normalize_and_validate_email
from vidhub.core.username import normalize_and_validate_username
from vidhub.core.username import normalize_username
from vidhub.users.models import UpdateAccountRequest
from vidhub.users.repository import add_subscription
from vidhub.users.repository import get_channel_profile
from vidhub.users.repository import remove_subscription
from vidhub.users.repository import update_user_fields


def channel_not_found() -> Err:
    return Err(kind=ErrorKind.NOT_FOUND, message="channel does not exist")


def _reload(settings: Settings, user_id: int) -> Result[dict[str, object]]:
    user = find_user_by_id(settings=settings, user_id=user_id)
    if user is None:
        return Err(kind=ErrorKind.UNAUTHORIZED, message="Invalid Access Token")
    return Ok(user.public_view())


def update_account(*, settings: Settings, user: UserRecord, payload: UpdateAccountRequest) -> Result[dict[str, object]]:
    """Change fullname/email and optionally username."""
    if not (payload.fullname or "").strip() or not (payload.email or "").strip():
        return missing_fields()

    try:
        fields = {
            "fullname": payload.fullname.strip(),
            "email": normalize_and_validate_email(payload.email),
        }
        if payload.username and payload.username.strip():
            fields["username"] = normalize_and_validate_username(payload.username)
    except UsernameValidationError as exc:
        return validation_error(str(exc))

    try:
        update_user_fields(
            settings=settings,
            user_id=user.id,
            fields=fields,
            updated_at=to_utc_iso(utc_now()),
        )
    except sqlite3.IntegrityError:
        return user_conflict()
    return _reload(settings, user.id)


def update_image(*, settings: Settings, user: UserRecord, column: str, url: str | None) -> Result[dict[str, object]]:
    """Store a new avatar or cover image URL."""
    if not url or not url.strip():
        label = "avatar" if column == "avatar" else "cover image"
        return validation_error(f"{label} url is required")
    update_user_fields(
        settings=settings,
        user_id=user.id,
        fields={column: url.strip()},
        updated_at=to_utc_iso(utc_now()),
    )
    return _reload(settings, user.id)


def _resolve_channel(settings: Settings, username: str) -> UserRecord | None:
    if not username.strip():
        return None
    return find_user_by_username(settings=settings, username=normalize_username(username))


def subscribe(*, settings: Settings, user: UserRecord, channel_username: str) -> Result[dict[str, object]]:
    channel = _resolve_channel(settings, channel_username)
    if channel is None:
        return channel_not_found()
    if channel.id == user.id:
        return validation_error("cannot subscribe to your own channel")
    add_subscription(
        settings=settings,
        subscriber_id=user.id,
        channel_id=channel.id,
        created_at=to_utc_iso(utc_now()),
    )
    return Ok({"channel": channel.username, "subscribed": True})


def unsubscribe(*, settings: Settings, user: UserRecord, channel_username: str) -> Result[dict[str, object]]:
    channel = _resolve_channel(settings, channel_username)
    if channel is None:
        return channel_not_found()
    remove_subscription(settings=settings, subscriber_id=user.id, channel_id=channel.id)
    return Ok({"channel": channel.username, "subscribed": False})


def channel_profile(*, settings: Settings, viewer: UserRecord, username: str) -> Result[dict[str, object]]:
    """Public channel page for ``username`` as seen by ``viewer``."""
    if not username.strip():
        return channel_not_found()
    row = get_channel_profile(settings=settings, username=normalize_username(username), viewer_id=viewer.id)
    if row is None:
        return channel_not_found()
    return Ok(
        {
            "id": row.id,
            "username": row.username,
            "fullname": row.fullname,
            "email": row.email,
            "avatar": row.avatar,
            "coverImage": row.cover_image,
            "subscribersCount": row.subscribers_count,
            "channelsSubscribedToCount": row.channels_subscribed_to_count,
            "isSubscribed": row.is_subscribed,
        }
    )
