"""Auth business logic: registration, login, refresh rotation, logout."""

from __future__ import annotations

import hmac
import logging
import sqlite3
from dataclasses import dataclass

from vidhub.auth.errors import internal_error
from vidhub.auth.errors import invalid_access_token
from vidhub.auth.errors import invalid_credentials
from vidhub.auth.errors import invalid_old_password
from vidhub.auth.errors import invalid_refresh_token
from vidhub.auth.errors import missing_fields
from vidhub.auth.errors import missing_identifier
from vidhub.auth.errors import refresh_token_reused
from vidhub.auth.errors import unauthorized_request
from vidhub.auth.errors import user_conflict
from vidhub.auth.errors import user_does_not_exist
from vidhub.auth.errors import validation_error
from vidhub.auth.guard import authenticate
from vidhub.auth.models import ChangePasswordRequest
from vidhub.auth.models import LoginRequest
from vidhub.auth.models import RegisterRequest
from vidhub.auth.repository import UserRecord
from vidhub.auth.repository import clear_refresh_token
from vidhub.auth.repository import create_user
from vidhub.auth.repository import find_user_by_id
from vidhub.auth.repository import find_user_by_identifier
from vidhub.auth.repository import set_password_hash
from vidhub.auth.schema import init_schema
from vidhub.auth.session import TokenPair
from vidhub.auth.session import hash_refresh_token
from vidhub.auth.session import issue_token_pair
from vidhub.auth.session import to_utc_iso
from vidhub.core.config import Settings
from vidhub.core.password import hash_password
from vidhub.core.password import password_needs_rehash
from vidhub.core.password import verify_password
from vidhub.core.result import Err
from vidhub.core.result import Ok
from vidhub.core.result import Result
from vidhub.core.tokens import TokenCodec
from vidhub.core.tokens import TokenKind
from vidhub.core.tokens import utc_now
from vidhub.core.username import UsernameValidationError
from vidhub.core.username import normalize_and_validate_email
from vidhub.core.username import normalize_and_validate_username
from vidhub.core.username import normalize_username

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoginSession:
    user: dict[str, object]
    tokens: TokenPair


def startup_schema(settings: Settings) -> None:
    """Ensure tables exist before handling traffic."""
    init_schema(settings)


def register_user(*, settings: Settings, payload: RegisterRequest) -> Result[dict[str, object]]:
    """Create an account. No session is opened; the client logs in afterwards."""
    fields = (payload.username, payload.email, payload.fullname, payload.password)
    if any(not value.strip() for value in fields):
        return missing_fields()

    try:
        username = normalize_and_validate_username(payload.username)
        email = normalize_and_validate_email(payload.email)
    except UsernameValidationError as exc:
        return validation_error(str(exc))

    if find_user_by_identifier(settings=settings, username=username, email=email) is not None:
        return user_conflict()

    created_at = to_utc_iso(utc_now())
    try:
        user_id = create_user(
            settings=settings,
            username=username,
            email=email,
            fullname=payload.fullname.strip(),
            password_hash=hash_password(payload.password),
            avatar=payload.avatar.strip(),
            cover_image=payload.cover_image.strip(),
            created_at=created_at,
        )
    except sqlite3.IntegrityError:
        return user_conflict()

    user = find_user_by_id(settings=settings, user_id=user_id)
    if user is None:
        return internal_error("Something went wrong while registering the user")
    logger.info("registered user_id=%s", user_id)
    return Ok(user.public_view())


def login_user(*, settings: Settings, codec: TokenCodec, payload: LoginRequest) -> Result[LoginSession]:
    """Check credentials and open a session, superseding any previous one."""
    username = normalize_username(payload.username) if payload.username else None
    email = payload.email.strip().lower() if payload.email else None
    if not username and not email:
        return missing_identifier()

    user = find_user_by_identifier(settings=settings, username=username, email=email)
    if user is None:
        logger.info("login rejected: unknown identifier")
        return invalid_credentials() if settings.vidhub_generic_login_errors else user_does_not_exist()

    if not verify_password(payload.password, user.password_hash):
        logger.info("login rejected: wrong password for user_id=%s", user.id)
        return invalid_credentials()

    if password_needs_rehash(user.password_hash):
        set_password_hash(
            settings=settings,
            user_id=user.id,
            password_hash=hash_password(payload.password),
            updated_at=to_utc_iso(utc_now()),
        )

    issued = issue_token_pair(settings=settings, codec=codec, user=user)
    if isinstance(issued, Err):
        return issued
    logger.info("login succeeded for user_id=%s", user.id)
    return Ok(LoginSession(user=user.public_view(), tokens=issued.value))


def _reject_reuse(*, settings: Settings, user_id: int) -> Err:
    logger.warning("stale refresh token presented for user_id=%s", user_id)
    if settings.vidhub_revoke_session_on_refresh_reuse:
        clear_refresh_token(settings=settings, user_id=user_id, updated_at=to_utc_iso(utc_now()))
        logger.warning("session revoked after refresh token reuse for user_id=%s", user_id)
    return refresh_token_reused()


def refresh_session(*, settings: Settings, codec: TokenCodec, refresh_token: str | None) -> Result[TokenPair]:
    """Rotate a refresh token: each one is good for exactly one successful call.

    The presented token must verify against the refresh secret *and* match
    the stored session digest. The replacement is committed with a
    conditional write against that digest, so of two concurrent calls with
    the same token only one can win.
    """
    if not refresh_token:
        return unauthorized_request()

    verified = codec.verify(TokenKind.REFRESH, refresh_token)
    if isinstance(verified, Err):
        return invalid_refresh_token(reason=verified.reason)

    try:
        user_id = int(verified.value)
    except ValueError:
        return invalid_refresh_token(reason="malformed")

    user = find_user_by_id(settings=settings, user_id=user_id)
    if user is None:
        return invalid_refresh_token(reason="subject_not_found")

    presented_hash = hash_refresh_token(refresh_token)
    if user.refresh_token_hash is None or not hmac.compare_digest(presented_hash, user.refresh_token_hash):
        return _reject_reuse(settings=settings, user_id=user.id)

    issued = issue_token_pair(
        settings=settings,
        codec=codec,
        user=user,
        expected_previous=presented_hash,
    )
    if isinstance(issued, Err) and issued.reason == "mismatch":
        return _reject_reuse(settings=settings, user_id=user.id)
    return issued


def logout_user(*, settings: Settings, user_id: int) -> Result[None]:
    """Clear the stored session. Idempotent; access tokens already out stay valid until expiry."""
    clear_refresh_token(settings=settings, user_id=user_id, updated_at=to_utc_iso(utc_now()))
    logger.info("logout for user_id=%s", user_id)
    return Ok(None)


def change_password(*, settings: Settings, user_id: int, payload: ChangePasswordRequest) -> Result[None]:
    """Replace the password hash after checking the old password.

    The current session is left in place.
    """
    user = find_user_by_id(settings=settings, user_id=user_id)
    if user is None:
        return invalid_access_token(reason="subject_not_found")
    if not payload.new_password.strip():
        return validation_error("new password is required")
    if not verify_password(payload.old_password, user.password_hash):
        return invalid_old_password()

    set_password_hash(
        settings=settings,
        user_id=user.id,
        password_hash=hash_password(payload.new_password),
        updated_at=to_utc_iso(utc_now()),
    )
    logger.info("password changed for user_id=%s", user.id)
    return Ok(None)


def current_user(*, settings: Settings, codec: TokenCodec, access_token: str | None) -> Result[UserRecord]:
    """Resolve the caller's user record from an access token."""
    authenticated = authenticate(codec, access_token)
    if isinstance(authenticated, Err):
        return authenticated

    user = find_user_by_id(settings=settings, user_id=authenticated.value)
    if user is None:
        return invalid_access_token(reason="subject_not_found")
    return Ok(user)
