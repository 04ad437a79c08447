"""Session lifecycle tests against the service layer: issue, rotate, reuse, logout."""

from __future__ import annotations

import sqlite3

import pytest

import vidhub.auth.session as session_module
from vidhub.auth.models import ChangePasswordRequest
from vidhub.auth.models import LoginRequest
from vidhub.auth.models import RegisterRequest
from vidhub.auth.repository import find_user_by_id
from vidhub.auth.service import change_password
from vidhub.auth.service import login_user
from vidhub.auth.service import logout_user
from vidhub.auth.service import refresh_session
from vidhub.auth.service import register_user
from vidhub.auth.session import hash_refresh_token
from vidhub.core.config import Settings
from vidhub.core.result import Err
from vidhub.core.result import ErrorKind
from vidhub.core.result import Ok
from vidhub.core.tokens import TokenCodec
from vidhub.core.tokens import TokenKind


def _register_and_login(settings: Settings, codec: TokenCodec):
    registered = register_user(
        settings=settings,
        payload=RegisterRequest(
            username="alice",
            email="alice@example.com",
            fullname="Alice",
            password="correctPw",
        ),
    )
    assert isinstance(registered, Ok)
    logged_in = login_user(
        settings=settings,
        codec=codec,
        payload=LoginRequest(username="alice", password="correctPw"),
    )
    assert isinstance(logged_in, Ok)
    return registered.value["id"], logged_in.value


def _stored_hash(settings: Settings, user_id: int) -> str | None:
    return find_user_by_id(settings=settings, user_id=user_id).refresh_token_hash


def test_login_tokens_share_subject_and_refresh_is_committed(started: Settings, codec: TokenCodec) -> None:
    user_id, session = _register_and_login(started, codec)

    assert codec.verify(TokenKind.ACCESS, session.tokens.access_token) == Ok(str(user_id))
    assert codec.verify(TokenKind.REFRESH, session.tokens.refresh_token) == Ok(str(user_id))
    assert _stored_hash(started, user_id) == hash_refresh_token(session.tokens.refresh_token)
    assert "password_hash" not in session.user
    assert "refresh_token_hash" not in session.user


def test_refresh_is_single_use(started: Settings, codec: TokenCodec) -> None:
    user_id, session = _register_and_login(started, codec)
    first = session.tokens.refresh_token

    rotated = refresh_session(settings=started, codec=codec, refresh_token=first)
    assert isinstance(rotated, Ok)
    assert rotated.value.refresh_token != first
    assert _stored_hash(started, user_id) == hash_refresh_token(rotated.value.refresh_token)

    replay = refresh_session(settings=started, codec=codec, refresh_token=first)
    assert isinstance(replay, Err)
    assert replay.kind is ErrorKind.UNAUTHORIZED
    assert replay.message == "refresh token is expired or used"

    # Reuse does not revoke the newest token unless configured to.
    assert isinstance(refresh_session(settings=started, codec=codec, refresh_token=rotated.value.refresh_token), Ok)


def test_validly_signed_token_not_matching_store_is_rejected(started: Settings, codec: TokenCodec) -> None:
    user_id, _ = _register_and_login(started, codec)
    unrelated = codec.issue(TokenKind.REFRESH, user_id)

    result = refresh_session(settings=started, codec=codec, refresh_token=unrelated)

    assert isinstance(result, Err)
    assert result.reason == "mismatch"


@pytest.mark.parametrize("token", [None, ""])
def test_missing_refresh_token_is_unauthorized(started: Settings, codec: TokenCodec, token: str | None) -> None:
    result = refresh_session(settings=started, codec=codec, refresh_token=token)
    assert isinstance(result, Err)
    assert result.message == "Unauthorized request"


def test_refresh_for_unknown_subject_is_unauthorized(started: Settings, codec: TokenCodec) -> None:
    result = refresh_session(settings=started, codec=codec, refresh_token=codec.issue(TokenKind.REFRESH, 404))
    assert isinstance(result, Err)
    assert result.kind is ErrorKind.UNAUTHORIZED
    assert result.message == "Invalid refresh token"


def test_access_token_cannot_be_used_to_refresh(started: Settings, codec: TokenCodec) -> None:
    _, session = _register_and_login(started, codec)
    result = refresh_session(settings=started, codec=codec, refresh_token=session.tokens.access_token)
    assert isinstance(result, Err)
    assert result.message == "Invalid refresh token"


def test_login_supersedes_previous_session(started: Settings, codec: TokenCodec) -> None:
    _, first_session = _register_and_login(started, codec)
    second = login_user(settings=started, codec=codec, payload=LoginRequest(email="alice@example.com", password="correctPw"))
    assert isinstance(second, Ok)

    stale = refresh_session(settings=started, codec=codec, refresh_token=first_session.tokens.refresh_token)
    assert isinstance(stale, Err)
    assert isinstance(refresh_session(settings=started, codec=codec, refresh_token=second.value.tokens.refresh_token), Ok)


def test_logout_is_idempotent_and_ends_the_session(started: Settings, codec: TokenCodec) -> None:
    user_id, session = _register_and_login(started, codec)

    assert logout_user(settings=started, user_id=user_id) == Ok(None)
    assert logout_user(settings=started, user_id=user_id) == Ok(None)
    assert _stored_hash(started, user_id) is None

    result = refresh_session(settings=started, codec=codec, refresh_token=session.tokens.refresh_token)
    assert isinstance(result, Err)
    assert result.kind is ErrorKind.UNAUTHORIZED


def test_reuse_revokes_session_when_configured(started: Settings, codec: TokenCodec) -> None:
    hardened = started.model_copy(update={"vidhub_revoke_session_on_refresh_reuse": True})
    user_id, session = _register_and_login(hardened, codec)
    first = session.tokens.refresh_token
    rotated = refresh_session(settings=hardened, codec=codec, refresh_token=first)
    assert isinstance(rotated, Ok)

    assert isinstance(refresh_session(settings=hardened, codec=codec, refresh_token=first), Err)
    assert _stored_hash(hardened, user_id) is None
    assert isinstance(refresh_session(settings=hardened, codec=codec, refresh_token=rotated.value.refresh_token), Err)


def test_store_failure_during_issue_returns_internal_error_and_keeps_store(
    started: Settings,
    codec: TokenCodec,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    user_id, session = _register_and_login(started, codec)
    before = _stored_hash(started, user_id)

    def _locked(**_: object) -> bool:
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(session_module, "replace_refresh_token", _locked)

    result = refresh_session(settings=started, codec=codec, refresh_token=session.tokens.refresh_token)

    assert isinstance(result, Err)
    assert result.kind is ErrorKind.INTERNAL
    assert _stored_hash(started, user_id) == before


def test_login_error_messages_follow_configuration(started: Settings, codec: TokenCodec) -> None:
    _register_and_login(started, codec)

    unknown = login_user(settings=started, codec=codec, payload=LoginRequest(username="bob", password="x"))
    wrong = login_user(settings=started, codec=codec, payload=LoginRequest(username="alice", password="x"))
    assert isinstance(unknown, Err) and unknown.message == "user does not exist"
    assert isinstance(wrong, Err) and wrong.message == "Invalid user credentials"
    assert unknown.kind is wrong.kind is ErrorKind.INVALID_CREDENTIALS

    generic = started.model_copy(update={"vidhub_generic_login_errors": True})
    unknown = login_user(settings=generic, codec=codec, payload=LoginRequest(username="bob", password="x"))
    assert isinstance(unknown, Err) and unknown.message == "Invalid user credentials"


def test_login_requires_an_identifier(started: Settings, codec: TokenCodec) -> None:
    result = login_user(settings=started, codec=codec, payload=LoginRequest(password="x"))
    assert isinstance(result, Err)
    assert result.kind is ErrorKind.VALIDATION


def test_password_change_keeps_session(started: Settings, codec: TokenCodec) -> None:
    user_id, session = _register_and_login(started, codec)

    wrong = change_password(
        settings=started,
        user_id=user_id,
        payload=ChangePasswordRequest(oldPassword="nope", newPassword="newPw"),
    )
    assert isinstance(wrong, Err) and wrong.message == "Invalid old password"

    assert change_password(
        settings=started,
        user_id=user_id,
        payload=ChangePasswordRequest(oldPassword="correctPw", newPassword="newPw"),
    ) == Ok(None)

    assert isinstance(
        login_user(settings=started, codec=codec, payload=LoginRequest(username="alice", password="correctPw")),
        Err,
    )
    # The login above failed, so the original session is still the stored one.
    assert isinstance(refresh_session(settings=started, codec=codec, refresh_token=session.tokens.refresh_token), Ok)
