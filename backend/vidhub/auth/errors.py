"""Named auth failures, built as ``Err`` values so messages live in one place."""

from __future__ import annotations

from typing import Any

from vidhub.core.result import Err
from vidhub.core.result import ErrorKind


def validation_error(message: str, errors: list[dict[str, Any]] | None = None) -> Err:
    return Err(kind=ErrorKind.VALIDATION, message=message, errors=errors or [])


def missing_fields() -> Err:
    return validation_error("All fields are required")


def missing_identifier() -> Err:
    return validation_error("username or email is required")


def user_does_not_exist() -> Err:
    return Err(kind=ErrorKind.INVALID_CREDENTIALS, message="user does not exist")


def invalid_credentials() -> Err:
    return Err(kind=ErrorKind.INVALID_CREDENTIALS, message="Invalid user credentials")


def invalid_old_password() -> Err:
    return Err(kind=ErrorKind.INVALID_CREDENTIALS, message="Invalid old password")


def user_conflict() -> Err:
    return Err(kind=ErrorKind.CONFLICT, message="User already exist")


def unauthorized_request() -> Err:
    return Err(kind=ErrorKind.UNAUTHORIZED, message="Unauthorized request")


def invalid_access_token(reason: str | None = None) -> Err:
    return Err(kind=ErrorKind.UNAUTHORIZED, message="Invalid Access Token", reason=reason)


def invalid_refresh_token(reason: str | None = None) -> Err:
    return Err(kind=ErrorKind.UNAUTHORIZED, message="Invalid refresh token", reason=reason)


def refresh_token_reused() -> Err:
    return Err(
        kind=ErrorKind.UNAUTHORIZED,
        message="refresh token is expired or used",
        reason="mismatch",
    )


def token_issue_failed() -> Err:
    return Err(
        kind=ErrorKind.INTERNAL,
        message="Something went wrong while generating refresh and access token",
    )


def internal_error(message: str = "Something went wrong") -> Err:
    return Err(kind=ErrorKind.INTERNAL, message=message)
