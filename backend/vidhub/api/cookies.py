"""Session cookie helpers."""

from __future__ import annotations

from fastapi import Response

from vidhub.auth.session import TokenPair
from vidhub.core.config import Settings

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


def set_session_cookies(response: Response, settings: Settings, tokens: TokenPair) -> None:
    """Set both token cookies; each expires with its token."""
    for key, value, max_age in (
        (ACCESS_COOKIE, tokens.access_token, tokens.access_expires_in),
        (REFRESH_COOKIE, tokens.refresh_token, tokens.refresh_expires_in),
    ):
        response.set_cookie(
            key=key,
            value=value,
            max_age=max_age,
            path="/",
            httponly=True,
            secure=settings.vidhub_cookie_secure,
            samesite=settings.vidhub_cookie_samesite,
        )


def clear_session_cookies(response: Response, settings: Settings) -> None:
    for key in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(
            key=key,
            path="/",
            httponly=True,
            secure=settings.vidhub_cookie_secure,
            samesite=settings.vidhub_cookie_samesite,
        )
