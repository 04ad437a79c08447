"""Access-token checks for protected operations.

Access tokens are verified on signature and expiry only; the session store is
not consulted, so a token stays usable until it expires even after logout.
"""

from __future__ import annotations

from datetime import datetime

from vidhub.auth.errors import invalid_access_token
from vidhub.auth.errors import unauthorized_request
from vidhub.core.result import Err
from vidhub.core.result import Ok
from vidhub.core.result import Result
from vidhub.core.tokens import TokenCodec
from vidhub.core.tokens import TokenKind


def extract_access_token(*, cookie_token: str | None, authorization: str | None) -> str | None:
    """Prefer the ``accessToken`` cookie, then an ``Authorization: Bearer`` header."""
    if cookie_token:
        return cookie_token
    if authorization is None:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def authenticate(codec: TokenCodec, access_token: str | None, *, now: datetime | None = None) -> Result[int]:
    """Resolve the caller's user id from an access token."""
    if not access_token:
        return unauthorized_request()

    verified = codec.verify(TokenKind.ACCESS, access_token, now=now)
    if isinstance(verified, Err):
        return invalid_access_token(reason=verified.reason)

    try:
        return Ok(int(verified.value))
    except ValueError:
        return invalid_access_token(reason="malformed")
