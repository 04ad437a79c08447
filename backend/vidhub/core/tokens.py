"""JWT access/refresh token codec.

Each token kind has its own secret and lifetime. The codec holds no mutable
state, so one instance can be shared by every request.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime
from datetime import timedelta
from datetime import timezone
from enum import Enum
from typing import Any

import jwt

from vidhub.core.config import Settings
from vidhub.core.result import Err
from vidhub.core.result import ErrorKind
from vidhub.core.result import Ok
from vidhub.core.result import Result

ALGORITHM = "HS256"


class TokenKind(str, Enum):
    ACCESS = "access"
    REFRESH = "refresh"


class TokenRejection(str, Enum):
    """Why ``TokenCodec.verify`` refused a token."""

    MALFORMED = "malformed"
    EXPIRED = "expired"


@dataclass(frozen=True, slots=True)
class TokenPolicy:
    secret: str
    expires_in_seconds: int


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TokenCodec:
    """Sign and verify bearer tokens for both kinds."""

    def __init__(self, *, access: TokenPolicy, refresh: TokenPolicy) -> None:
        self._policies = {TokenKind.ACCESS: access, TokenKind.REFRESH: refresh}

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            access=TokenPolicy(
                secret=settings.vidhub_access_token_secret,
                expires_in_seconds=settings.vidhub_access_token_expire_seconds,
            ),
            refresh=TokenPolicy(
                secret=settings.vidhub_refresh_token_secret,
                expires_in_seconds=settings.vidhub_refresh_token_expire_seconds,
            ),
        )

    def lifetime(self, kind: TokenKind) -> int:
        return self._policies[kind].expires_in_seconds

    def issue(
        self,
        kind: TokenKind,
        subject_id: int | str,
        *,
        now: datetime | None = None,
        claims: dict[str, Any] | None = None,
    ) -> str:
        """Return a signed token for ``subject_id`` with sub/iat/exp/jti/typ claims."""
        policy = self._policies[kind]
        issued_at = now or utc_now()
        payload: dict[str, Any] = dict(claims or {})
        payload.update(
            {
                "sub": str(subject_id),
                "typ": kind.value,
                "jti": secrets.token_urlsafe(16),
                "iat": int(issued_at.timestamp()),
                "exp": int((issued_at + timedelta(seconds=policy.expires_in_seconds)).timestamp()),
            }
        )
        return jwt.encode(payload, policy.secret, algorithm=ALGORITHM)

    def decode(self, kind: TokenKind, token: str, *, now: datetime | None = None) -> Result[dict[str, Any]]:
        """Check signature, kind and expiry, returning the full claim set."""
        policy = self._policies[kind]
        try:
            payload = jwt.decode(
                token,
                policy.secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidTokenError:
            return _rejected(kind, TokenRejection.MALFORMED)

        exp = payload.get("exp")
        sub = payload.get("sub")
        if not isinstance(exp, int) or not isinstance(sub, str) or not sub:
            return _rejected(kind, TokenRejection.MALFORMED)
        if payload.get("typ") != kind.value:
            return _rejected(kind, TokenRejection.MALFORMED)

        now_ts = int((now or utc_now()).astimezone(timezone.utc).timestamp())
        if now_ts >= exp:
            return _rejected(kind, TokenRejection.EXPIRED)
        return Ok(payload)

    def verify(self, kind: TokenKind, token: str, *, now: datetime | None = None) -> Result[str]:
        """Return the subject id of a valid token."""
        decoded = self.decode(kind, token, now=now)
        if isinstance(decoded, Err):
            return decoded
        return Ok(decoded.value["sub"])


def _rejected(kind: TokenKind, rejection: TokenRejection) -> Err:
    return Err(
        kind=ErrorKind.UNAUTHORIZED,
        message=f"{kind.value} token is {rejection.value}",
        reason=rejection.value,
    )
