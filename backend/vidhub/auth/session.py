"""Token pair issuance: mint access/refresh tokens and commit the session."""

from __future__ import annotations

import hashlib
import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from datetime import timezone

from vidhub.auth.errors import refresh_token_reused
from vidhub.auth.errors import token_issue_failed
from vidhub.auth.repository import ANY_PREVIOUS
from vidhub.auth.repository import UserRecord
from vidhub.auth.repository import replace_refresh_token
from vidhub.core.config import Settings
from vidhub.core.result import Ok
from vidhub.core.result import Result
from vidhub.core.tokens import TokenCodec
from vidhub.core.tokens import TokenKind
from vidhub.core.tokens import utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TokenPair:
    access_token: str
    refresh_token: str
    access_expires_in: int
    refresh_expires_in: int


def to_utc_iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def hash_refresh_token(plain_token: str) -> str:
    return hashlib.sha256(plain_token.encode("utf-8")).hexdigest()


def issue_token_pair(
    *,
    settings: Settings,
    codec: TokenCodec,
    user: UserRecord,
    expected_previous: str | None | object = ANY_PREVIOUS,
) -> Result[TokenPair]:
    """Create a token pair for ``user`` and commit the new refresh digest.

    Tokens are only returned after the commit succeeded. When
    ``expected_previous`` is a digest (or None) and the stored value moved on
    in the meantime, nothing is written and the pair is discarded.
    """
    now = utc_now()
    access_token = codec.issue(
        TokenKind.ACCESS,
        user.id,
        now=now,
        claims={"username": user.username, "email": user.email, "fullname": user.fullname},
    )
    refresh_token = codec.issue(TokenKind.REFRESH, user.id, now=now)

    try:
        committed = replace_refresh_token(
            settings=settings,
            user_id=user.id,
            token_hash=hash_refresh_token(refresh_token),
            expected_previous=expected_previous,
            updated_at=to_utc_iso(now),
        )
    except sqlite3.Error:
        logger.exception("session commit failed for user_id=%s", user.id)
        return token_issue_failed()

    if not committed:
        if expected_previous is ANY_PREVIOUS:
            # The user row vanished between lookup and commit.
            logger.error("session commit matched no row for user_id=%s", user.id)
            return token_issue_failed()
        logger.warning("concurrent refresh lost the race for user_id=%s", user.id)
        return refresh_token_reused()

    return Ok(
        TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            access_expires_in=codec.lifetime(TokenKind.ACCESS),
            refresh_expires_in=codec.lifetime(TokenKind.REFRESH),
        )
    )
