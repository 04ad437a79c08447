"""Dependency helpers shared by API routers."""

from __future__ import annotations

from fastapi import Depends
from fastapi import Header
from fastapi import Request

from vidhub import runtime
from vidhub.api.cookies import ACCESS_COOKIE
from vidhub.auth.guard import extract_access_token
from vidhub.auth.http import ApiError
from vidhub.auth.repository import UserRecord
from vidhub.auth.service import current_user
from vidhub.core.config import Settings
from vidhub.core.result import Err
from vidhub.core.tokens import TokenCodec


def settings_dep() -> Settings:
    return runtime.get_settings()


def codec_dep() -> TokenCodec:
    return runtime.get_codec()


def require_current_user(
    request: Request,
    authorization: str | None = Header(default=None, alias="Authorization"),
    settings: Settings = Depends(settings_dep),
    codec: TokenCodec = Depends(codec_dep),
) -> UserRecord:
    """Read the access token from cookie or Bearer header and load the caller."""
    token = extract_access_token(
        cookie_token=request.cookies.get(ACCESS_COOKIE),
        authorization=authorization,
    )
    result = current_user(settings=settings, codec=codec, access_token=token)
    if isinstance(result, Err):
        raise ApiError(result)
    return result.value
