"""User REST routes: session lifecycle, profile and channels."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Request
from fastapi.responses import JSONResponse

from vidhub.api.cookies import REFRESH_COOKIE
from vidhub.api.cookies import clear_session_cookies
from vidhub.api.cookies import set_session_cookies
from vidhub.api.deps import codec_dep
from vidhub.api.deps import require_current_user
from vidhub.api.deps import settings_dep
from vidhub.auth.http import api_response
from vidhub.auth.http import error_response
from vidhub.auth.models import ChangePasswordRequest
from vidhub.auth.models import LoginRequest
from vidhub.auth.models import RefreshRequest
from vidhub.auth.models import RegisterRequest
from vidhub.auth.repository import UserRecord
from vidhub.auth.service import change_password
from vidhub.auth.service import login_user
from vidhub.auth.service import logout_user
from vidhub.auth.service import refresh_session
from vidhub.auth.service import register_user
from vidhub.core.config import Settings
from vidhub.core.result import Err
from vidhub.core.result import Result
from vidhub.core.tokens import TokenCodec
from vidhub.users.models import AvatarRequest
from vidhub.users.models import CoverImageRequest
from vidhub.users.models import UpdateAccountRequest
from vidhub.users.service import channel_profile
from vidhub.users.service import subscribe
from vidhub.users.service import unsubscribe
from vidhub.users.service import update_account
from vidhub.users.service import update_image

router = APIRouter(prefix="/api/v1/users")


def _respond(result: Result[object], *, message: str, status_code: int = 200, key: str | None = None) -> JSONResponse:
    if isinstance(result, Err):
        return error_response(result)
    data = {key: result.value} if key else result.value
    return JSONResponse(
        status_code=status_code,
        content=api_response(status_code=status_code, data=data, message=message),
    )


@router.post("/register")
def register(payload: RegisterRequest, settings: Settings = Depends(settings_dep)) -> JSONResponse:
    """Create an account."""
    result = register_user(settings=settings, payload=payload)
    return _respond(result, status_code=201, message="User registered successfully")


@router.post("/login")
def login(
    payload: LoginRequest,
    settings: Settings = Depends(settings_dep),
    codec: TokenCodec = Depends(codec_dep),
) -> JSONResponse:
    """Authenticate and open a session; tokens go to cookies and the body."""
    result = login_user(settings=settings, codec=codec, payload=payload)
    if isinstance(result, Err):
        return error_response(result)

    session = result.value
    response = JSONResponse(
        status_code=200,
        content=api_response(
            status_code=200,
            data={
                "user": session.user,
                "accessToken": session.tokens.access_token,
                "refreshToken": session.tokens.refresh_token,
            },
            message="User logged In Successfully",
        ),
    )
    set_session_cookies(response, settings, session.tokens)
    return response


@router.post("/logout")
def logout(
    user: UserRecord = Depends(require_current_user),
    settings: Settings = Depends(settings_dep),
) -> JSONResponse:
    """End the caller's session and clear cookies."""
    result = logout_user(settings=settings, user_id=user.id)
    if isinstance(result, Err):
        return error_response(result)
    response = JSONResponse(
        status_code=200,
        content=api_response(status_code=200, data={}, message="User logged out Successfully"),
    )
    clear_session_cookies(response, settings)
    return response


@router.post("/refresh-token")
def refresh_token(
    request: Request,
    payload: RefreshRequest | None = None,
    settings: Settings = Depends(settings_dep),
    codec: TokenCodec = Depends(codec_dep),
) -> JSONResponse:
    """Rotate the refresh token and issue a new pair."""
    presented = request.cookies.get(REFRESH_COOKIE) or (payload.refresh_token if payload else None)
    result = refresh_session(settings=settings, codec=codec, refresh_token=presented)
    if isinstance(result, Err):
        return error_response(result)

    tokens = result.value
    response = JSONResponse(
        status_code=200,
        content=api_response(
            status_code=200,
            data={"accessToken": tokens.access_token, "refreshToken": tokens.refresh_token},
            message="Access Token refreshed Successfully",
        ),
    )
    set_session_cookies(response, settings, tokens)
    return response


@router.post("/update-password")
def update_password(
    payload: ChangePasswordRequest,
    user: UserRecord = Depends(require_current_user),
    settings: Settings = Depends(settings_dep),
) -> JSONResponse:
    result = change_password(settings=settings, user_id=user.id, payload=payload)
    if isinstance(result, Err):
        return error_response(result)
    return JSONResponse(
        status_code=200,
        content=api_response(status_code=200, data={}, message="Password changed Successfully"),
    )


@router.get("/current-user")
def get_current_user(user: UserRecord = Depends(require_current_user)) -> JSONResponse:
    return JSONResponse(
        status_code=200,
        content=api_response(
            status_code=200,
            data={"user": user.public_view()},
            message="Current User fetched Successfully",
        ),
    )


@router.post("/update-account")
def update_account_details(
    payload: UpdateAccountRequest,
    user: UserRecord = Depends(require_current_user),
    settings: Settings = Depends(settings_dep),
) -> JSONResponse:
    result = update_account(settings=settings, user=user, payload=payload)
    return _respond(result, key="user", message="User updated Successfully")


@router.post("/update-avatar")
def update_avatar(
    payload: AvatarRequest,
    user: UserRecord = Depends(require_current_user),
    settings: Settings = Depends(settings_dep),
) -> JSONResponse:
    result = update_image(settings=settings, user=user, column="avatar", url=payload.avatar)
    return _respond(result, key="user", message="Avatar updated Successfully")


@router.post("/update-coverimage")
def update_cover_image(
    payload: CoverImageRequest,
    user: UserRecord = Depends(require_current_user),
    settings: Settings = Depends(settings_dep),
) -> JSONResponse:
    result = update_image(settings=settings, user=user, column="cover_image", url=payload.cover_image)
    return _respond(result, key="user", message="coverImage updated Successfully")


@router.post("/subscriptions/{username}")
def subscribe_to_channel(
    username: str,
    user: UserRecord = Depends(require_current_user),
    settings: Settings = Depends(settings_dep),
) -> JSONResponse:
    result = subscribe(settings=settings, user=user, channel_username=username)
    return _respond(result, message="Subscribed Successfully")


@router.delete("/subscriptions/{username}")
def unsubscribe_from_channel(
    username: str,
    user: UserRecord = Depends(require_current_user),
    settings: Settings = Depends(settings_dep),
) -> JSONResponse:
    result = unsubscribe(settings=settings, user=user, channel_username=username)
    return _respond(result, message="Unsubscribed Successfully")


@router.get("/channel/{username}")
def get_channel(
    username: str,
    user: UserRecord = Depends(require_current_user),
    settings: Settings = Depends(settings_dep),
) -> JSONResponse:
    result = channel_profile(settings=settings, viewer=user, username=username)
    return _respond(result, key="channel", message="User channel fetched Successfully")
