"""Account and session lifecycle."""

from vidhub.auth.http import ApiError
from vidhub.auth.http import handle_api_error
from vidhub.auth.http import handle_http_exception
from vidhub.auth.models import LoginRequest
from vidhub.auth.models import RegisterRequest
from vidhub.auth.service import login_user
from vidhub.auth.service import logout_user
from vidhub.auth.service import refresh_session
from vidhub.auth.service import register_user
from vidhub.auth.service import startup_schema

__all__ = [
    "ApiError",
    "LoginRequest",
    "RegisterRequest",
    "handle_api_error",
    "handle_http_exception",
    "login_user",
    "logout_user",
    "refresh_session",
    "register_user",
    "startup_schema",
]
