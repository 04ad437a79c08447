"""Pydantic models for account and session requests."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class RegisterRequest(BaseModel):
    """POST /api/v1/users/register request body."""

    model_config = ConfigDict(populate_by_name=True)

    username: str
    email: str
    fullname: str
    password: str
    avatar: str = ""
    cover_image: str = Field(default="", alias="coverImage")


class LoginRequest(BaseModel):
    """POST /api/v1/users/login request body."""

    username: str | None = None
    email: str | None = None
    password: str


class RefreshRequest(BaseModel):
    """POST /api/v1/users/refresh-token request body; the cookie wins when both are sent."""

    model_config = ConfigDict(populate_by_name=True)

    refresh_token: str | None = Field(default=None, alias="refreshToken")


class ChangePasswordRequest(BaseModel):
    """POST /api/v1/users/update-password request body."""

    model_config = ConfigDict(populate_by_name=True)

    old_password: str = Field(alias="oldPassword")
    new_password: str = Field(alias="newPassword")
