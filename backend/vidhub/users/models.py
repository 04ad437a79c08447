"""Pydantic models for profile requests."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class UpdateAccountRequest(BaseModel):
    """POST /api/v1/users/update-account request body."""

    fullname: str | None = None
    email: str | None = None
    username: str | None = None


class AvatarRequest(BaseModel):
    avatar: str | None = None


class CoverImageRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cover_image: str | None = Field(default=None, alias="coverImage")
