"""Application settings for backend runtime and tests."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic import model_validator
from pydantic_settings import BaseSettings

MIN_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Typed settings loaded from environment variables or explicit kwargs."""

    vidhub_app_env: str = "dev"
    vidhub_app_host: str = "127.0.0.1"
    vidhub_app_port: int = Field(default=8000, ge=1)

    vidhub_access_token_secret: str = Field(min_length=MIN_SECRET_LENGTH)
    vidhub_access_token_expire_seconds: int = Field(default=900, ge=1)
    vidhub_refresh_token_secret: str = Field(min_length=MIN_SECRET_LENGTH)
    vidhub_refresh_token_expire_seconds: int = Field(default=864000, ge=1)

    vidhub_sqlite_path: str = "vidhub.db"
    vidhub_sqlite_timeout_seconds: float = Field(default=5.0, gt=0)
    vidhub_cors_allow_origins: str = "*"

    vidhub_cookie_secure: bool = True
    vidhub_cookie_samesite: Literal["lax", "strict", "none"] = "lax"

    vidhub_generic_login_errors: bool = False
    vidhub_revoke_session_on_refresh_reuse: bool = False

    vidhub_log_level: str = "INFO"

    @model_validator(mode="after")
    def validate_token_windows(self) -> "Settings":
        """Each token kind needs its own secret; refresh must outlive access."""
        if self.vidhub_access_token_secret == self.vidhub_refresh_token_secret:
            raise ValueError(
                "VIDHUB_ACCESS_TOKEN_SECRET and VIDHUB_REFRESH_TOKEN_SECRET must differ"
            )
        if self.vidhub_refresh_token_expire_seconds <= self.vidhub_access_token_expire_seconds:
            raise ValueError(
                "VIDHUB_REFRESH_TOKEN_EXPIRE_SECONDS must be greater than "
                "VIDHUB_ACCESS_TOKEN_EXPIRE_SECONDS"
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.vidhub_cors_allow_origins.split(",") if origin.strip()]


def load_settings() -> Settings:
    """Load settings from process environment."""
    return Settings()
