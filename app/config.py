"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone (or UTC+HH:MM offset) used for schedule comparisons",
    )
    client_url: str = Field(
        default="http://localhost:5173",
        description="Origin of the web client allowed through CORS",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    razorpay_key_id: str | None = Field(
        default=None,
        description="Key id used to authenticate against the payment provider",
    )
    razorpay_key_secret: str | None = Field(
        default=None,
        description="Shared secret for provider authentication and signature checks",
    )
    razorpay_api_base_url: str = Field(
        default="https://api.razorpay.com/v1",
        description="Base URL of the payment provider REST API",
    )
    payment_currency: str = Field(
        default="INR", min_length=3, max_length=3, description="ISO currency code"
    )
    payment_timeout_seconds: float = Field(
        default=10.0, gt=0, description="Timeout applied to payment provider calls"
    )

    @model_validator(mode="after")
    def _validate_razorpay_pair(self) -> "Settings":
        if bool(self.razorpay_key_id) ^ bool(self.razorpay_key_secret):
            raise ValueError(
                "RAZORPAY_KEY_ID and RAZORPAY_KEY_SECRET must both be provided to enable payments"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
