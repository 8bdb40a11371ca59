"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///./notifyhub.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        default="change-me",
        description="Secret key used to verify JWT access tokens",
        min_length=1,
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to evaluate quiet hours and timestamps",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )

    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis URL used as the Celery broker and job record store",
    )
    queue_max_attempts: int = Field(
        default=3,
        description="Maximum delivery attempts per job, including the first one",
        gt=0,
    )
    queue_backoff_seconds: float = Field(
        default=1.0,
        description="Initial delay of the exponential retry backoff",
        gt=0,
    )
    queue_keep_completed: int = Field(
        default=100,
        description="Number of completed job records kept per channel",
        ge=0,
    )
    queue_keep_failed: int = Field(
        default=50,
        description="Number of dead-lettered job records kept per channel",
        ge=0,
    )

    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending notification emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of notification emails",
        min_length=3,
    )
    email_mock_mode: bool = Field(
        default=False,
        description="Log outgoing emails instead of calling SendGrid",
    )

    twilio_account_sid: str | None = Field(default=None, description="Twilio account SID")
    twilio_auth_token: str | None = Field(default=None, description="Twilio auth token")
    twilio_phone_number: str | None = Field(
        default=None,
        description="Phone number used as the sender of SMS notifications",
    )
    sms_mock_mode: bool = Field(
        default=False,
        description="Log outgoing SMS messages instead of calling Twilio",
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    @model_validator(mode="after")
    def _validate_twilio_credentials(self) -> "Settings":
        if bool(self.twilio_account_sid) ^ bool(self.twilio_auth_token):
            raise ValueError(
                "TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN must both be provided to enable SMS"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["LOG_FORMAT", "Settings", "get_settings", "reset_settings_cache"]
