"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

# The upstream gateway rejects requests carrying more messages than this.
GATEWAY_MAX_BATCH_SIZE = 100


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./fanout.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    service_role_key: str = Field(
        description="Trusted service credential accepted as a bearer token",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify user JWT bearer tokens", min_length=1
    )
    push_gateway_url: str = Field(
        default="https://exp.host/--/api/v2/push/send",
        description="Endpoint of the upstream push gateway",
    )
    push_access_token: str | None = Field(
        default=None,
        description="Access token sent to the push gateway as a bearer credential",
    )
    push_project_id: str | None = Field(
        default=None,
        description="Project identifier forwarded to the push gateway",
    )
    push_batch_size: int = Field(
        default=GATEWAY_MAX_BATCH_SIZE,
        description="Number of messages sent per gateway request",
        gt=0,
        le=GATEWAY_MAX_BATCH_SIZE,
    )
    push_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every gateway request",
        gt=0,
    )
    rate_limit_max_calls: int = Field(
        default=1000,
        description="Maximum dispatch calls accepted per tenant within one window",
        gt=0,
    )
    rate_limit_window_seconds: int = Field(
        default=60,
        description="Length of the per-tenant rate limit window",
        gt=0,
    )
    token_freshness_days: int = Field(
        default=90,
        description="Device tokens unused for longer than this are ignored",
        gt=0,
    )
    default_locale: str = Field(
        default="en",
        description="Locale used when a recipient has none or an unsupported one",
    )

    @model_validator(mode="after")
    def _validate_gateway_url(self) -> "Settings":
        if not self.push_gateway_url.startswith(("http://", "https://")):
            raise ValueError("PUSH_GATEWAY_URL must be an http(s) URL")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["GATEWAY_MAX_BATCH_SIZE", "Settings", "get_settings", "reset_settings_cache"]
