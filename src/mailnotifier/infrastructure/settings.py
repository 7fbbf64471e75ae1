"""Application settings using Pydantic Settings for configuration management."""

from functools import lru_cache

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mailnotifier.domain.errors import ConfigError

REQUIRED_ENV_HINTS = {
    "gmail_user": "GMAIL_USER (gmail address)",
    "gmail_reader": "GMAIL_READER (app password)",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Account
    gmail_user: str
    gmail_reader: SecretStr

    # IMAP
    imap_host: str = "imap.gmail.com"
    imap_port: int = 993
    imap_folder: str = "INBOX"

    # Polling
    poll_interval_seconds: float = Field(default=15.0, gt=0)
    poll_fetch_count: int = Field(default=10, ge=1)
    body_length: int = Field(default=500, ge=0)
    cursor_path: str = ".gmail_last_uid.txt"

    # Notifications
    notification_app_name: str = "Gmail"
    notification_expire_ms: int = Field(default=10_000, ge=0)

    # Logging
    log_level: str = "INFO"

    @field_validator("gmail_user", "gmail_reader")
    @classmethod
    def _not_blank(cls, value):
        raw = value.get_secret_value() if isinstance(value, SecretStr) else value
        if not raw.strip():
            raise ValueError("must not be empty")
        return value


def load_settings(**overrides) -> Settings:
    """Build settings, turning validation failures into a ConfigError."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        problems = []
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else "settings"
            if field in REQUIRED_ENV_HINTS and err["type"] in ("missing", "value_error"):
                problems.append(f"{REQUIRED_ENV_HINTS[field]} environment variable must be set")
            else:
                problems.append(f"{field}: {err['msg']}")
        raise ConfigError("; ".join(problems)) from e


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
