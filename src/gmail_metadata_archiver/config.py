"""Configuration management for Gmail Metadata Archiver.

This module handles application configuration using Pydantic settings.
Configuration can be loaded from environment variables or .env files.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CREDENTIALS_PATH = Path("credentials.json")


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Settings can be overridden via environment variables with the
    GMAIL_ARCHIVER_ prefix (e.g., GMAIL_ARCHIVER_DATA_DIR). The credentials
    path and the impersonated mailbox additionally honour the unprefixed
    CREDENTIALS_PATH and GMAIL_IMPERSONATE_USER variables.
    """

    model_config = SettingsConfigDict(
        env_prefix="GMAIL_ARCHIVER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Credentials
    credentials_path: Path | None = Field(
        default=None,
        validation_alias=AliasChoices("CREDENTIALS_PATH", "GMAIL_ARCHIVER_CREDENTIALS_PATH"),
        description=(
            "Path to the OAuth client or service-account JSON file. When unset the "
            "command-line argument is used, then credentials.json."
        ),
    )
    impersonate_user: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GMAIL_IMPERSONATE_USER", "GMAIL_ARCHIVER_IMPERSONATE_USER"),
        description="Mailbox a service account acts on behalf of (domain-wide delegation)",
    )
    token_path: Path = Field(
        default=Path("token.json"),
        description="Path where the OAuth user token is cached between runs",
    )

    # Gmail Configuration
    gmail_scope: str = Field(
        default="https://www.googleapis.com/auth/gmail.readonly",
        description="OAuth scope requested for Gmail access",
    )
    gmail_user_id: str = Field(
        default="me",
        description="Gmail user id the API calls are made for",
    )
    gmail_page_size: int = Field(
        default=100,
        description="Number of message ids requested per list page",
    )
    metadata_headers: list[str] = Field(
        default_factory=lambda: ["From", "To", "Subject", "Date"],
        description="Headers kept when fetching message metadata",
    )

    # Archive
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory receiving one JSON file per message",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
