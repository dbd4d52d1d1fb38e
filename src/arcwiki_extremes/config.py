# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to the wiki endpoint, cache, pool size, credentials and logging

from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="ARCWIKI_EXTREMES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Upstream wiki
    base_url: str = Field(default="https://arcwiki.mcd.blue/", description="Base URL of the upstream wiki")
    user_agent: str = Field(default="arcwiki-extremes/0.1", description="User-Agent sent with every request")
    request_timeout: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")

    # Fetch pipeline
    cache_dir: Path = Field(default=Path("/tmp/jscache"), description="Directory of the content-addressed cache")
    concurrency: int = Field(default=20, ge=1, description="Maximum number of chart pages fetched at once")
    max_retries: int = Field(default=2, ge=0, description="Retry budget per request (calls = max_retries + 2)")

    # Publishing
    bot_username: str = Field(default="", description="Wiki account used to publish the artifact")
    bot_password: SecretStr = Field(default=SecretStr(""), description="Password or bot password for the account")
    publish_title: str = Field(default="Template:NoteExtremes.json", description="Wiki page receiving the artifact")
    publish_summary: str = Field(default="Update note count extremes", description="Edit summary for publishing")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
