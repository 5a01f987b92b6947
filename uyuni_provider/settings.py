"""
Uyuni Provider Settings - Configuration management using Pydantic Settings.

Loads configuration from environment variables and .env files.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Find project root (where .env file is located)
PROJECT_ROOT = Path(__file__).parent.parent


class UyuniSettings(BaseSettings):
    """
    Uyuni provider configuration settings.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in project root
    3. Default values (lowest priority)

    Connection values (host, username, password) are only the environment
    fallbacks; explicit provider configuration always wins over them.
    """

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="UYUNI_",  # All provider env vars must start with UYUNI_
    )

    # Connection Configuration
    host: str = Field(
        default="",
        description="Uyuni server host name (env: UYUNI_HOST)",
    )

    username: str = Field(
        default="",
        description="Uyuni API user (env: UYUNI_USERNAME)",
    )

    password: str = Field(
        default="",
        description="Uyuni API password (env: UYUNI_PASSWORD)",
    )

    request_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for Uyuni API calls (env: UYUNI_REQUEST_TIMEOUT)",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR) (env: UYUNI_LOG_LEVEL)",
    )


# Global settings instance
_settings: UyuniSettings | None = None


def get_settings() -> UyuniSettings:
    """
    Get the global settings instance.

    Creates the settings instance on first call, then returns cached instance.

    Returns:
        UyuniSettings instance
    """
    global _settings
    if _settings is None:
        _settings = UyuniSettings()
    return _settings


def reload_settings() -> UyuniSettings:
    """
    Reload settings from environment/files.

    Useful for testing or when .env file changes.

    Returns:
        Fresh UyuniSettings instance
    """
    global _settings
    _settings = UyuniSettings()
    return _settings
