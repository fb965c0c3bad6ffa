# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to the wiki endpoint, cache location, logging and batch settings

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="LOREKEEPER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Wiki Configuration
    base_url: str = Field(
        default="https://baldursgate.fandom.com", description="Base URL of the MediaWiki/Fandom wiki to read from"
    )
    user_agent: str = Field(
        default="Lorekeeper/0.1 (+https://github.com/lorekeeper/lorekeeper)",
        description="User-Agent header sent with every wiki request",
    )

    # Cache Configuration
    cache_dir: Path = Field(default=Path("_cache"), description="Directory holding cached API responses and images.json")
    cache_promote_disk_hits: bool = Field(
        default=False, description="Copy responses read from the disk cache into the in-memory cache"
    )

    # Batch Configuration
    concurrency: int = Field(default=5, ge=1, description="Maximum number of pages extracted at the same time")
    retry_attempts: int = Field(default=3, ge=1, description="Attempts per page on transient transport errors")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] | None = Field(
        default=None, description="Logging output mode, auto-detected from the terminal when unset"
    )

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
