"""
Configuration management for the strata_fs change-detection system.

Handles environment variables and .env loading, and provides default
settings with validation for logging and watch-session teardown.
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from strata_fs.models.exceptions import ConfigurationError


class LogLevel(str, Enum):
    """Logging level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class WatchConfig(BaseSettings):
    """
    Central configuration class for strata_fs.

    Every option can be overridden with a ``STRATA_FS_`` prefixed environment
    variable or a ``.env`` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="STRATA_FS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Watch Session Configuration ===
    observer_join_timeout: float = Field(
        default=5.0, ge=0.1, le=60.0, description="Seconds to wait for the observer thread on teardown"
    )

    # === Logging Configuration ===
    log_level: LogLevel = Field(default=LogLevel.INFO, description="Logging level")
    log_file: Path | None = Field(default=None, description="Log file path (stderr if None)")
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Log message format"
    )

    # === Development Configuration ===
    debug_mode: bool = Field(default=False, description="Enable debug mode with verbose logging")

    @field_validator('log_file', mode='before')
    @classmethod
    def validate_log_file(cls, v):
        """Treat an empty value as no log file."""
        if v is None or v == "":
            return None
        return Path(v)

    @model_validator(mode='after')
    def validate_log_format(self):
        """Ensure the log format renders the message."""
        if "%(message)" not in self.log_format:
            raise ConfigurationError(
                "log_format must include %(message)s",
                config_key="log_format",
                expected_type="logging format string",
                actual_value=self.log_format,
            )
        return self

    @property
    def effective_log_level(self) -> str:
        """Get the log level after applying debug mode."""
        if self.debug_mode:
            return LogLevel.DEBUG.value
        return LogLevel(self.log_level).value

    def get_log_config(self) -> dict[str, Any]:
        """Get logging configuration dictionary."""
        level = self.effective_log_level
        config = {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"standard": {"format": self.log_format}},
            "handlers": {
                "default": {
                    "level": level,
                    "formatter": "standard",
                    "class": "logging.StreamHandler" if not self.log_file else "logging.FileHandler",
                }
            },
            "loggers": {"strata_fs": {"handlers": ["default"], "level": level, "propagate": False}},
        }

        if self.log_file:
            config["handlers"]["default"]["filename"] = str(self.log_file)

        return config


# Global configuration instance
_config: WatchConfig | None = None


def get_config() -> WatchConfig:
    """
    Get the global configuration instance.

    Creates a new instance on first call and reuses it for subsequent calls.
    """
    global _config
    if _config is None:
        _config = WatchConfig()
    return _config


def reload_config() -> WatchConfig:
    """Force reload the configuration from environment/files."""
    global _config
    _config = WatchConfig()
    return _config


def set_config(config: WatchConfig) -> None:
    """
    Set a custom configuration instance.

    Primarily used for testing.
    """
    global _config
    _config = config
