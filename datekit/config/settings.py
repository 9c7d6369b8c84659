"""
Configuration settings for datekit.

**Conceptual**: This module provides strongly-typed configuration objects that
load from environment variables (via .env files). All settings are validated
when they are constructed, so a typo in a timezone name fails immediately
instead of surfacing later as a confusing localization error.

**What is configurable?**
  - The timezone attached to naive date/time values. Every point in time the
    date helpers hand out is timezone-aware; a naive `datetime(2024, 1, 3)`
    is interpreted in this zone.
  - The log level of the `datekit` logger.

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Load .env from project root (dev/local environments); missing file is fine
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


DEFAULT_TIMEZONE = "UTC"
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    """
    Global settings for datekit.

    **Usage pattern**:
      ```python
      from datekit.config.settings import get_settings

      settings = get_settings()
      settings.default_timezone  # "UTC" unless DATEKIT_DEFAULT_TIMEZONE is set
      ```

    Attributes:
        default_timezone: IANA zone name attached to naive date/time values
                          (e.g. "UTC", "America/New_York").
        log_level: Level name applied to the `datekit` logger by
                   configure_logging() (e.g. "WARNING", "DEBUG").
    """
    default_timezone: str = DEFAULT_TIMEZONE
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self):
        """Validate settings after initialization."""
        if not self.default_timezone:
            raise ValueError(
                "DATEKIT_DEFAULT_TIMEZONE must not be empty. "
                "Use an IANA zone name such as 'UTC' or 'Europe/London'."
            )
        try:
            ZoneInfo(self.default_timezone)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            # OSError: a zone directory such as "America" rather than a zone file
            raise ValueError(
                f"DATEKIT_DEFAULT_TIMEZONE is not a known timezone, got: {self.default_timezone}"
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(
                f"DATEKIT_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got: {self.log_level}"
            )

    @property
    def tzinfo(self) -> ZoneInfo:
        """The default timezone as a tzinfo object."""
        return ZoneInfo(self.default_timezone)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Load settings from environment variables.

        **Environment variables**:
          - DATEKIT_DEFAULT_TIMEZONE (optional): Zone for naive values.
            Defaults to "UTC" if not set.
          - DATEKIT_LOG_LEVEL (optional): Level for the `datekit` logger.
            Defaults to "WARNING" if not set.

        Returns:
            Settings object with values loaded from environment.

        Raises:
            ValueError: If either variable holds an invalid value.

        Usage example:
            >>> # In .env file:
            >>> # DATEKIT_DEFAULT_TIMEZONE=Europe/Berlin
            >>>
            >>> settings = Settings.from_env()
            >>> settings.default_timezone
            'Europe/Berlin'
        """
        default_timezone = os.getenv("DATEKIT_DEFAULT_TIMEZONE", DEFAULT_TIMEZONE)
        log_level = os.getenv("DATEKIT_LOG_LEVEL", DEFAULT_LOG_LEVEL)

        return cls(
            default_timezone=default_timezone.strip(),
            log_level=log_level.strip().upper(),
        )


# Lazily-loaded settings singleton.
# Tests can call reset_settings() after changing the environment.
_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings singleton.

    Settings are loaded from the environment on first call, then cached for
    reuse. Code that needs different settings (tests in particular) can build
    a Settings object directly instead of going through this function.

    Returns:
        Global Settings singleton.

    Raises:
        ValueError: If the environment holds invalid values.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = Settings.from_env()

    return _default_settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _default_settings
    _default_settings = None


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Apply the configured log level to the `datekit` logger.

    The package never installs handlers of its own beyond a NullHandler;
    applications decide where records go. This only sets the threshold.

    Args:
        settings: Settings to apply. Uses get_settings() when omitted.

    Returns:
        The `datekit` logger.
    """
    settings = settings or get_settings()
    logger = logging.getLogger("datekit")
    logger.setLevel(settings.log_level.upper())
    return logger
