"""
Configuration loading and validation for datekit.

Provides a strongly typed Settings object (default timezone, log level) loaded
from environment variables with upfront validation.
"""

from datekit.config.settings import Settings, configure_logging, get_settings, reset_settings

__all__ = ["Settings", "configure_logging", "get_settings", "reset_settings"]
